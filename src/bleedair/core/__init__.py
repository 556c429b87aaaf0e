"""Core infrastructure: logging, configuration, messaging and plugins."""
