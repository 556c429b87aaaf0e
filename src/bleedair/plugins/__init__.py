"""Host integration plugins."""

from bleedair.plugins.pneumatic_plugin import PneumaticPlugin

__all__ = ["PneumaticPlugin"]
