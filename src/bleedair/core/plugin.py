"""Plugin interface used to embed simulated systems in a host simulation.

A host loads plugins, hands each a PluginContext, then calls update(dt)
once per frame in update_priority order. Plugins talk to each other and to
the host only through the message queue.

Typical usage example:
    from bleedair.core.plugin import IPlugin, PluginMetadata, PluginType

    class BleedPlugin(IPlugin):
        def get_metadata(self) -> PluginMetadata:
            return PluginMetadata(
                name="bleed_plugin",
                version="0.1.0",
                author="BleedAir Team",
                plugin_type=PluginType.AIRCRAFT_SYSTEM,
                provides=["pneumatic"],
            )
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from bleedair.core.logging_system import get_logger

logger = get_logger(__name__)


class PluginType(Enum):
    """Plugin categories."""

    CORE = "core"
    AIRCRAFT_SYSTEM = "aircraft"


@dataclass
class PluginMetadata:
    """Description of a plugin.

    Attributes:
        name: Unique plugin identifier.
        version: Semantic version string.
        author: Author name or organization.
        plugin_type: Category of plugin.
        dependencies: Plugins that must be loaded first.
        provides: Services registered by this plugin.
        optional: Whether the aircraft can run without it.
        update_priority: Lower values update earlier in the frame (0-1000).
        description: Human-readable description.
    """

    name: str
    version: str
    author: str
    plugin_type: PluginType
    dependencies: list[str] = field(default_factory=list)
    provides: list[str] = field(default_factory=list)
    optional: bool = False
    update_priority: int = 100
    description: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Plugin name cannot be empty")
        if not self.version:
            raise ValueError("Plugin version cannot be empty")
        if not self.author:
            raise ValueError("Plugin author cannot be empty")
        if self.update_priority < 0 or self.update_priority > 1000:
            raise ValueError("Update priority must be between 0 and 1000")


@dataclass
class PluginContext:
    """Host services handed to a plugin at initialization.

    Attributes:
        message_queue: Queue for communication with the host and other plugins.
        config: Plugin-specific configuration dictionary.
        plugin_registry: Registry of shared components, or None.
    """

    message_queue: Any  # MessageQueue type
    config: dict[str, Any]
    plugin_registry: Any = None  # Anything with register(name, obj) / unregister(name)


class IPlugin(ABC):
    """Base interface for all plugins."""

    @abstractmethod
    def get_metadata(self) -> PluginMetadata:
        """Return plugin metadata without performing initialization."""

    @abstractmethod
    def initialize(self, context: PluginContext) -> None:
        """Set up the plugin and subscribe to its topics.

        Args:
            context: Host services.
        """

    @abstractmethod
    def update(self, dt: float) -> None:
        """Advance the plugin by dt seconds."""

    @abstractmethod
    def shutdown(self) -> None:
        """Unsubscribe and release resources."""

    @abstractmethod
    def handle_message(self, message: Any) -> None:
        """Handle a message dispatched by the queue."""

    def on_config_changed(self, config: dict[str, Any]) -> None:
        """Handle runtime configuration changes. Ignored by default."""

    def on_error(self, error: Exception) -> None:
        """Report an error raised while running the plugin."""
        logger.error("Error in plugin %s: %s", self.get_metadata().name, error)
