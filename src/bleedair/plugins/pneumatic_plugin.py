"""Pneumatic system plugin wrapper.

Wraps A320Pneumatic and the overhead panel, keeps the latest host inputs
received over the message queue, and publishes telemetry once per frame.

Typical usage:
    plugin = PneumaticPlugin()
    plugin.initialize(PluginContext(message_queue=queue, config={"pneumatic": {}}))

    # each frame
    queue.process()
    plugin.update(dt)
"""

from dataclasses import dataclass
from typing import Any

from bleedair.a320.config import PneumaticConfig
from bleedair.a320.errors import ENGINE_NUMBERS, check_engine_number
from bleedair.a320.overhead import A320PneumaticOverheadPanel
from bleedair.a320.pneumatic import A320Pneumatic
from bleedair.core.logging_system import get_logger
from bleedair.core.messaging import Message, MessagePriority, MessageTopic
from bleedair.core.plugin import IPlugin, PluginContext, PluginMetadata, PluginType
from bleedair.pneumatic.modes import EngineState
from bleedair.pneumatic.signals import ApuBleedAirValveSignal
from bleedair.simulation import (
    ISA_SEA_LEVEL_PRESSURE_PA,
    ISA_SEA_LEVEL_TEMPERATURE_K,
    UpdateContext,
)
from bleedair.units import psi_to_pa

logger = get_logger(__name__)

_SUBSCRIBED_TOPICS = (
    MessageTopic.AMBIENT_CONDITIONS,
    MessageTopic.ENGINE_SPEEDS,
    MessageTopic.ENGINE_STATE,
    MessageTopic.ENGINE_FIRE_PUSH_BUTTON,
    MessageTopic.APU_BLEED_STATE,
    MessageTopic.OVERHEAD_INPUT,
)


@dataclass
class EngineReadings:
    """Latest corrected spool speeds received for one engine."""

    n1: float = 0.0
    n2: float = 0.0

    def corrected_n1(self) -> float:
        return self.n1

    def corrected_n2(self) -> float:
        return self.n2


@dataclass
class ApuReadings:
    """Latest APU bleed pressure (Pa) and bleed valve command."""

    pressure: float = psi_to_pa(14.7)
    valve_open: bool = False

    def bleed_air_pressure(self) -> float:
        return self.pressure

    def signal(self) -> ApuBleedAirValveSignal:
        return ApuBleedAirValveSignal.OPEN if self.valve_open else ApuBleedAirValveSignal.CLOSE


class FirePushButtonReadings:
    """Latest fire push button positions."""

    def __init__(self) -> None:
        self._released = {number: False for number in ENGINE_NUMBERS}

    def release(self, engine_number: int, released: bool = True) -> None:
        self._released[check_engine_number(engine_number)] = released

    def is_released(self, engine_number: int) -> bool:
        return self._released[check_engine_number(engine_number)]


def _engine_state(value: Any) -> EngineState:
    if isinstance(value, EngineState):
        return value
    if isinstance(value, str):
        return EngineState.__members__.get(value.upper(), EngineState.OFF)
    return EngineState.from_value(value)


class PneumaticPlugin(IPlugin):
    """A320 pneumatic system plugin.

    Inputs arrive as messages and are held until the next update, so the
    network always advances with one consistent set of inputs per frame.
    """

    def __init__(self) -> None:
        self.context: PluginContext | None = None
        self.pneumatic: A320Pneumatic | None = None
        self.overhead_panel = A320PneumaticOverheadPanel()

        self.engines = {number: EngineReadings() for number in ENGINE_NUMBERS}
        self.apu = ApuReadings()
        self.fire_push_buttons = FirePushButtonReadings()

        self.ambient_pressure = ISA_SEA_LEVEL_PRESSURE_PA
        self.ambient_temperature = ISA_SEA_LEVEL_TEMPERATURE_K
        self.mach = 0.0

    def get_metadata(self) -> PluginMetadata:
        return PluginMetadata(
            name="pneumatic_plugin",
            version="0.1.0",
            author="BleedAir Team",
            plugin_type=PluginType.AIRCRAFT_SYSTEM,
            dependencies=[],
            provides=["pneumatic"],
            optional=False,
            update_priority=40,
            description="A320 engine and APU bleed air network",
        )

    def initialize(self, context: PluginContext) -> None:
        """Build the network from the plugin configuration.

        The configuration may name a YAML file under "config_file", or give
        the settings inline under "pneumatic".

        Args:
            context: Plugin context with access to core systems.
        """
        self.context = context

        config_file = context.config.get("config_file")
        if config_file:
            config = PneumaticConfig.load(config_file)
        else:
            config = PneumaticConfig.from_dict(context.config.get("pneumatic", {}))

        self.pneumatic = A320Pneumatic(config)

        for topic in _SUBSCRIBED_TOPICS:
            context.message_queue.subscribe(topic, self.handle_message)

        if context.plugin_registry:
            context.plugin_registry.register("pneumatic", self.pneumatic)

        logger.info("Pneumatic plugin initialized")

    def update(self, dt: float) -> None:
        """Advance the network and publish its state.

        Args:
            dt: Delta time in seconds since last update.
        """
        if not self.pneumatic or not self.context:
            return

        context = UpdateContext(
            delta=dt,
            ambient_pressure=self.ambient_pressure,
            ambient_temperature=self.ambient_temperature,
            mach=self.mach,
        )
        self.pneumatic.update(
            context,
            (self.engines[1], self.engines[2]),
            self.overhead_panel,
            self.fire_push_buttons,
            self.apu,
        )

        for change in self.pneumatic.valve_changes():
            self.context.message_queue.publish(
                Message(
                    sender="pneumatic_plugin",
                    recipients=["*"],
                    topic=MessageTopic.PNEUMATIC_VALVE_CHANGED,
                    data={"valve": change.name, "open": change.is_open},
                    priority=MessagePriority.HIGH,
                )
            )

        data = self.pneumatic.telemetry()
        self.overhead_panel.write(data)
        self.context.message_queue.publish(
            Message(
                sender="pneumatic_plugin",
                recipients=["*"],
                topic=MessageTopic.PNEUMATIC_STATE,
                data=data,
                priority=MessagePriority.NORMAL,
            )
        )

    def shutdown(self) -> None:
        if self.context:
            for topic in _SUBSCRIBED_TOPICS:
                self.context.message_queue.unsubscribe(topic, self.handle_message)

            if self.context.plugin_registry:
                self.context.plugin_registry.unregister("pneumatic")

        logger.info("Pneumatic plugin shutdown")

    def handle_message(self, message: Message) -> None:
        """Store the inputs carried by a message.

        Args:
            message: Message from the queue.
        """
        if not self.pneumatic:
            return

        data = message.data

        if message.topic == MessageTopic.AMBIENT_CONDITIONS:
            self.ambient_pressure = data.get("ambient_pressure", self.ambient_pressure)
            self.ambient_temperature = data.get("ambient_temperature", self.ambient_temperature)
            self.mach = data.get("mach", self.mach)

        elif message.topic == MessageTopic.ENGINE_SPEEDS:
            engine = self.engines[check_engine_number(data["engine_number"])]
            engine.n1 = data.get("corrected_n1", engine.n1)
            engine.n2 = data.get("corrected_n2", engine.n2)

        elif message.topic == MessageTopic.ENGINE_STATE:
            self.pneumatic.fadec.set_engine_state(
                data["engine_number"], _engine_state(data.get("state", EngineState.OFF))
            )

        elif message.topic == MessageTopic.ENGINE_FIRE_PUSH_BUTTON:
            self.fire_push_buttons.release(data["engine_number"], data.get("released", True))

        elif message.topic == MessageTopic.APU_BLEED_STATE:
            self.apu.pressure = data.get("bleed_air_pressure", self.apu.pressure)
            self.apu.valve_open = data.get("bleed_valve_open", self.apu.valve_open)

        elif message.topic == MessageTopic.OVERHEAD_INPUT:
            self.overhead_panel.read(data)
            self.pneumatic.read(data)

    def on_config_changed(self, config: dict[str, Any]) -> None:
        logger.info("Pneumatic plugin configuration updated")
