"""Tests for the pneumatic plugin."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from bleedair.core.messaging import Message, MessagePriority, MessageQueue, MessageTopic
from bleedair.core.plugin import PluginContext, PluginType
from bleedair.plugins.pneumatic_plugin import PneumaticPlugin
from bleedair.pneumatic.modes import EngineState
from bleedair.units import psi_to_pa


def send(queue: MessageQueue, topic: str, **data) -> None:
    queue.publish(Message(sender="host", recipients=["pneumatic_plugin"], topic=topic, data=data))
    queue.process()


class Recorder:
    """Collects messages published on a topic."""

    def __init__(self, queue: MessageQueue, topic: str) -> None:
        self.messages: list[Message] = []
        queue.subscribe(topic, self.messages.append)


@pytest.fixture
def queue() -> MessageQueue:
    return MessageQueue()


@pytest.fixture
def registry() -> Mock:
    return Mock()


@pytest.fixture
def plugin(queue: MessageQueue, registry: Mock) -> PneumaticPlugin:
    plugin = PneumaticPlugin()
    plugin.initialize(PluginContext(message_queue=queue, config={}, plugin_registry=registry))
    return plugin


class TestPneumaticPluginLifecycle:
    """Test plugin metadata, initialization and shutdown."""

    def test_metadata(self) -> None:
        """Test plugin metadata."""
        metadata = PneumaticPlugin().get_metadata()

        assert metadata.name == "pneumatic_plugin"
        assert metadata.plugin_type == PluginType.AIRCRAFT_SYSTEM
        assert metadata.provides == ["pneumatic"]
        assert metadata.update_priority == 40

    def test_initialize_registers_network(
        self, plugin: PneumaticPlugin, queue: MessageQueue, registry: Mock
    ) -> None:
        """Test that initialization builds, registers and subscribes."""
        assert plugin.pneumatic is not None
        registry.register.assert_called_once_with("pneumatic", plugin.pneumatic)
        assert queue.get_subscriber_count(MessageTopic.ENGINE_STATE) == 1
        assert queue.get_subscriber_count(MessageTopic.APU_BLEED_STATE) == 1

    def test_update_before_initialize_is_ignored(self) -> None:
        """Test that an uninitialized plugin does nothing."""
        plugin = PneumaticPlugin()

        plugin.update(0.016)

        assert plugin.pneumatic is None

    def test_shutdown(self, plugin: PneumaticPlugin, queue: MessageQueue, registry: Mock) -> None:
        """Test that shutdown unsubscribes and unregisters."""
        plugin.shutdown()

        registry.unregister.assert_called_once_with("pneumatic")
        assert queue.get_subscriber_count(MessageTopic.ENGINE_STATE) == 0
        assert queue.get_subscriber_count(MessageTopic.OVERHEAD_INPUT) == 0

    def test_inline_configuration(self, queue: MessageQueue) -> None:
        """Test settings given under the pneumatic key."""
        plugin = PneumaticPlugin()
        plugin.initialize(
            PluginContext(
                message_queue=queue, config={"pneumatic": {"apu_chamber_volume": 2.0}}
            )
        )

        assert plugin.pneumatic is not None
        assert plugin.pneumatic.apu.volume() == pytest.approx(2.0)

    def test_configuration_file(self, queue: MessageQueue, tmp_path: Path) -> None:
        """Test settings loaded from a YAML file."""
        config_path = tmp_path / "pneumatic.yaml"
        config_path.write_text("pneumatic:\n  apu_chamber_volume: 3.0\n")
        plugin = PneumaticPlugin()

        plugin.initialize(
            PluginContext(message_queue=queue, config={"config_file": str(config_path)})
        )

        assert plugin.pneumatic is not None
        assert plugin.pneumatic.apu.volume() == pytest.approx(3.0)


class TestPneumaticPluginMessages:
    """Test inputs and outputs carried by messages."""

    def test_update_publishes_state(self, plugin: PneumaticPlugin, queue: MessageQueue) -> None:
        """Test that each update publishes telemetry and panel state."""
        states = Recorder(queue, MessageTopic.PNEUMATIC_STATE)

        plugin.update(0.016)
        queue.process()

        assert len(states.messages) == 1
        data = states.messages[0].data
        assert data["PNEU_XBLEED_VALVE_OPEN"] is False
        assert data["PNEU_ENG_1_PRECOOLER_INLET_PRESSURE"] == pytest.approx(14.7, abs=0.1)
        assert data["OVHD_APU_BLEED_PB_IS_ON"] is True
        assert data["OVHD_PNEU_ENG_2_BLEED_PB_IS_AUTO"] is True

    def test_apu_bleed_opens_valves(self, plugin: PneumaticPlugin, queue: MessageQueue) -> None:
        """Test that an APU message opens the APU and cross bleed valves."""
        changes = Recorder(queue, MessageTopic.PNEUMATIC_VALVE_CHANGED)

        send(
            queue,
            MessageTopic.APU_BLEED_STATE,
            bleed_air_pressure=psi_to_pa(35.0),
            bleed_valve_open=True,
        )
        plugin.update(0.016)
        queue.process()

        assert plugin.pneumatic is not None
        assert plugin.pneumatic.apu_bleed_air_valve_is_open()
        assert plugin.pneumatic.cross_bleed_valve_is_open()
        reported = {msg.data["valve"]: msg.data["open"] for msg in changes.messages}
        assert reported["APU_BLEED_AIR_VALVE_OPEN"] is True
        assert reported["PNEU_XBLEED_VALVE_OPEN"] is True
        assert all(msg.priority == MessagePriority.HIGH.value for msg in changes.messages)

    def test_no_valve_changes_when_steady(
        self, plugin: PneumaticPlugin, queue: MessageQueue
    ) -> None:
        """Test that nothing is reported while no valve moves."""
        changes = Recorder(queue, MessageTopic.PNEUMATIC_VALVE_CHANGED)

        plugin.update(0.016)
        plugin.update(0.016)
        queue.process()

        assert changes.messages == []

    def test_engine_state_opens_starter_valve(
        self, plugin: PneumaticPlugin, queue: MessageQueue
    ) -> None:
        """Test engine state given by name."""
        send(queue, MessageTopic.ENGINE_STATE, engine_number=2, state="starting")
        plugin.update(0.016)

        assert plugin.pneumatic is not None
        assert plugin.pneumatic.engine_system(2).es_valve.is_open()
        assert not plugin.pneumatic.engine_system(1).es_valve.is_open()

        send(queue, MessageTopic.ENGINE_STATE, engine_number=2, state=1)
        plugin.update(0.016)

        assert not plugin.pneumatic.engine_system(2).es_valve.is_open()

    def test_unknown_engine_state_name_reads_as_off(
        self, plugin: PneumaticPlugin, queue: MessageQueue
    ) -> None:
        """Test that an unrecognized state name falls back to OFF."""
        send(queue, MessageTopic.ENGINE_STATE, engine_number=1, state="starting")
        plugin.update(0.016)
        send(queue, MessageTopic.ENGINE_STATE, engine_number=1, state="idle")
        plugin.update(0.016)

        assert plugin.pneumatic is not None
        assert plugin.pneumatic.fadec.engine_state(1) is EngineState.OFF
        assert not plugin.pneumatic.engine_system(1).es_valve.is_open()

    def test_overhead_input(self, plugin: PneumaticPlugin, queue: MessageQueue) -> None:
        """Test that overhead switches are read from host variables."""
        send(
            queue,
            MessageTopic.OVERHEAD_INPUT,
            KNOB_OVHD_AIRCOND_XBLEED_Position=2.0,
            OVHD_PNEU_ENG_1_BLEED_PB_IS_AUTO=0.0,
        )
        plugin.update(0.016)

        assert plugin.pneumatic is not None
        assert plugin.pneumatic.cross_bleed_valve_is_open()
        assert not plugin.overhead_panel.engine_bleed_pb_is_auto(1)

    def test_engine_speeds_and_ambient(
        self, plugin: PneumaticPlugin, queue: MessageQueue
    ) -> None:
        """Test that engine speeds drive the compression chambers."""
        send(queue, MessageTopic.AMBIENT_CONDITIONS, ambient_pressure=101325.0, mach=0.0)
        send(
            queue,
            MessageTopic.ENGINE_SPEEDS,
            engine_number=1,
            corrected_n1=0.2,
            corrected_n2=0.55,
        )
        plugin.update(1.0)

        assert plugin.pneumatic is not None
        engine_1 = plugin.pneumatic.engine_system(1)
        engine_2 = plugin.pneumatic.engine_system(2)
        assert engine_1.hp_pressure() > engine_1.ip_pressure() > 101325.0
        assert engine_2.ip_pressure() == pytest.approx(101325.0, abs=100.0)

    def test_fire_push_button_closes_prv(
        self, plugin: PneumaticPlugin, queue: MessageQueue
    ) -> None:
        """Test that a released fire push button keeps the PRV closed."""
        send(queue, MessageTopic.ENGINE_FIRE_PUSH_BUTTON, engine_number=1, released=True)
        send(
            queue,
            MessageTopic.ENGINE_SPEEDS,
            engine_number=1,
            corrected_n1=0.2,
            corrected_n2=0.55,
        )
        for delta in (1.0, 5.0, 5.0):
            plugin.update(delta)

        assert plugin.fire_push_buttons.is_released(1)
        assert plugin.pneumatic is not None
        assert not plugin.pneumatic.engine_system(1).pr_valve.is_open()
