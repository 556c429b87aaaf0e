"""Bleed monitoring computers (BMC).

Each of the two BMCs has a main and a backup channel. A channel samples one
engine's bleed sensors once per tick, runs the HP valve and PR valve PID
loops, and then answers valve commands from the cached samples. Only the
main channel is wired to the valves. The backup channel is computed every
tick but never drives a valve; there is no channel failover.
"""

from typing import Protocol

from bleedair.a320.config import PIDConfig, PneumaticConfig
from bleedair.a320.controllers import EngineFirePushButtons
from bleedair.a320.errors import check_engine_number
from bleedair.a320.overhead import A320PneumaticOverheadPanel
from bleedair.control.pid import PIDController
from bleedair.core.logging_system import get_logger
from bleedair.pneumatic.modes import CrossBleedValveSelectorMode
from bleedair.pneumatic.signals import ControlledValveSignal
from bleedair.units import pa_to_psi, psi_to_pa

logger = get_logger(__name__)


class EngineBleedDataProvider(Protocol):
    """Sensor readings of one engine bleed system."""

    def ip_pressure(self) -> float: ...

    def hp_pressure(self) -> float: ...

    def transfer_pressure(self) -> float: ...

    def regulated_pressure(self) -> float: ...

    def prv_open_amount(self) -> float: ...

    def hpv_open_amount(self) -> float: ...

    def esv_is_open(self) -> bool: ...


def _pid_from_config(config: PIDConfig) -> PIDController:
    return PIDController(
        kp=config.kp,
        ki=config.ki,
        kd=config.kd,
        setpoint=config.setpoint_psi,
        p_limit=config.limit,
        i_limit=config.limit,
        d_limit=config.limit,
        output_limit=config.limit,
    )


def _open_ratio(output: float) -> float:
    return max(0.0, min(1.0, output))


class IntermediatePressureValveCommand:
    """IP valve command: closes when the transfer duct is above the IP port."""

    def __init__(self, channel: "BleedMonitoringComputerChannel") -> None:
        self._channel = channel

    def signal(self) -> ControlledValveSignal:
        channel = self._channel
        margin = channel.config.ip_valve_close_margin_pa
        if channel.transfer_pressure - channel.ip_compressor_pressure > margin:
            return ControlledValveSignal.closed()
        return ControlledValveSignal.open()


class HighPressureValveCommand:
    """HP valve command: HPV loop output, closed with too little transfer pressure."""

    def __init__(self, channel: "BleedMonitoringComputerChannel") -> None:
        self._channel = channel

    def signal(self) -> ControlledValveSignal:
        channel = self._channel
        if channel.transfer_pressure < psi_to_pa(channel.config.hpv_min_transfer_psi):
            return ControlledValveSignal.closed()
        return ControlledValveSignal(_open_ratio(channel.hpv_output))


class PressureRegulatingValveCommand:
    """PR valve command.

    The PRV closes when any of these holds, and otherwise follows the PRV
    loop output:

    - transfer pressure below the minimum
    - engine bleed push button not in AUTO
    - engine fire push button released
    - APU bleed feeding this side (APU bleed on, APU valve open, and either
      this is engine 1 or the cross bleed valve is open)
    - engine starter valve open
    """

    def __init__(self, channel: "BleedMonitoringComputerChannel") -> None:
        self._channel = channel

    def signal(self) -> ControlledValveSignal:
        channel = self._channel
        if channel.transfer_pressure < psi_to_pa(channel.config.prv_min_transfer_psi):
            return ControlledValveSignal.closed()

        if channel.prv_interlock() is not None:
            return ControlledValveSignal.closed()

        return ControlledValveSignal(_open_ratio(channel.prv_output))


class BleedMonitoringComputerChannel:
    """One BMC channel, bound to one engine.

    Attributes:
        engine_number: Engine whose sensors this channel samples.
        ip_valve_controller: Command source for the IP valve.
        hp_valve_controller: Command source for the HP valve.
        pr_valve_controller: Command source for the PR valve.
    """

    def __init__(self, engine_number: int, config: PneumaticConfig | None = None) -> None:
        self.engine_number = check_engine_number(engine_number)
        self.config = config or PneumaticConfig()

        self.ip_compressor_pressure = 0.0
        self.hp_compressor_pressure = 0.0
        self.transfer_pressure = 0.0
        self.regulated_pressure = 0.0
        self.prv_open_amount = 0.0
        self.hpv_open_amount = 0.0
        self.esv_is_open = False

        self.is_engine_bleed_pushbutton_auto = True
        self.is_engine_fire_pushbutton_released = False
        self.is_apu_bleed_on = False
        self.is_apu_bleed_valve_open = False
        self.cross_bleed_valve_selector = CrossBleedValveSelectorMode.AUTO
        self.cross_bleed_valve_is_open = False

        self.hpv_pid = _pid_from_config(self.config.hpv_pid)
        self.prv_pid = _pid_from_config(self.config.prv_pid)
        self.hpv_output = 0.0
        self.prv_output = 0.0

        self.ip_valve_controller = IntermediatePressureValveCommand(self)
        self.hp_valve_controller = HighPressureValveCommand(self)
        self.pr_valve_controller = PressureRegulatingValveCommand(self)

    def update(
        self,
        sensors: EngineBleedDataProvider,
        is_engine_bleed_pushbutton_auto: bool,
        is_engine_fire_pushbutton_released: bool,
        is_apu_bleed_on: bool,
        apu_bleed_valve_is_open: bool,
        cross_bleed_valve_selector: CrossBleedValveSelectorMode,
        cross_bleed_valve_is_open: bool,
    ) -> None:
        """Sample the sensors and interlocks, and advance both loops one step."""
        self.ip_compressor_pressure = sensors.ip_pressure()
        self.hp_compressor_pressure = sensors.hp_pressure()
        self.transfer_pressure = sensors.transfer_pressure()
        self.regulated_pressure = sensors.regulated_pressure()

        self.hpv_output = self.hpv_pid.next_control_output(pa_to_psi(self.transfer_pressure))
        self.prv_output = self.prv_pid.next_control_output(pa_to_psi(self.regulated_pressure))

        self.prv_open_amount = sensors.prv_open_amount()
        self.hpv_open_amount = sensors.hpv_open_amount()
        self.esv_is_open = sensors.esv_is_open()

        self.is_engine_bleed_pushbutton_auto = is_engine_bleed_pushbutton_auto
        self.is_engine_fire_pushbutton_released = is_engine_fire_pushbutton_released
        self.is_apu_bleed_on = is_apu_bleed_on
        self.is_apu_bleed_valve_open = apu_bleed_valve_is_open
        self.cross_bleed_valve_selector = cross_bleed_valve_selector
        self.cross_bleed_valve_is_open = cross_bleed_valve_is_open

    def prv_interlock(self) -> str | None:
        """Name the condition forcing the PR valve closed, if any.

        The APU interlock applies to engine 1 directly, and to engine 2 only
        through an open cross bleed valve.
        """
        if not self.is_engine_bleed_pushbutton_auto:
            return "engine bleed push button off"
        if self.is_engine_fire_pushbutton_released:
            return "fire push button released"
        if (
            self.is_apu_bleed_on
            and self.is_apu_bleed_valve_open
            and (self.engine_number == 1 or self.cross_bleed_valve_is_open)
        ):
            return "APU bleed supplying"
        if self.esv_is_open:
            return "starter valve open"
        return None


class BleedMonitoringComputer:
    """A BMC with a main channel and a backup channel.

    Both channels are updated every tick from their respective engines.
    BMC 1 has engine 1 as main and engine 2 as backup; BMC 2 is the mirror.

    Examples:
        >>> bmc = BleedMonitoringComputer(1, 2)
        >>> bmc.update(engine_systems, False, panel, fire_push_buttons, False)
        >>> engine_1.update(context, bmc.main_channel.ip_valve_controller, ...)
    """

    def __init__(
        self,
        main_channel_engine_number: int,
        backup_channel_engine_number: int,
        config: PneumaticConfig | None = None,
    ) -> None:
        self.main_channel = BleedMonitoringComputerChannel(main_channel_engine_number, config)
        self.backup_channel = BleedMonitoringComputerChannel(backup_channel_engine_number, config)
        self._main_interlock: str | None = None
        logger.debug(
            "BMC channels: main engine %d, backup engine %d",
            main_channel_engine_number,
            backup_channel_engine_number,
        )

    def update(
        self,
        sensors: dict[int, EngineBleedDataProvider],
        apu_bleed_valve_is_open: bool,
        overhead_panel: A320PneumaticOverheadPanel,
        engine_fire_push_buttons: EngineFirePushButtons,
        cross_bleed_valve_is_open: bool,
    ) -> None:
        """Update both channels.

        Args:
            sensors: Engine bleed systems keyed by engine number.
            apu_bleed_valve_is_open: Current APU bleed valve state.
            overhead_panel: Pneumatic overhead panel.
            engine_fire_push_buttons: Fire push button states.
            cross_bleed_valve_is_open: Current cross bleed valve state.
        """
        for channel in (self.main_channel, self.backup_channel):
            number = channel.engine_number
            channel.update(
                sensors[number],
                overhead_panel.engine_bleed_pb_is_auto(number),
                engine_fire_push_buttons.is_released(number),
                overhead_panel.apu_bleed_is_on(),
                apu_bleed_valve_is_open,
                overhead_panel.cross_bleed_mode(),
                cross_bleed_valve_is_open,
            )

        interlock = self.main_channel.prv_interlock()
        if interlock != self._main_interlock:
            if interlock is None:
                logger.info("Engine %d PRV interlock cleared", self.main_channel.engine_number)
            else:
                logger.info(
                    "Engine %d PRV interlocked: %s", self.main_channel.engine_number, interlock
                )
            self._main_interlock = interlock
