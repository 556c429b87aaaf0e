"""A320 pneumatic network.

Two engine bleed systems, joined by the cross bleed valve, plus the APU
bleed supply feeding engine 1's side:

    APU --APU valve--> engine 1 regulated duct --cross bleed valve--> engine 2 regulated duct

Each tick runs a fixed pipeline:

    0. FADEC, APU bleed valve command and APU chamber controller take inputs
    1. cross bleed controller
    2. cross bleed valve open amount
    3. APU chamber
    4. both BMCs
    5. starter valve controllers
    6. each engine bleed system, driven by its main BMC channel
    7. APU valve moves air into engine 1
    8. cross bleed valve moves air between engine 1 and engine 2

Typical usage:
    pneumatic = A320Pneumatic()
    panel = A320PneumaticOverheadPanel()

    context = UpdateContext(delta=0.016, ambient_pressure=101325.0)
    pneumatic.update(context, (engine_1, engine_2), panel, fire_push_buttons, apu)

    values = pneumatic.telemetry()
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from bleedair.a320.bmc import BleedMonitoringComputer
from bleedair.a320.config import PneumaticConfig
from bleedair.a320.controllers import (
    CrossBleedValveController,
    EngineFirePushButtons,
    EngineStarterValveController,
    EngineStateSource,
    FullAuthorityDigitalEngineControl,
)
from bleedair.a320.engine_bleed import EngineBleedAirSystem
from bleedair.a320.errors import ENGINE_NUMBERS, check_engine_number
from bleedair.a320.overhead import A320PneumaticOverheadPanel
from bleedair.core.logging_system import get_logger
from bleedair.pneumatic.chamber import (
    ApuBleedAirSource,
    ApuCompressionChamberController,
    CompressionChamber,
    EngineCorrectedSpeeds,
)
from bleedair.pneumatic.container import Fluid
from bleedair.pneumatic.valve import Valve
from bleedair.simulation import UpdateContext
from bleedair.units import celsius_to_kelvin, kelvin_to_celsius, pa_to_psi, psi_to_pa

logger = get_logger(__name__)


@dataclass(frozen=True)
class ValveChange:
    """A valve that opened or closed during the last tick.

    Attributes:
        name: Telemetry name of the valve state (e.g. PNEU_XBLEED_VALVE_OPEN).
        is_open: New state.
    """

    name: str
    is_open: bool


class A320Pneumatic:
    """The complete bleed air network of the A320.

    Attributes:
        bmcs: Bleed monitoring computers keyed by BMC number.
        engine_systems: Engine bleed systems keyed by engine number.
        fadec: Engine state holder feeding the starter valve controllers.
    """

    def __init__(self, config: PneumaticConfig | None = None) -> None:
        self.config = config or PneumaticConfig()
        fluid = Fluid(self.config.bulk_modulus_pa)
        speed = self.config.valve_transfer_speed

        self.bmcs = {
            1: BleedMonitoringComputer(1, 2, self.config),
            2: BleedMonitoringComputer(2, 1, self.config),
        }
        self.engine_systems = {
            number: EngineBleedAirSystem(number, self.config) for number in ENGINE_NUMBERS
        }

        self.cross_bleed_valve_controller = CrossBleedValveController()
        self.cross_bleed_valve = Valve.new_closed(transfer_speed=speed, fluid=fluid)

        self.fadec = FullAuthorityDigitalEngineControl()
        self.engine_starter_valve_controllers = {
            number: EngineStarterValveController(number) for number in ENGINE_NUMBERS
        }

        self.apu = CompressionChamber(
            self.config.apu_chamber_volume,
            psi_to_pa(self.config.initial_pressure_psi),
            celsius_to_kelvin(self.config.initial_temperature_c),
            fluid=fluid,
        )
        self.apu_bleed_air_valve = Valve.new_closed(transfer_speed=speed, fluid=fluid)
        self.apu_bleed_air_controller = ApuCompressionChamberController()

        self._valve_states = self._snapshot_valve_states()
        self._last_changes: list[ValveChange] = []

        logger.info("A320 pneumatic network created")

    def update(
        self,
        context: UpdateContext,
        engines: Sequence[EngineCorrectedSpeeds],
        overhead_panel: A320PneumaticOverheadPanel,
        engine_fire_push_buttons: EngineFirePushButtons,
        apu: ApuBleedAirSource,
        engine_states: EngineStateSource | None = None,
    ) -> None:
        """Advance the network by one tick.

        Args:
            context: Time step and ambient conditions.
            engines: Engine 1 and engine 2 data sources, in that order.
            overhead_panel: Pneumatic overhead panel.
            engine_fire_push_buttons: Fire push button states.
            apu: APU bleed pressure and bleed valve command.
            engine_states: Engine state source. When omitted the states last
                read from the host (see read) are kept.
        """
        if engine_states is not None:
            self.fadec.update(engine_states)
        self.apu_bleed_air_valve.update_open_amount(apu)
        self.apu_bleed_air_controller.update(apu)

        self.cross_bleed_valve_controller.update(
            self.apu_bleed_air_valve.is_open(), overhead_panel.cross_bleed_mode()
        )
        self.cross_bleed_valve.update_open_amount(self.cross_bleed_valve_controller)

        self.apu.update(self.apu_bleed_air_controller)

        for bmc in self.bmcs.values():
            bmc.update(
                self.engine_systems,
                self.apu_bleed_air_valve.is_open(),
                overhead_panel,
                engine_fire_push_buttons,
                self.cross_bleed_valve.is_open(),
            )

        for controller in self.engine_starter_valve_controllers.values():
            controller.update(self.fadec)

        for number, engine_system in self.engine_systems.items():
            main_channel = self.bmcs[number].main_channel
            engine_system.update(
                context,
                main_channel.ip_valve_controller,
                main_channel.hp_valve_controller,
                main_channel.pr_valve_controller,
                self.engine_starter_valve_controllers[number],
                engines[number - 1],
            )

        engine_1 = self.engine_systems[1]
        engine_2 = self.engine_systems[2]
        self.apu_bleed_air_valve.update_move_fluid(context.delta, self.apu, engine_1)
        self.cross_bleed_valve.update_move_fluid(context.delta, engine_1, engine_2)

        self._record_valve_changes()

    def engine_system(self, number: int) -> EngineBleedAirSystem:
        """Return the bleed system of engine 1 or 2."""
        return self.engine_systems[check_engine_number(number)]

    def regulated_pressure(self, number: int) -> float:
        return self.engine_system(number).regulated_pressure()

    def cross_bleed_valve_is_open(self) -> bool:
        return self.cross_bleed_valve.is_open()

    def apu_bleed_air_valve_is_open(self) -> bool:
        return self.apu_bleed_air_valve.is_open()

    def valve_changes(self) -> list[ValveChange]:
        """Valves that changed state during the last tick."""
        return list(self._last_changes)

    def read(self, values: Mapping[str, float]) -> None:
        """Read host variables (engine states)."""
        self.fadec.read(values)

    def write(self, values: dict[str, float | bool]) -> None:
        """Write the network's telemetry into a host variable mapping.

        Pressures are reported in psi and temperatures in Celsius.
        """
        for number, system in self.engine_systems.items():
            prefix = f"PNEU_ENG_{number}"

            values[f"{prefix}_IP_PRESSURE"] = pa_to_psi(system.ip_pressure())
            values[f"{prefix}_HP_PRESSURE"] = pa_to_psi(system.hp_pressure())
            values[f"{prefix}_TRANSFER_PRESSURE"] = pa_to_psi(system.transfer_pressure())
            values[f"{prefix}_PRECOOLER_INLET_PRESSURE"] = pa_to_psi(system.regulated_pressure())

            values[f"{prefix}_IP_TEMPERATURE"] = kelvin_to_celsius(system.ip_temperature())
            values[f"{prefix}_HP_TEMPERATURE"] = kelvin_to_celsius(system.hp_temperature())
            values[f"{prefix}_TRANSFER_TEMPERATURE"] = kelvin_to_celsius(
                system.transfer_temperature()
            )
            values[f"{prefix}_PRECOOLER_INLET_TEMPERATURE"] = kelvin_to_celsius(
                system.regulated_temperature()
            )

        values.update(self._valve_states)

    def telemetry(self) -> dict[str, float | bool]:
        """Return the current telemetry as a new dictionary."""
        values: dict[str, float | bool] = {}
        self.write(values)
        return values

    def _snapshot_valve_states(self) -> dict[str, bool]:
        states = {}
        for number, system in self.engine_systems.items():
            prefix = f"PNEU_ENG_{number}"
            states[f"{prefix}_IP_VALVE_OPEN"] = system.ip_valve.is_open()
            states[f"{prefix}_HP_VALVE_OPEN"] = system.hp_valve.is_open()
            states[f"{prefix}_PR_VALVE_OPEN"] = system.pr_valve.is_open()
            states[f"{prefix}_STARTER_VALVE_OPEN"] = system.es_valve.is_open()
        states["PNEU_XBLEED_VALVE_OPEN"] = self.cross_bleed_valve.is_open()
        states["APU_BLEED_AIR_VALVE_OPEN"] = self.apu_bleed_air_valve.is_open()
        return states

    def _record_valve_changes(self) -> None:
        current = self._snapshot_valve_states()
        self._last_changes = [
            ValveChange(name, is_open)
            for name, is_open in current.items()
            if self._valve_states[name] != is_open
        ]
        for change in self._last_changes:
            logger.info("%s: %s", change.name, "open" if change.is_open else "closed")
        self._valve_states = current
