"""Test doubles and a small test bed for the A320 pneumatic network."""

from dataclasses import dataclass

import pytest

from bleedair.a320.config import PneumaticConfig
from bleedair.a320.overhead import A320PneumaticOverheadPanel
from bleedair.a320.pneumatic import A320Pneumatic
from bleedair.pneumatic.modes import CrossBleedValveSelectorMode, EngineState
from bleedair.pneumatic.signals import ApuBleedAirValveSignal
from bleedair.simulation import UpdateContext
from bleedair.units import psi_to_pa

AMBIENT_PRESSURE = 101325.0


@dataclass
class FakeEngine:
    """Engine with directly settable corrected spool speeds."""

    n1: float = 0.0
    n2: float = 0.0

    def corrected_n1(self) -> float:
        return self.n1

    def corrected_n2(self) -> float:
        return self.n2


@dataclass
class FakeApu:
    """APU with a settable bleed pressure and bleed valve command."""

    pressure: float = psi_to_pa(14.7)
    bleed_valve_signal: ApuBleedAirValveSignal = ApuBleedAirValveSignal.CLOSE

    def bleed_air_pressure(self) -> float:
        return self.pressure

    def signal(self) -> ApuBleedAirValveSignal:
        return self.bleed_valve_signal


class FakeFirePushButtons:
    """Fire push buttons, none released initially."""

    def __init__(self) -> None:
        self.released = {1: False, 2: False}

    def release(self, engine_number: int) -> None:
        self.released[engine_number] = True

    def is_released(self, engine_number: int) -> bool:
        return self.released[engine_number]


class FakeEngineStates:
    """Engine state source, both engines off initially."""

    def __init__(self) -> None:
        self.states = {1: EngineState.OFF, 2: EngineState.OFF}

    def engine_state(self, number: int) -> EngineState:
        return self.states[number]


class PneumaticTestBed:
    """Runs an A320Pneumatic network with fake surroundings."""

    def __init__(self, config: PneumaticConfig | None = None) -> None:
        self.pneumatic = A320Pneumatic(config)
        self.engines = (FakeEngine(), FakeEngine())
        self.overhead_panel = A320PneumaticOverheadPanel()
        self.fire_push_buttons = FakeFirePushButtons()
        self.apu = FakeApu()
        self.engine_states = FakeEngineStates()
        self.ambient_pressure = AMBIENT_PRESSURE
        self.mach = 0.0

    def run(self, delta: float = 1.0) -> "PneumaticTestBed":
        context = UpdateContext(delta=delta, ambient_pressure=self.ambient_pressure, mach=self.mach)
        self.pneumatic.update(
            context,
            self.engines,
            self.overhead_panel,
            self.fire_push_buttons,
            self.apu,
            self.engine_states,
        )
        return self

    def stabilize(self) -> "PneumaticTestBed":
        for _ in range(1000):
            self.run(0.016)
        return self

    def idle_engine(self, number: int) -> "PneumaticTestBed":
        engine = self.engines[number - 1]
        engine.n1 = 0.2
        engine.n2 = 0.55
        return self

    def run_idle_sequence(self) -> "PneumaticTestBed":
        """One 1 s tick followed by two 5 s ticks."""
        return self.run(1.0).run(5.0).run(5.0)

    def supply_apu_bleed(self, pressure_psi: float = 35.0) -> "PneumaticTestBed":
        self.apu.pressure = psi_to_pa(pressure_psi)
        self.apu.bleed_valve_signal = ApuBleedAirValveSignal.OPEN
        return self

    def set_cross_bleed_mode(self, mode: CrossBleedValveSelectorMode) -> "PneumaticTestBed":
        self.overhead_panel.cross_bleed.set_mode(mode)
        return self

    def engine_system(self, number: int):
        return self.pneumatic.engine_system(number)


@pytest.fixture
def bed() -> PneumaticTestBed:
    """Create a fresh network with both engines stopped."""
    return PneumaticTestBed()


@pytest.fixture
def make_bed():
    """Create networks from a custom configuration."""
    return PneumaticTestBed
