"""Compression chambers and their pressure controllers.

A compression chamber models a compressor stage (engine IP/HP bleed port,
APU load compressor). Its pressure is not driven by flow from neighbours:
each tick it snaps to the target pressure of its controller, since the
compressor responds much faster than pressure propagates through the
network.
"""

from typing import Protocol

from bleedair.pneumatic.container import AIR, HEAT_CAPACITY_RATIO, Fluid, Pipe, PipeBacked
from bleedair.pneumatic.signals import ControllerSignal, TargetPressureSignal
from bleedair.units import celsius_to_kelvin, psi_to_pa


class EngineCorrectedSpeeds(Protocol):
    """Engine data source: corrected spool speeds as ratios in [0, 1]."""

    def corrected_n1(self) -> float: ...

    def corrected_n2(self) -> float: ...


class ApuBleedAirSource(Protocol):
    """APU data source: bleed pressure (Pa) and the bleed valve command."""

    def bleed_air_pressure(self) -> float: ...

    def signal(self): ...


class CompressionChamber(PipeBacked):
    """Container driven to a target pressure by its controller."""

    def __init__(
        self,
        volume: float,
        pressure: float = psi_to_pa(14.7),
        temperature: float = celsius_to_kelvin(15.0),
        fluid: Fluid = AIR,
    ) -> None:
        self._pipe = Pipe(volume, fluid, pressure, temperature)

    def update(self, controller: ControllerSignal[TargetPressureSignal]) -> None:
        signal = controller.signal()
        if signal is not None:
            self._pipe.reach_pressure(signal.target_pressure)


class ConstantPressureController:
    """Always asks for the same target pressure."""

    def __init__(self, target_pressure: float) -> None:
        self._target_pressure = target_pressure

    def signal(self) -> TargetPressureSignal:
        return TargetPressureSignal(self._target_pressure)


class EngineCompressionChamberController:
    """Target pressure of an engine bleed port.

    The airflow velocity at the port is estimated from the flight Mach
    number plus weighted contributions of corrected N1 and N2. The sum is
    combined with a relativistic-style addition so that it stays below
    Mach 1 in flight. The target is static pressure plus a multiple of the
    compressible dynamic pressure:

        target = ambient * (1 + compression_factor * gamma * mach^2 / 2)
    """

    def __init__(
        self,
        n1_contribution_factor: float,
        n2_contribution_factor: float,
        compression_factor: float,
    ) -> None:
        self.n1_contribution_factor = n1_contribution_factor
        self.n2_contribution_factor = n2_contribution_factor
        self.compression_factor = compression_factor
        self._target_pressure = 0.0

    def update(self, ambient_pressure: float, mach: float, engine: EngineCorrectedSpeeds) -> None:
        """Recompute the target pressure.

        Args:
            ambient_pressure: Static ambient pressure in Pa.
            mach: Current flight Mach number.
            engine: Engine data source.
        """
        n1_term = self.n1_contribution_factor * engine.corrected_n1()
        n2_term = self.n2_contribution_factor * engine.corrected_n2()

        corrected_mach = (mach + n1_term + n2_term) / (1.0 + mach * n1_term * n2_term)

        self._target_pressure = (
            1.0 + self.compression_factor * HEAT_CAPACITY_RATIO * corrected_mach**2 / 2.0
        ) * ambient_pressure

    @property
    def target_pressure(self) -> float:
        return self._target_pressure

    def signal(self) -> TargetPressureSignal:
        return TargetPressureSignal(self._target_pressure)


class ApuCompressionChamberController:
    """Forwards the APU's bleed air pressure as the chamber target."""

    def __init__(self) -> None:
        self._current_pressure = 0.0

    def update(self, apu: ApuBleedAirSource) -> None:
        self._current_pressure = apu.bleed_air_pressure()

    def signal(self) -> TargetPressureSignal:
        return TargetPressureSignal(self._current_pressure)
