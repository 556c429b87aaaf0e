"""Pneumatic containers.

A container is a fixed physical volume of air with a pressure and a
temperature. Adding or removing air is expressed as a volume delta at the
container's current conditions: pressure follows a linear compressibility
law and temperature an adiabatic relation.

Anything exposing pressure/volume/temperature and the volume-delta mutators
can take part in a valve transfer; see PneumaticContainer.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from bleedair.units import celsius_to_kelvin, psi_to_pa

HEAT_CAPACITY_RATIO = 1.4  # Adiabatic index of dry air


@dataclass(frozen=True)
class Fluid:
    """Working fluid of a container.

    Attributes:
        bulk_modulus: Bulk modulus in pascal.
    """

    bulk_modulus: float


AIR = Fluid(bulk_modulus=142000.0)


@runtime_checkable
class PneumaticContainer(Protocol):
    """Capabilities a valve needs from the containers it connects."""

    def pressure(self) -> float:
        """Absolute pressure in Pa."""
        ...

    def volume(self) -> float:
        """Physical volume in m^3 (not the volume of gas)."""
        ...

    def temperature(self) -> float:
        """Temperature in K."""
        ...

    def change_volume(self, volume: float) -> None:
        """Add (positive) or remove (negative) air, in m^3."""
        ...

    def update_temperature(self, temperature_delta: float) -> None:
        """Shift temperature by a delta in K."""
        ...

    def update_pressure_only(self, volume: float) -> None:
        """Add or remove air without changing temperature."""
        ...


class Pipe:
    """A plain pipe section holding air.

    Examples:
        >>> pipe = Pipe.at(volume=1.0, pressure_psi=14.7, temperature_c=15.0)
        >>> pipe.change_volume(pipe.volume_to_reach(psi_to_pa(30.0)))
    """

    def __init__(self, volume: float, fluid: Fluid, pressure: float, temperature: float) -> None:
        """Initialize pipe.

        Args:
            volume: Physical volume in m^3 (must be non-zero).
            fluid: Working fluid.
            pressure: Initial pressure in Pa.
            temperature: Initial temperature in K.
        """
        self._volume = volume
        self._fluid = fluid
        self._pressure = pressure
        self._temperature = temperature

    @classmethod
    def at(
        cls,
        volume: float,
        pressure_psi: float,
        temperature_c: float,
        fluid: Fluid = AIR,
    ) -> "Pipe":
        """Create a pipe from cockpit units."""
        return cls(volume, fluid, psi_to_pa(pressure_psi), celsius_to_kelvin(temperature_c))

    def pressure(self) -> float:
        return self._pressure

    def volume(self) -> float:
        return self._volume

    def temperature(self) -> float:
        return self._temperature

    @property
    def fluid(self) -> Fluid:
        return self._fluid

    def change_volume(self, volume: float) -> None:
        self._pressure += self._pressure_change_for_volume_change(volume)
        self._update_temperature_for_volume_change(volume)

    def update_temperature(self, temperature_delta: float) -> None:
        self._temperature += temperature_delta

    def update_pressure_only(self, volume: float) -> None:
        self._pressure += self._pressure_change_for_volume_change(volume)

    def volume_to_reach(self, target_pressure: float) -> float:
        """Volume delta that brings this pipe exactly to target_pressure."""
        return (target_pressure - self._pressure) * self._volume / self._fluid.bulk_modulus

    def reach_pressure(self, target_pressure: float) -> None:
        """Compress or expand to exactly target_pressure."""
        self._update_temperature_for_volume_change(self.volume_to_reach(target_pressure))
        self._pressure = target_pressure

    def _pressure_change_for_volume_change(self, volume: float) -> float:
        return self._fluid.bulk_modulus * volume / self._volume

    def _update_temperature_for_volume_change(self, volume: float) -> None:
        compression = 1.0 + volume / self._volume
        # A single step cannot remove more air than the pipe holds
        if compression > 0.0:
            self._temperature *= compression ** (HEAT_CAPACITY_RATIO - 1.0)


class PipeBacked:
    """Mixin for components whose air is held in a single inner pipe."""

    _pipe: Pipe

    def pressure(self) -> float:
        return self._pipe.pressure()

    def volume(self) -> float:
        return self._pipe.volume()

    def temperature(self) -> float:
        return self._pipe.temperature()

    def change_volume(self, volume: float) -> None:
        self._pipe.change_volume(volume)

    def update_temperature(self, temperature_delta: float) -> None:
        self._pipe.update_temperature(temperature_delta)

    def update_pressure_only(self, volume: float) -> None:
        self._pipe.update_pressure_only(volume)
