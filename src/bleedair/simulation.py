"""Per-tick simulation context.

The host advances the pneumatic system with fixed time steps. Each step
carries the ambient conditions supplied by the atmosphere model.
"""

from dataclasses import dataclass

from bleedair.units import celsius_to_kelvin

ISA_SEA_LEVEL_PRESSURE_PA = 101325.0
ISA_SEA_LEVEL_TEMPERATURE_K = celsius_to_kelvin(15.0)


@dataclass(frozen=True)
class UpdateContext:
    """Inputs shared by every component for one tick.

    Attributes:
        delta: Time step in seconds.
        ambient_pressure: Static ambient pressure in Pa.
        ambient_temperature: Ambient temperature in K.
        mach: Flight Mach number.
    """

    delta: float
    ambient_pressure: float = ISA_SEA_LEVEL_PRESSURE_PA
    ambient_temperature: float = ISA_SEA_LEVEL_TEMPERATURE_K
    mach: float = 0.0

    def __post_init__(self) -> None:
        if self.delta < 0.0:
            raise ValueError(f"Time step cannot be negative: {self.delta}")
