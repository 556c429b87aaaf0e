"""Unit conversions.

The simulation works in SI internally: pascal, cubic metre, kelvin, second.
Cockpit-facing values (panel thresholds, telemetry) use psi and Celsius.
"""

PASCAL_PER_PSI = 6894.757293168361
ZERO_CELSIUS_K = 273.15


def psi_to_pa(psi: float) -> float:
    return psi * PASCAL_PER_PSI


def pa_to_psi(pa: float) -> float:
    return pa / PASCAL_PER_PSI


def celsius_to_kelvin(celsius: float) -> float:
    return celsius + ZERO_CELSIUS_K


def kelvin_to_celsius(kelvin: float) -> float:
    return kelvin - ZERO_CELSIUS_K
