"""Tunable constants of the A320 pneumatic system.

Defaults reproduce the reference tuning. A YAML file can override any of
them under a "pneumatic" section:

    pneumatic:
      valve_transfer_speed: 3.0
      hpv_pid:
        kp: 0.05
        setpoint_psi: 65.0
      ip_chamber:
        n1_factor: 3.0
"""

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from bleedair.core.config import ConfigError, ConfigLoader
from bleedair.core.logging_system import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CompressionChamberConfig:
    """Contribution factors of an engine compression chamber controller."""

    n1_factor: float
    n2_factor: float
    compression_factor: float


@dataclass(frozen=True)
class PIDConfig:
    """Gains and setpoint of a bleed monitoring computer loop."""

    kp: float = 0.0
    ki: float = 0.0
    kd: float = 0.0
    setpoint_psi: float = 0.0
    limit: float = 1.0


@dataclass(frozen=True)
class PneumaticConfig:
    """Configuration for the A320 pneumatic system.

    Volumes in m^3, pressures in psi, temperatures in Celsius, rates in
    m^3/s, transfer speed in 1/s.
    """

    bulk_modulus_pa: float = 142000.0
    valve_transfer_speed: float = 3.0

    chamber_volume: float = 1.0
    pipe_volume: float = 1.0
    consumer_volume: float = 1.0
    apu_chamber_volume: float = 1.0
    initial_pressure_psi: float = 14.7
    initial_temperature_c: float = 15.0
    starter_consumption_rate: float = 0.1

    ip_chamber: CompressionChamberConfig = field(
        default_factory=lambda: CompressionChamberConfig(3.0, 0.0, 2.0)
    )
    hp_chamber: CompressionChamberConfig = field(
        default_factory=lambda: CompressionChamberConfig(1.5, 2.5, 4.0)
    )

    hpv_pid: PIDConfig = field(default_factory=lambda: PIDConfig(kp=0.05, setpoint_psi=65.0))
    prv_pid: PIDConfig = field(default_factory=lambda: PIDConfig(ki=0.01, setpoint_psi=46.0))

    ip_valve_close_margin_pa: float = 100.0
    hpv_min_transfer_psi: float = 18.0
    prv_min_transfer_psi: float = 15.0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PneumaticConfig":
        """Build a config from a dictionary, keeping defaults for missing keys.

        Raises:
            ConfigError: On unknown keys.
        """
        config = cls()
        nested = {
            "ip_chamber": CompressionChamberConfig,
            "hp_chamber": CompressionChamberConfig,
            "hpv_pid": PIDConfig,
            "prv_pid": PIDConfig,
        }
        known = {f.name for f in fields(cls)}

        overrides: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                raise ConfigError(f"Unknown pneumatic setting: {key}")

            if key in nested:
                if not isinstance(value, dict):
                    raise ConfigError(f"Pneumatic setting is not a section: {key}")
                try:
                    overrides[key] = replace(getattr(config, key), **value)
                except TypeError as e:
                    raise ConfigError(f"Invalid pneumatic section {key}: {e}") from e
            else:
                try:
                    overrides[key] = float(value)
                except (TypeError, ValueError) as e:
                    raise ConfigError(f"Pneumatic setting {key} is not a number: {value!r}") from e

        return replace(config, **overrides)

    @classmethod
    def load(cls, path: str | Path) -> "PneumaticConfig":
        """Load the "pneumatic" section of a YAML file.

        A file without that section yields the defaults.
        """
        loader = ConfigLoader.load(path)
        section = loader.get("pneumatic", default={}) or {}
        if not isinstance(section, dict):
            raise ConfigError("Configuration key is not a section: pneumatic")

        config = cls.from_dict(section)
        logger.info("Pneumatic configuration loaded from %s", path)
        return config
