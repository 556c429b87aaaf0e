"""Discrete states read from numeric host variables.

The host exchanges selector positions and engine states as plain numbers.
Each enum maps every possible number to a member: values outside the known
encoding fall back to a default member instead of failing.
"""

from enum import Enum


def _host_code(value: float) -> int:
    """Truncate a host value to a small non-negative integer code.

    Negative and NaN values read as 0, like a saturating byte cast.
    """
    if not value > 0:
        return 0
    return int(min(value, 255.0))


class CrossBleedValveSelectorMode(Enum):
    """Cross bleed selector knob on the overhead panel."""

    SHUT = 0
    AUTO = 1
    OPEN = 2

    @classmethod
    def from_value(cls, value: float) -> "CrossBleedValveSelectorMode":
        """Decode a host value: 0 shut, 1 auto, anything else open."""
        code = _host_code(value)
        if code == 0:
            return cls.SHUT
        if code == 1:
            return cls.AUTO
        return cls.OPEN


class EngineState(Enum):
    """Engine state as reported by the FADEC."""

    OFF = 0
    ON = 1
    STARTING = 2
    SHUTTING = 3

    @classmethod
    def from_value(cls, value: float) -> "EngineState":
        """Decode a host value: 1 on, 2 starting, 3 shutting, anything else off."""
        code = _host_code(value)
        if code == 1:
            return cls.ON
        if code == 2:
            return cls.STARTING
        if code == 3:
            return cls.SHUTTING
        return cls.OFF


class WingAntiIcePushButtonMode(Enum):
    """Wing anti ice push button."""

    OFF = 0
    ON = 1

    @classmethod
    def from_value(cls, value: float) -> "WingAntiIcePushButtonMode":
        return cls.OFF if _host_code(value) == 0 else cls.ON
