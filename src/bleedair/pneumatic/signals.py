"""Controller signals.

Controllers emit small, immutable signals that are consumed immediately by
the component they drive: a valve takes a target open amount, a compression
chamber a target pressure, a consumer a consumed volume. A controller may
also abstain (return None), in which case the driven component keeps its
current state.

Typical usage:
    class AlwaysOpen:
        def signal(self) -> ControlledValveSignal | None:
            return ControlledValveSignal.open()

    valve.update_open_amount(AlwaysOpen())
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, TypeVar

S = TypeVar("S", covariant=True)


class ControllerSignal(Protocol[S]):
    """Anything that can produce a signal for a controlled component."""

    def signal(self) -> S | None: ...


class ValveOpenSignal(Protocol):
    """A signal carrying a target valve open amount in [0, 1]."""

    @property
    def target_open_amount(self) -> float: ...


@dataclass(frozen=True)
class ControlledValveSignal:
    """Target open amount for a controllable valve.

    Attributes:
        target_open_amount: Ratio from 0.0 (closed) to 1.0 (fully open).
    """

    target_open_amount: float

    @classmethod
    def open(cls) -> "ControlledValveSignal":
        return cls(1.0)

    @classmethod
    def closed(cls) -> "ControlledValveSignal":
        return cls(0.0)


class ApuBleedAirValveSignal(Enum):
    """Bleed valve command issued by the APU's electronic control box."""

    OPEN = "open"
    CLOSE = "close"

    @property
    def target_open_amount(self) -> float:
        return 1.0 if self is ApuBleedAirValveSignal.OPEN else 0.0


@dataclass(frozen=True)
class TargetPressureSignal:
    """Pressure a compression chamber should reach this tick (Pa)."""

    target_pressure: float


@dataclass(frozen=True)
class ConsumptionSignal:
    """Volume a consumer used since the previous tick (m^3)."""

    consumed_volume: float
