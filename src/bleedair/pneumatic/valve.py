"""Controllable valve between two pneumatic containers.

The valve moves the volume that would equalize the pressure of the two
containers, scaled by its open amount and by an exponential factor of the
time step:

    equalization = (p_from - p_to) * V_from * V_to / B / (V_from + V_to)
    moved = open_amount * equalization * (1 - exp(-k * dt))

The exponential law makes the result independent of how a duration is split
into steps: two 200 ms steps move the same air as one 400 ms step. Flow
always goes from high to low pressure and a closed valve moves nothing.
"""

import math

from bleedair.pneumatic.container import AIR, Fluid, PneumaticContainer
from bleedair.pneumatic.signals import ControllerSignal, ValveOpenSignal


class Valve:
    """Throttled restrictor between two containers.

    A valve does not own the containers it connects; they are handed to
    update_move_fluid for the duration of the transfer.

    Examples:
        >>> valve = Valve.new_closed()
        >>> valve.update_open_amount(controller)
        >>> valve.update_move_fluid(dt=0.016, source=chamber, destination=pipe)
    """

    TRANSFER_SPEED = 3.0  # 1/s

    def __init__(
        self,
        open_amount: float,
        transfer_speed: float = TRANSFER_SPEED,
        fluid: Fluid = AIR,
    ) -> None:
        """Initialize valve.

        Args:
            open_amount: Initial open ratio (0.0 closed, 1.0 fully open).
            transfer_speed: Exponential transfer speed k in 1/s.
            fluid: Fluid whose bulk modulus sizes the equalization volume.
        """
        self._open_amount = open_amount
        self._transfer_speed = transfer_speed
        self._fluid = fluid

    @classmethod
    def new_open(cls, **kwargs) -> "Valve":
        return cls(1.0, **kwargs)

    @classmethod
    def new_closed(cls, **kwargs) -> "Valve":
        return cls(0.0, **kwargs)

    @property
    def open_amount(self) -> float:
        return self._open_amount

    def is_open(self) -> bool:
        return self._open_amount > 0.0

    def update_open_amount(self, controller: ControllerSignal[ValveOpenSignal]) -> None:
        """Apply the controller's latest command.

        If the controller abstains the valve keeps its previous open amount.
        """
        signal = controller.signal()
        if signal is not None:
            self._open_amount = signal.target_open_amount

    def update_move_fluid(
        self, dt: float, source: PneumaticContainer, destination: PneumaticContainer
    ) -> None:
        """Move air between the containers for a time step of dt seconds.

        Despite the names, air flows from destination to source when the
        destination holds the higher pressure.
        """
        self._move_volume(source, destination, self._volume_to_move(dt, source, destination))

    def update_move_fluid_with_temperature(
        self, dt: float, source: PneumaticContainer, destination: PneumaticContainer
    ) -> None:
        """Same as update_move_fluid, then mixes the receiving container's temperature.

        The container that received air takes the volume-weighted mean of the
        parcel's temperature and its own. With reverse flow the receiver is
        source and the parcel comes from destination.
        """
        moved = self._volume_to_move(dt, source, destination)
        self._move_volume(source, destination, moved)

        if moved >= 0.0:
            sender, receiver, parcel = source, destination, moved
        else:
            sender, receiver, parcel = destination, source, -moved

        volume = receiver.volume()
        if parcel + volume <= 0.0:
            return

        mixed = (parcel * sender.temperature() + volume * receiver.temperature()) / (
            parcel + volume
        )
        receiver.update_temperature(mixed - receiver.temperature())

    def _volume_to_move(
        self, dt: float, source: PneumaticContainer, destination: PneumaticContainer
    ) -> float:
        equalization_volume = (
            (source.pressure() - destination.pressure())
            * source.volume()
            * destination.volume()
            / self._fluid.bulk_modulus
            / (source.volume() + destination.volume())
        )

        return (
            self._open_amount
            * equalization_volume
            * (1.0 - math.exp(-self._transfer_speed * dt))
        )

    @staticmethod
    def _move_volume(
        source: PneumaticContainer, destination: PneumaticContainer, volume: float
    ) -> None:
        source.change_volume(-volume)
        destination.change_volume(volume)
