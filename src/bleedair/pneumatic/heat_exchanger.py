"""Heat exchanger (precooler).

Hot bleed air passing through the exchanger gives heat to a cooling supply
stream before flowing on to the downstream duct.
"""

from bleedair.pneumatic.container import PneumaticContainer
from bleedair.pneumatic.valve import Valve


class HeatExchanger:
    """Exchanges heat between a hot stream and a cooling supply.

    Attributes:
        coefficient: Fraction of the temperature gradient exchanged per
            second.
    """

    def __init__(self, coefficient: float) -> None:
        self.coefficient = coefficient
        self._internal_valve = Valve.new_open()

    def update(
        self,
        dt: float,
        hot: PneumaticContainer,
        supply: PneumaticContainer,
        downstream: PneumaticContainer,
    ) -> None:
        """Exchange heat, then move air from hot to downstream.

        Args:
            dt: Time step in seconds.
            hot: Hot bleed air entering the exchanger.
            supply: Cooling air (fan air on the real aircraft).
            downstream: Duct the cooled bleed air flows into.
        """
        gradient = supply.temperature() - hot.temperature()

        supply.update_temperature(-self.coefficient * gradient * dt)
        hot.update_temperature(self.coefficient * gradient * dt)

        self._internal_valve.update_move_fluid(dt, hot, downstream)
