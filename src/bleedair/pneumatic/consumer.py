"""Pneumatic consumers (engine starter, packs).

A consumer is a container that loses air at a controlled rate. Its pressure
never drops below zero: consumption is capped at what the container holds.
"""

from bleedair.pneumatic.container import AIR, Fluid, Pipe, PipeBacked
from bleedair.pneumatic.signals import ConsumptionSignal, ControllerSignal
from bleedair.units import celsius_to_kelvin, psi_to_pa


class ConstantConsumerController:
    """Consumes a fixed volume rate (m^3/s)."""

    def __init__(self, consumption_rate: float) -> None:
        self.consumption_rate = consumption_rate
        self._consumed_since_update = 0.0

    def update(self, dt: float) -> None:
        self._consumed_since_update = self.consumption_rate * dt

    def signal(self) -> ConsumptionSignal:
        return ConsumptionSignal(self._consumed_since_update)


class Consumer(PipeBacked):
    """Container drained by a consumption controller."""

    def __init__(
        self,
        volume: float,
        pressure: float = psi_to_pa(1.0),
        temperature: float = celsius_to_kelvin(15.0),
        fluid: Fluid = AIR,
    ) -> None:
        self._pipe = Pipe(volume, fluid, pressure, temperature)

    def update(self, controller: ControllerSignal[ConsumptionSignal]) -> None:
        signal = controller.signal()
        if signal is None:
            return

        max_consumption = -self._pipe.volume_to_reach(0.0)
        self.change_volume(-min(signal.consumed_volume, max_consumption))
