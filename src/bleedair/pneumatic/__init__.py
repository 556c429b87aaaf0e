"""Generic pneumatic components: containers, valves, chambers, consumers.

These building blocks know nothing about a particular aircraft; the A320
network in bleedair.a320 is assembled from them.
"""

from bleedair.pneumatic.chamber import (
    ApuCompressionChamberController,
    CompressionChamber,
    ConstantPressureController,
    EngineCompressionChamberController,
)
from bleedair.pneumatic.consumer import ConstantConsumerController, Consumer
from bleedair.pneumatic.container import AIR, Fluid, PneumaticContainer, Pipe
from bleedair.pneumatic.heat_exchanger import HeatExchanger
from bleedair.pneumatic.modes import (
    CrossBleedValveSelectorMode,
    EngineState,
    WingAntiIcePushButtonMode,
)
from bleedair.pneumatic.signals import (
    ApuBleedAirValveSignal,
    ConsumptionSignal,
    ControlledValveSignal,
    TargetPressureSignal,
)
from bleedair.pneumatic.valve import Valve

__all__ = [
    "AIR",
    "ApuBleedAirValveSignal",
    "ApuCompressionChamberController",
    "CompressionChamber",
    "ConstantConsumerController",
    "ConstantPressureController",
    "ConsumptionSignal",
    "Consumer",
    "ControlledValveSignal",
    "CrossBleedValveSelectorMode",
    "EngineCompressionChamberController",
    "EngineState",
    "Fluid",
    "HeatExchanger",
    "Pipe",
    "PneumaticContainer",
    "TargetPressureSignal",
    "Valve",
    "WingAntiIcePushButtonMode",
]
