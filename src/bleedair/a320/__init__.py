"""A320 bleed air system: BMCs, engine bleed systems, cross bleed and APU supply."""

from bleedair.a320.bmc import BleedMonitoringComputer, BleedMonitoringComputerChannel
from bleedair.a320.config import CompressionChamberConfig, PIDConfig, PneumaticConfig
from bleedair.a320.controllers import (
    CrossBleedValveController,
    EngineStarterValveController,
    FullAuthorityDigitalEngineControl,
)
from bleedair.a320.engine_bleed import EngineBleedAirSystem
from bleedair.a320.errors import InvalidEngineNumberError
from bleedair.a320.overhead import (
    A320PneumaticOverheadPanel,
    AutoOffFaultPushButton,
    CrossBleedValveSelectorKnob,
    OnOffFaultPushButton,
    WingAntiIcePushButton,
)
from bleedair.a320.pneumatic import A320Pneumatic, ValveChange

__all__ = [
    "A320Pneumatic",
    "A320PneumaticOverheadPanel",
    "AutoOffFaultPushButton",
    "BleedMonitoringComputer",
    "BleedMonitoringComputerChannel",
    "CompressionChamberConfig",
    "CrossBleedValveController",
    "CrossBleedValveSelectorKnob",
    "EngineBleedAirSystem",
    "EngineStarterValveController",
    "FullAuthorityDigitalEngineControl",
    "InvalidEngineNumberError",
    "OnOffFaultPushButton",
    "PIDConfig",
    "PneumaticConfig",
    "ValveChange",
    "WingAntiIcePushButton",
]
