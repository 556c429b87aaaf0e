"""Valve controllers outside the bleed monitoring computers.

- CrossBleedValveController: follows the overhead selector, and in AUTO
  mirrors the APU bleed valve.
- EngineStarterValveController: opens the starter valve while its engine is
  starting.
- FullAuthorityDigitalEngineControl: stand-in for the FADECs, which only
  report each engine's state to the pneumatic system.
"""

from collections.abc import Mapping
from typing import Protocol

from bleedair.a320.errors import check_engine_number
from bleedair.core.logging_system import get_logger
from bleedair.pneumatic.modes import CrossBleedValveSelectorMode, EngineState
from bleedair.pneumatic.signals import ControlledValveSignal

logger = get_logger(__name__)


class EngineStateSource(Protocol):
    """Reports the current state of engine 1 or 2."""

    def engine_state(self, number: int) -> EngineState: ...


class EngineFirePushButtons(Protocol):
    """Reports whether an engine's fire push button has been released."""

    def is_released(self, engine_number: int) -> bool: ...


class CrossBleedValveController:
    """Cross bleed valve command from selector position and APU valve."""

    def __init__(self) -> None:
        self._is_apu_bleed_valve_open = False
        self._selector = CrossBleedValveSelectorMode.AUTO

    def update(self, apu_bleed_valve_is_open: bool, selector: CrossBleedValveSelectorMode) -> None:
        self._is_apu_bleed_valve_open = apu_bleed_valve_is_open
        self._selector = selector

    def signal(self) -> ControlledValveSignal:
        if self._selector is CrossBleedValveSelectorMode.SHUT:
            return ControlledValveSignal.closed()
        if self._selector is CrossBleedValveSelectorMode.OPEN:
            return ControlledValveSignal.open()

        if self._is_apu_bleed_valve_open:
            return ControlledValveSignal.open()
        return ControlledValveSignal.closed()


class FullAuthorityDigitalEngineControl:
    """Holds the state of both engines as last read from the host."""

    def __init__(self) -> None:
        self._states = {1: EngineState.OFF, 2: EngineState.OFF}

    def engine_state(self, number: int) -> EngineState:
        check_engine_number(number)
        return self._states[number]

    def set_engine_state(self, number: int, state: EngineState) -> None:
        check_engine_number(number)
        if self._states[number] is not state:
            logger.info("Engine %d state: %s -> %s", number, self._states[number].name, state.name)
        self._states[number] = state

    def update(self, source: EngineStateSource) -> None:
        """Copy both engine states from an external source."""
        for number in self._states:
            self.set_engine_state(number, source.engine_state(number))

    def read(self, values: Mapping[str, float]) -> None:
        """Decode ENGINE_STATE:1 and ENGINE_STATE:2 host variables."""
        for number in self._states:
            key = f"ENGINE_STATE:{number}"
            if key in values:
                self.set_engine_state(number, EngineState.from_value(values[key]))


class EngineStarterValveController:
    """Starter valve command, recomputed every tick from the engine state."""

    def __init__(self, number: int) -> None:
        self.number = check_engine_number(number)
        self._engine_state = EngineState.OFF

    def update(self, engine_states: EngineStateSource) -> None:
        self._engine_state = engine_states.engine_state(self.number)

    def signal(self) -> ControlledValveSignal:
        if self._engine_state is EngineState.STARTING:
            return ControlledValveSignal.open()
        return ControlledValveSignal.closed()
