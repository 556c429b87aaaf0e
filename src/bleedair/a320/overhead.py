"""Pneumatic section of the A320 overhead panel.

Only the state the pneumatic system needs is modelled: the APU bleed push
button, the cross bleed selector, both engine bleed push buttons and the
wing anti ice push button. Every control reads and writes its state as
named numeric host variables.
"""

from collections.abc import Mapping

from bleedair.a320.errors import check_engine_number
from bleedair.pneumatic.modes import CrossBleedValveSelectorMode, WingAntiIcePushButtonMode


class AutoOffFaultPushButton:
    """Push button with AUTO/OFF positions and a FAULT light."""

    def __init__(self, name: str, is_auto: bool = True) -> None:
        self._is_auto_id = f"OVHD_{name}_PB_IS_AUTO"
        self._has_fault_id = f"OVHD_{name}_PB_HAS_FAULT"
        self.auto = is_auto
        self.fault = False

    @classmethod
    def new_auto(cls, name: str) -> "AutoOffFaultPushButton":
        return cls(name, is_auto=True)

    def is_auto(self) -> bool:
        return self.auto

    def has_fault(self) -> bool:
        return self.fault

    def read(self, values: Mapping[str, float]) -> None:
        if self._is_auto_id in values:
            self.auto = bool(values[self._is_auto_id])
        if self._has_fault_id in values:
            self.fault = bool(values[self._has_fault_id])

    def write(self, values: dict[str, float | bool]) -> None:
        values[self._is_auto_id] = self.auto
        values[self._has_fault_id] = self.fault


class OnOffFaultPushButton:
    """Push button with ON/OFF positions and a FAULT light."""

    def __init__(self, name: str, is_on: bool = True) -> None:
        self._is_on_id = f"OVHD_{name}_PB_IS_ON"
        self._has_fault_id = f"OVHD_{name}_PB_HAS_FAULT"
        self.on = is_on
        self.fault = False

    @classmethod
    def new_on(cls, name: str) -> "OnOffFaultPushButton":
        return cls(name, is_on=True)

    def is_on(self) -> bool:
        return self.on

    def has_fault(self) -> bool:
        return self.fault

    def read(self, values: Mapping[str, float]) -> None:
        if self._is_on_id in values:
            self.on = bool(values[self._is_on_id])
        if self._has_fault_id in values:
            self.fault = bool(values[self._has_fault_id])

    def write(self, values: dict[str, float | bool]) -> None:
        values[self._is_on_id] = self.on
        values[self._has_fault_id] = self.fault


class CrossBleedValveSelectorKnob:
    """Three position cross bleed selector (SHUT / AUTO / OPEN)."""

    MODE_ID = "KNOB_OVHD_AIRCOND_XBLEED_Position"

    def __init__(
        self, mode: CrossBleedValveSelectorMode = CrossBleedValveSelectorMode.AUTO
    ) -> None:
        self._mode = mode

    @classmethod
    def new_auto(cls) -> "CrossBleedValveSelectorKnob":
        return cls(CrossBleedValveSelectorMode.AUTO)

    def mode(self) -> CrossBleedValveSelectorMode:
        return self._mode

    def set_mode(self, mode: CrossBleedValveSelectorMode) -> None:
        self._mode = mode

    def read(self, values: Mapping[str, float]) -> None:
        if self.MODE_ID in values:
            self._mode = CrossBleedValveSelectorMode.from_value(values[self.MODE_ID])

    def write(self, values: dict[str, float | bool]) -> None:
        values[self.MODE_ID] = self._mode.value


class WingAntiIcePushButton:
    """Wing anti ice push button (OFF / ON), off by default."""

    MODE_ID = "BUTTON_OVHD_ANTI_ICE_WING_Position"

    def __init__(self, mode: WingAntiIcePushButtonMode = WingAntiIcePushButtonMode.OFF) -> None:
        self._mode = mode

    @classmethod
    def new_off(cls) -> "WingAntiIcePushButton":
        return cls(WingAntiIcePushButtonMode.OFF)

    def mode(self) -> WingAntiIcePushButtonMode:
        return self._mode

    def is_on(self) -> bool:
        return self._mode is WingAntiIcePushButtonMode.ON

    def read(self, values: Mapping[str, float]) -> None:
        if self.MODE_ID in values:
            self._mode = WingAntiIcePushButtonMode.from_value(values[self.MODE_ID])

    def write(self, values: dict[str, float | bool]) -> None:
        values[self.MODE_ID] = self.is_on()


class A320PneumaticOverheadPanel:
    """Overhead panel controls used by the pneumatic system.

    Examples:
        >>> panel = A320PneumaticOverheadPanel()
        >>> panel.read({"OVHD_PNEU_ENG_1_BLEED_PB_IS_AUTO": 0})
        >>> panel.engine_bleed_pb_is_auto(1)
        False
    """

    def __init__(self) -> None:
        self.apu_bleed = OnOffFaultPushButton.new_on("APU_BLEED")
        self.cross_bleed = CrossBleedValveSelectorKnob.new_auto()
        self.engine_1_bleed = AutoOffFaultPushButton.new_auto("PNEU_ENG_1_BLEED")
        self.engine_2_bleed = AutoOffFaultPushButton.new_auto("PNEU_ENG_2_BLEED")
        self.wing_anti_ice = WingAntiIcePushButton.new_off()

    def apu_bleed_is_on(self) -> bool:
        return self.apu_bleed.is_on()

    def cross_bleed_mode(self) -> CrossBleedValveSelectorMode:
        return self.cross_bleed.mode()

    def wing_anti_ice_is_on(self) -> bool:
        return self.wing_anti_ice.is_on()

    def engine_bleed_pb_is_auto(self, engine_number: int) -> bool:
        return self._engine_bleed(engine_number).is_auto()

    def engine_bleed_pb_has_fault(self, engine_number: int) -> bool:
        return self._engine_bleed(engine_number).has_fault()

    def _engine_bleed(self, engine_number: int) -> AutoOffFaultPushButton:
        check_engine_number(engine_number)
        return self.engine_1_bleed if engine_number == 1 else self.engine_2_bleed

    def read(self, values: Mapping[str, float]) -> None:
        """Update controls from host variables; missing keys are left as is."""
        self.apu_bleed.read(values)
        self.cross_bleed.read(values)
        self.engine_1_bleed.read(values)
        self.engine_2_bleed.read(values)
        self.wing_anti_ice.read(values)

    def write(self, values: dict[str, float | bool]) -> None:
        self.apu_bleed.write(values)
        self.cross_bleed.write(values)
        self.engine_1_bleed.write(values)
        self.engine_2_bleed.write(values)
        self.wing_anti_ice.write(values)
