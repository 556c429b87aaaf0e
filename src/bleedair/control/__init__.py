"""Control laws shared by the pneumatic controllers."""

from bleedair.control.pid import PIDController

__all__ = ["PIDController"]
