"""Discrete PID controller.

The bleed monitoring computers run their loops once per simulation tick, so
the controller works per sample rather than per second: the integral
accumulates ki * error each call and the derivative acts on the change of
the measurement between calls. Each term and the output are clamped
symmetrically to their own limit.
"""

from dataclasses import dataclass


def _clamp(value: float, limit: float) -> float:
    return max(-limit, min(limit, value))


@dataclass
class PIDController:
    """Per-sample PID controller with a fixed setpoint.

    Attributes:
        kp: Proportional gain
        ki: Integral gain (per sample)
        kd: Derivative gain (per sample)
        setpoint: Target value of the measurement
        p_limit: Bound on the proportional term
        i_limit: Bound on the accumulated integral term
        d_limit: Bound on the derivative term
        output_limit: Bound on the total output
        integral_term: Accumulated integral term
        prev_measurement: Measurement of the previous sample

    Examples:
        >>> pid = PIDController(kp=0.05, ki=0.0, kd=0.0, setpoint=65.0)
        >>> pid.next_control_output(20.0)
        1.0
    """

    kp: float
    ki: float
    kd: float
    setpoint: float
    p_limit: float = 1.0
    i_limit: float = 1.0
    d_limit: float = 1.0
    output_limit: float = 1.0
    integral_term: float = 0.0
    prev_measurement: float | None = None

    def next_control_output(self, measurement: float) -> float:
        """Advance one sample and return the control output.

        Args:
            measurement: Current value of the process variable.

        Returns:
            Control output in [-output_limit, output_limit].
        """
        error = self.setpoint - measurement

        p_term = _clamp(self.kp * error, self.p_limit)

        self.integral_term = _clamp(self.integral_term + self.ki * error, self.i_limit)

        d_term = 0.0
        if self.prev_measurement is not None:
            d_term = _clamp(-self.kd * (measurement - self.prev_measurement), self.d_limit)
        self.prev_measurement = measurement

        return _clamp(p_term + self.integral_term + d_term, self.output_limit)

    def reset(self) -> None:
        """Reset the accumulated state."""
        self.integral_term = 0.0
        self.prev_measurement = None
