"""Tests for the per-sample PID controller."""

import pytest

from bleedair.control.pid import PIDController


class TestPIDController:
    """Test PID terms and clamping."""

    def test_proportional_term(self) -> None:
        """Test P output below the limit."""
        pid = PIDController(kp=0.05, ki=0.0, kd=0.0, setpoint=65.0)

        assert pid.next_control_output(60.0) == pytest.approx(0.25)

    def test_proportional_term_saturates(self) -> None:
        """Test that a large error saturates at the output limit."""
        pid = PIDController(kp=0.05, ki=0.0, kd=0.0, setpoint=65.0)

        assert pid.next_control_output(20.0) == 1.0

    def test_negative_output(self) -> None:
        """Test output below zero when above setpoint."""
        pid = PIDController(kp=0.05, ki=0.0, kd=0.0, setpoint=65.0)

        assert pid.next_control_output(80.0) == pytest.approx(-0.75)

    def test_integral_accumulates_per_sample(self) -> None:
        """Test that the integral adds ki * error each call."""
        pid = PIDController(kp=0.0, ki=0.01, kd=0.0, setpoint=46.0)

        first = pid.next_control_output(14.7)
        second = pid.next_control_output(14.7)

        assert first == pytest.approx(0.313)
        assert second == pytest.approx(0.626)

    def test_integral_is_clamped(self) -> None:
        """Test anti-windup on the integral term."""
        pid = PIDController(kp=0.0, ki=0.01, kd=0.0, setpoint=46.0)

        for _ in range(100):
            pid.next_control_output(0.0)

        assert pid.integral_term == 1.0
        # One sample above setpoint already unwinds the integral
        assert pid.next_control_output(56.0) == pytest.approx(0.9)

    def test_derivative_on_measurement(self) -> None:
        """Test that the derivative term opposes measurement change."""
        pid = PIDController(kp=0.0, ki=0.0, kd=0.1, setpoint=0.0)

        assert pid.next_control_output(10.0) == 0.0
        assert pid.next_control_output(12.0) == pytest.approx(-0.2)

    def test_custom_limits(self) -> None:
        """Test per-term and output limits."""
        pid = PIDController(kp=1.0, ki=0.0, kd=0.0, setpoint=10.0, p_limit=5.0, output_limit=2.0)

        assert pid.next_control_output(0.0) == 2.0

    def test_reset(self) -> None:
        """Test that reset clears integral and derivative history."""
        pid = PIDController(kp=0.0, ki=0.01, kd=0.1, setpoint=46.0)
        pid.next_control_output(14.7)

        pid.reset()

        assert pid.integral_term == 0.0
        assert pid.prev_measurement is None
