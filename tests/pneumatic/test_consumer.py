"""Tests for consumers and the heat exchanger."""

import pytest

from bleedair.pneumatic.consumer import ConstantConsumerController, Consumer
from bleedair.pneumatic.container import AIR, Pipe
from bleedair.pneumatic.heat_exchanger import HeatExchanger
from bleedair.pneumatic.valve import Valve
from bleedair.units import celsius_to_kelvin, psi_to_pa


class TestConstantConsumerController:
    """Test the constant rate consumption controller."""

    def test_signal_scales_with_time_step(self) -> None:
        """Test consumed volume is rate times dt."""
        controller = ConstantConsumerController(0.1)

        controller.update(0.5)

        assert controller.signal().consumed_volume == pytest.approx(0.05)

    def test_signal_before_update_is_zero(self) -> None:
        """Test initial consumption."""
        assert ConstantConsumerController(0.1).signal().consumed_volume == 0.0


class TestConsumer:
    """Test consumer draining."""

    def test_starts_at_one_psi(self) -> None:
        """Test default initial pressure."""
        assert Consumer(1.0).pressure() == pytest.approx(psi_to_pa(1.0))

    def test_small_consumption_lowers_pressure(self) -> None:
        """Test that consumption reduces pressure by the linear relation."""
        consumer = Consumer(1.0)
        controller = ConstantConsumerController(0.1)

        controller.update(0.01)
        consumer.update(controller)

        assert consumer.pressure() == pytest.approx(psi_to_pa(1.0) - 142000.0 * 0.001)

    def test_pressure_never_drops_below_zero(self) -> None:
        """Test that consumption is capped at what the consumer holds."""
        consumer = Consumer(1.0)
        controller = ConstantConsumerController(0.1)

        for _ in range(5):
            controller.update(1.0)
            consumer.update(controller)

        assert consumer.pressure() == pytest.approx(0.0, abs=1e-6)

    def test_consumer_takes_air_through_valve(self) -> None:
        """Test that a consumer refills from a higher pressure duct."""
        duct = Pipe(1.0, AIR, psi_to_pa(40.0), celsius_to_kelvin(150.0))
        consumer = Consumer(1.0)

        Valve.new_open().update_move_fluid(1.0, duct, consumer)

        assert consumer.pressure() > psi_to_pa(1.0)
        assert duct.pressure() < psi_to_pa(40.0)


class TestHeatExchanger:
    """Test heat exchange between a hot stream and a cooling supply."""

    def test_exchanges_heat(self) -> None:
        """Test that temperatures move toward each other by the coefficient."""
        hot = Pipe.at(1.0, 40.0, 200.0)
        supply = Pipe.at(1.0, 14.7, 15.0)
        downstream = Pipe.at(1.0, 40.0, 150.0)
        exchanger = HeatExchanger(0.1)

        exchanger.update(1.0, hot, supply, downstream)

        assert hot.temperature() == pytest.approx(celsius_to_kelvin(200.0) - 18.5)
        assert supply.temperature() == pytest.approx(celsius_to_kelvin(15.0) + 18.5)

    def test_moves_air_downstream(self) -> None:
        """Test that hot air flows on to the downstream duct."""
        hot = Pipe.at(1.0, 40.0, 200.0)
        supply = Pipe.at(1.0, 14.7, 15.0)
        downstream = Pipe.at(1.0, 14.7, 15.0)

        HeatExchanger(0.1).update(0.1, hot, supply, downstream)

        assert downstream.pressure() > psi_to_pa(14.7)
        assert hot.pressure() < psi_to_pa(40.0)
        assert supply.pressure() == pytest.approx(psi_to_pa(14.7))
