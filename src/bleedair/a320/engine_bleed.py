"""Bleed air system of a single engine.

    IP chamber --IP valve--+
                           +--> transfer pipe --PRV--> regulated pipe --starter valve--> starter
    HP chamber --HP valve--+

The IP and HP chambers follow the engine's compressor stages. The transfer
pipe collects whichever of them is feeding; the pressure regulating valve
(PRV) feeds the regulated pipe, which is also the connection point for the
APU and the cross bleed duct.
"""

from bleedair.a320.config import PneumaticConfig
from bleedair.pneumatic.chamber import (
    CompressionChamber,
    EngineCompressionChamberController,
    EngineCorrectedSpeeds,
)
from bleedair.pneumatic.consumer import ConstantConsumerController, Consumer
from bleedair.pneumatic.container import Fluid, Pipe
from bleedair.pneumatic.signals import ControllerSignal, ValveOpenSignal
from bleedair.pneumatic.valve import Valve
from bleedair.simulation import UpdateContext
from bleedair.units import celsius_to_kelvin, psi_to_pa


class EngineBleedAirSystem:
    """Per-engine bleed air subgraph.

    The whole subsystem also behaves as a pneumatic container represented
    by its regulated pipe, so the APU and cross bleed valves can connect to
    it directly.

    Attributes:
        number: Engine number (1 or 2).
    """

    def __init__(self, number: int, config: PneumaticConfig | None = None) -> None:
        config = config or PneumaticConfig()
        self.number = number

        fluid = Fluid(config.bulk_modulus_pa)
        pressure = psi_to_pa(config.initial_pressure_psi)
        temperature = celsius_to_kelvin(config.initial_temperature_c)
        speed = config.valve_transfer_speed

        ip, hp = config.ip_chamber, config.hp_chamber
        self.ip_compression_chamber_controller = EngineCompressionChamberController(
            ip.n1_factor, ip.n2_factor, ip.compression_factor
        )
        self.hp_compression_chamber_controller = EngineCompressionChamberController(
            hp.n1_factor, hp.n2_factor, hp.compression_factor
        )
        self.ip_compression_chamber = CompressionChamber(
            config.chamber_volume, pressure, temperature, fluid=fluid
        )
        self.hp_compression_chamber = CompressionChamber(
            config.chamber_volume, pressure, temperature, fluid=fluid
        )

        self.ip_valve = Valve.new_open(transfer_speed=speed, fluid=fluid)
        self.hp_valve = Valve.new_closed(transfer_speed=speed, fluid=fluid)
        self.pr_valve = Valve.new_closed(transfer_speed=speed, fluid=fluid)
        self.es_valve = Valve.new_closed(transfer_speed=speed, fluid=fluid)

        self.transfer_pressure_pipe = Pipe(config.pipe_volume, fluid, pressure, temperature)
        self.regulated_pressure_pipe = Pipe(config.pipe_volume, fluid, pressure, temperature)

        self.engine_starter_consumer = Consumer(config.consumer_volume, fluid=fluid)
        self.engine_starter_consumer_controller = ConstantConsumerController(
            config.starter_consumption_rate
        )

    def update(
        self,
        context: UpdateContext,
        ipv_controller: ControllerSignal[ValveOpenSignal],
        hpv_controller: ControllerSignal[ValveOpenSignal],
        prv_controller: ControllerSignal[ValveOpenSignal],
        esv_controller: ControllerSignal[ValveOpenSignal],
        engine: EngineCorrectedSpeeds,
    ) -> None:
        """Advance the subsystem by one tick.

        Chambers follow the engine first, then the valves take their new
        commands, then air moves from the chambers towards the starter.
        """
        dt = context.delta

        ambient, mach = context.ambient_pressure, context.mach
        self.ip_compression_chamber_controller.update(ambient, mach, engine)
        self.hp_compression_chamber_controller.update(ambient, mach, engine)
        self.ip_compression_chamber.update(self.ip_compression_chamber_controller)
        self.hp_compression_chamber.update(self.hp_compression_chamber_controller)

        self.engine_starter_consumer_controller.update(dt)
        self.engine_starter_consumer.update(self.engine_starter_consumer_controller)

        self.ip_valve.update_open_amount(ipv_controller)
        self.hp_valve.update_open_amount(hpv_controller)
        self.pr_valve.update_open_amount(prv_controller)
        self.es_valve.update_open_amount(esv_controller)

        transfer = self.transfer_pressure_pipe
        regulated = self.regulated_pressure_pipe
        self.ip_valve.update_move_fluid(dt, self.ip_compression_chamber, transfer)
        self.hp_valve.update_move_fluid(dt, self.hp_compression_chamber, transfer)
        self.pr_valve.update_move_fluid(dt, transfer, regulated)
        self.es_valve.update_move_fluid(dt, regulated, self.engine_starter_consumer)

    # Sensor readings

    def ip_pressure(self) -> float:
        return self.ip_compression_chamber.pressure()

    def hp_pressure(self) -> float:
        return self.hp_compression_chamber.pressure()

    def transfer_pressure(self) -> float:
        return self.transfer_pressure_pipe.pressure()

    def regulated_pressure(self) -> float:
        return self.regulated_pressure_pipe.pressure()

    def ip_temperature(self) -> float:
        return self.ip_compression_chamber.temperature()

    def hp_temperature(self) -> float:
        return self.hp_compression_chamber.temperature()

    def transfer_temperature(self) -> float:
        return self.transfer_pressure_pipe.temperature()

    def regulated_temperature(self) -> float:
        return self.regulated_pressure_pipe.temperature()

    def prv_open_amount(self) -> float:
        return self.pr_valve.open_amount

    def hpv_open_amount(self) -> float:
        return self.hp_valve.open_amount

    def esv_is_open(self) -> bool:
        return self.es_valve.is_open()

    # Container view through the regulated pipe

    def pressure(self) -> float:
        return self.regulated_pressure_pipe.pressure()

    def volume(self) -> float:
        return self.regulated_pressure_pipe.volume()

    def temperature(self) -> float:
        return self.regulated_pressure_pipe.temperature()

    def change_volume(self, volume: float) -> None:
        self.regulated_pressure_pipe.change_volume(volume)

    def update_temperature(self, temperature_delta: float) -> None:
        self.regulated_pressure_pipe.update_temperature(temperature_delta)

    def update_pressure_only(self, volume: float) -> None:
        self.regulated_pressure_pipe.update_pressure_only(volume)
