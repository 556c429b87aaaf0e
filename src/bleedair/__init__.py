"""BleedAir - A320 pneumatic (bleed air) network simulation.

The package models the engine and APU bleed air network as a graph of
pressurized containers connected by controllable valves, regulated by the
bleed monitoring computers.
"""

__version__ = "0.1.0"
