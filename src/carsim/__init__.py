"""Single-car elevator control primitives."""

from .config import CarConfig
from .controller import ElevatorController, advance
from .door import DoorModel
from .motion import MovementModel, nearest_floor
from .state import CarState, ElevatorState
from .status import StatusLine, button_label, describe

__all__ = [
    "CarConfig",
    "CarState",
    "DoorModel",
    "ElevatorController",
    "ElevatorState",
    "MovementModel",
    "StatusLine",
    "advance",
    "button_label",
    "describe",
    "nearest_floor",
]
