from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ElevatorState(str, Enum):
    IDLE = "idle"
    MOVING = "moving"
    DOOR_OPENING = "door_opening"
    DOOR_OPEN = "door_open"
    DOOR_CLOSING = "door_closing"

    @property
    def in_door_cycle(self) -> bool:
        return self in (ElevatorState.DOOR_OPENING, ElevatorState.DOOR_OPEN, ElevatorState.DOOR_CLOSING)


@dataclass(frozen=True)
class CarState:
    """Everything the transition function needs to know about the car."""

    phase: ElevatorState
    position: float
    target_floor: int
    door_extent: float = 0.0
    wait_counter: int = 0
