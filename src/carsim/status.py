"""Human-readable status labels derived from the car's state."""

from __future__ import annotations

from dataclasses import dataclass

from .motion import nearest_floor
from .state import ElevatorState

DOOR_LABELS = {
    ElevatorState.DOOR_OPENING: "Door Opening",
    ElevatorState.DOOR_OPEN: "Door Open",
    ElevatorState.DOOR_CLOSING: "Door Closing",
}


@dataclass(frozen=True)
class StatusLine:
    floor: str
    direction: str
    door: str

    def render(self) -> str:
        return f"Floor: {self.floor}  {self.direction}  {self.door}"


def floor_label(floor: int) -> str:
    return "Ground" if floor == 0 else str(floor)


def button_label(floor: int) -> str:
    """Short label for a floor request button."""
    return "G" if floor == 0 else str(floor)


def direction_label(state: ElevatorState, position: float, target_floor: int) -> str:
    if state is not ElevatorState.MOVING:
        return ""
    return "Up" if target_floor > position else "Down"


def describe(state: ElevatorState, position: float, target_floor: int) -> StatusLine:
    return StatusLine(
        floor=floor_label(nearest_floor(position)),
        direction=direction_label(state, position, target_floor),
        door=DOOR_LABELS[state] if state.in_door_cycle else "",
    )
