from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CarConfig:
    """Physical constants and floor bounds for a single car."""

    ground_floor: int = 0
    top_floor: int = 5
    speed: float = 0.03  # floors per tick
    door_speed: float = 0.05  # extent per tick
    wait_ticks: int = 50
    tick_interval_ms: int = 30  # advisory, read by drivers only
    initial_floor: Optional[int] = None

    def __post_init__(self) -> None:
        if self.top_floor < self.ground_floor:
            raise ValueError(
                f"top_floor ({self.top_floor}) must not be below ground_floor ({self.ground_floor})"
            )
        if self.speed <= 0:
            raise ValueError(f"speed must be positive, got {self.speed}")
        if not 0 < self.door_speed <= 1:
            raise ValueError(f"door_speed must be in (0, 1], got {self.door_speed}")
        if self.wait_ticks < 0:
            raise ValueError(f"wait_ticks must not be negative, got {self.wait_ticks}")
        if self.tick_interval_ms <= 0:
            raise ValueError(f"tick_interval_ms must be positive, got {self.tick_interval_ms}")
        if self.initial_floor is not None and not self.contains(self.initial_floor):
            raise ValueError(
                f"initial_floor {self.initial_floor} outside [{self.ground_floor}, {self.top_floor}]"
            )

    @property
    def start_floor(self) -> int:
        if self.initial_floor is None:
            return self.ground_floor
        return self.initial_floor

    @property
    def floors(self) -> range:
        return range(self.ground_floor, self.top_floor + 1)

    def contains(self, floor: object) -> bool:
        if isinstance(floor, bool) or not isinstance(floor, int):
            return False
        return self.ground_floor <= floor <= self.top_floor
