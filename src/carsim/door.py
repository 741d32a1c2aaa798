from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

# Slack for accumulated float error when comparing door extents.
EXTENT_TOLERANCE = 1e-9


@dataclass(frozen=True)
class DoorModel:
    """Door travel and dwell timing, one tick at a time."""

    door_speed: float
    wait_ticks: int

    @property
    def travel_ticks(self) -> int:
        """Ticks needed to fully open (or fully close) the doors."""
        return int(math.ceil(1.0 / self.door_speed - EXTENT_TOLERANCE))

    @property
    def cycle_ticks(self) -> int:
        return 2 * self.travel_ticks + max(self.wait_ticks, 1)

    def open_step(self, extent: float) -> Tuple[float, bool]:
        opened = extent + self.door_speed
        if opened >= 1.0 - EXTENT_TOLERANCE:
            return 1.0, True
        return opened, False

    def dwell_step(self, wait_counter: int) -> Tuple[int, bool]:
        remaining = wait_counter - 1
        if remaining <= 0:
            return 0, True
        return remaining, False

    def close_step(self, extent: float) -> Tuple[float, bool]:
        closed = extent - self.door_speed
        if closed <= EXTENT_TOLERANCE:
            return 0.0, True
        return closed, False
