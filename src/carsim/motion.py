from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


def nearest_floor(position: float) -> int:
    """Round a car position to a floor number, halves rounding up."""
    return int(math.floor(position + 0.5))


@dataclass(frozen=True)
class MovementModel:
    """Constant-speed travel toward a target floor."""

    speed: float

    def step(self, position: float, target_floor: int) -> Tuple[float, bool]:
        """Return the position after one tick and whether the car arrived.

        Arrival is detected once the remaining distance drops below one
        tick of travel; the position then snaps exactly onto the target so
        repeated trips never accumulate drift.
        """

        target = float(target_floor)
        remaining = target - position
        if abs(remaining) < self.speed:
            return target, True
        if remaining > 0:
            return min(position + self.speed, target), False
        return max(position - self.speed, target), False
