from __future__ import annotations

from typing import Iterator, List, Optional


class FirstComeFirstServedQueue:
    """Serves floor requests strictly in the order they were submitted."""

    def __init__(self) -> None:
        self._floors: List[int] = []

    def submit(self, floor: int, current_floor: int) -> bool:
        if floor in self._floors or floor == current_floor:
            return False
        self._floors.append(floor)
        return True

    def peek_head(self) -> Optional[int]:
        if not self._floors:
            return None
        return self._floors[0]

    def remove_first_occurrence(self, floor: int) -> bool:
        if floor not in self._floors:
            return False
        self._floors.remove(floor)
        return True

    def is_empty(self) -> bool:
        return not self._floors

    def __len__(self) -> int:
        return len(self._floors)

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._floors))

    def __contains__(self, floor: object) -> bool:
        return floor in self._floors
