from __future__ import annotations

from typing import Iterator, Optional, Protocol


class RequestQueue(Protocol):
    """Strategy interface for holding the car's pending floor requests."""

    def submit(self, floor: int, current_floor: int) -> bool:
        """
        Record a request for ``floor`` while the car sits at ``current_floor``.

        Returns ``True`` when the request was queued. Requests that are
        already pending, or that target the floor the car occupies, are
        absorbed without error.
        """
        ...

    def peek_head(self) -> Optional[int]:
        ...

    def remove_first_occurrence(self, floor: int) -> bool:
        ...

    def is_empty(self) -> bool:
        ...

    def __len__(self) -> int:
        ...

    def __iter__(self) -> Iterator[int]:
        ...
