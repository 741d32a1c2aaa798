from __future__ import annotations

from typing import Callable, Dict

from .fcfs import FirstComeFirstServedQueue
from .interface import RequestQueue

__all__ = [
    "FirstComeFirstServedQueue",
    "RequestQueue",
    "get_request_queue",
]


QUEUE_REGISTRY: Dict[str, Callable[[], RequestQueue]] = {
    "fcfs": FirstComeFirstServedQueue,
}


def get_request_queue(name: str) -> RequestQueue:
    factory = QUEUE_REGISTRY.get(name.lower())
    if factory is None:
        raise ValueError(f"Unknown request queue '{name}'. Available: {', '.join(QUEUE_REGISTRY)}")
    return factory()
