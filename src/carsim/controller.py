from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Tuple

from scheduler import RequestQueue, get_request_queue

from .config import CarConfig
from .door import DoorModel
from .motion import MovementModel, nearest_floor
from .state import CarState, ElevatorState
from .status import StatusLine, describe

logger = logging.getLogger(__name__)

ARRIVAL = "arrival"
DOORS_OPEN = "doors_open"
DOORS_CLOSED = "doors_closed"


def advance(
    car: CarState, movement: MovementModel, door: DoorModel
) -> Tuple[CarState, Optional[str]]:
    """Compute one tick of the car's state machine.

    Returns the next car state and the effect the tick produced, if any.
    ``DOORS_CLOSED`` leaves the car in ``IDLE``; the caller is expected to
    release the floor from its queue and dispatch the next request.
    """

    phase = car.phase
    if phase is ElevatorState.MOVING:
        position, arrived = movement.step(car.position, car.target_floor)
        if arrived:
            return (
                replace(car, phase=ElevatorState.DOOR_OPENING, position=position, door_extent=0.0),
                ARRIVAL,
            )
        return replace(car, position=position), None

    if phase is ElevatorState.DOOR_OPENING:
        extent, opened = door.open_step(car.door_extent)
        if opened:
            return (
                replace(car, phase=ElevatorState.DOOR_OPEN, door_extent=extent, wait_counter=door.wait_ticks),
                DOORS_OPEN,
            )
        return replace(car, door_extent=extent), None

    if phase is ElevatorState.DOOR_OPEN:
        remaining, expired = door.dwell_step(car.wait_counter)
        if expired:
            return replace(car, phase=ElevatorState.DOOR_CLOSING, wait_counter=remaining), None
        return replace(car, wait_counter=remaining), None

    if phase is ElevatorState.DOOR_CLOSING:
        extent, closed = door.close_step(car.door_extent)
        if closed:
            return replace(car, phase=ElevatorState.IDLE, door_extent=extent), DOORS_CLOSED
        return replace(car, door_extent=extent), None

    return car, None


class ElevatorController:
    """Tick-driven controller for a single car serving FIFO floor requests."""

    def __init__(self, config: Optional[CarConfig] = None, queue_name: str = "fcfs") -> None:
        self.config = config or CarConfig()
        self.movement = MovementModel(self.config.speed)
        self.door = DoorModel(self.config.door_speed, self.config.wait_ticks)
        self.queue_name = queue_name
        self._queue: RequestQueue = get_request_queue(queue_name)
        start = self.config.start_floor
        self._car = CarState(phase=ElevatorState.IDLE, position=float(start), target_floor=start)
        self._ticks = 0
        self._lock = threading.RLock()
        self.event_hooks: Dict[str, List[Callable[[dict], None]]] = {}

    @property
    def state(self) -> ElevatorState:
        with self._lock:
            return self._car.phase

    @property
    def position(self) -> float:
        with self._lock:
            return self._car.position

    @property
    def door_extent(self) -> float:
        with self._lock:
            return self._car.door_extent

    @property
    def target_floor(self) -> int:
        with self._lock:
            return self._car.target_floor

    @property
    def wait_counter(self) -> int:
        with self._lock:
            return self._car.wait_counter

    @property
    def pending_requests(self) -> Tuple[int, ...]:
        with self._lock:
            return tuple(self._queue)

    @property
    def ticks(self) -> int:
        with self._lock:
            return self._ticks

    def snapshot(self) -> CarState:
        with self._lock:
            return self._car

    def status(self) -> StatusLine:
        with self._lock:
            return describe(self._car.phase, self._car.position, self._car.target_floor)

    def on_event(self, event: str, callback: Callable[[dict], None]) -> None:
        with self._lock:
            self.event_hooks.setdefault(event, []).append(callback)

    def request_floor(self, floor: int) -> None:
        with self._lock:
            if not self.config.contains(floor):
                logger.debug(
                    "Ignoring request for floor %r outside [%d, %d]",
                    floor,
                    self.config.ground_floor,
                    self.config.top_floor,
                )
                return
            accepted = self._queue.submit(floor, nearest_floor(self._car.position))
            transition = None
            if self._car.phase is ElevatorState.IDLE and not self._queue.is_empty():
                transition = self._apply(self._dispatch(self._car))
            self._emit("request", {"tick": self._ticks, "floor": floor, "accepted": accepted})
            if transition is not None:
                self._emit("transition", transition)

    def tick(self) -> None:
        with self._lock:
            self._ticks += 1
            car, effect = advance(self._car, self.movement, self.door)
            if effect == DOORS_CLOSED:
                car = self._release(car)
            transition = self._apply(car)
            if transition is not None:
                self._emit("transition", transition)
            if effect is not None:
                self._emit(effect, {"tick": self._ticks, "floor": nearest_floor(car.position)})

    def _release(self, car: CarState) -> CarState:
        floor = nearest_floor(car.position)
        if floor != car.target_floor:
            logger.warning("Doors closed at floor %d while targeting floor %d", floor, car.target_floor)
        self._queue.remove_first_occurrence(floor)
        return self._dispatch(car)

    def _dispatch(self, car: CarState) -> CarState:
        head = self._queue.peek_head()
        if head is None:
            return replace(car, phase=ElevatorState.IDLE)
        return replace(car, phase=ElevatorState.MOVING, target_floor=head)

    def _apply(self, car: CarState) -> Optional[dict]:
        """Store ``car`` and describe the phase change, if there was one."""
        previous = self._car.phase
        self._car = car
        if car.phase is previous:
            return None
        logger.debug(
            "Tick %d: %s -> %s at %.2f (target %d)",
            self._ticks,
            previous.value,
            car.phase.value,
            car.position,
            car.target_floor,
        )
        return {
            "tick": self._ticks,
            "from": previous,
            "to": car.phase,
            "position": car.position,
            "target_floor": car.target_floor,
        }

    def _emit(self, event: str, payload: dict) -> None:
        for callback in list(self.event_hooks.get(event, [])):
            try:
                callback(payload)
            except Exception:
                logger.exception("Hook for %r event failed", event)
