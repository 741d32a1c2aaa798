from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from dataclasses import asdict
from typing import AsyncIterator, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from carsim import CarConfig, ElevatorController, button_label

logger = logging.getLogger(__name__)


class FloorRequest(BaseModel):
    floor: int


class StepRequest(BaseModel):
    count: int = Field(default=1, ge=1, le=10_000)


class SimulationManager:
    def __init__(self, config: Optional[CarConfig] = None) -> None:
        self.controller = ElevatorController(config or CarConfig())
        self.tick_interval = self.controller.config.tick_interval_ms / 1000
        self.clients: Set[WebSocket] = set()
        self._task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()

    async def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def _run(self) -> None:
        while True:
            payload = await self.step()
            await self.broadcast(payload)
            await asyncio.sleep(self.tick_interval)

    async def step(self, count: int = 1) -> dict:
        async with self._lock:
            for _ in range(count):
                self.controller.tick()
            return self.current_state()

    async def request_floor(self, floor: int) -> dict:
        config = self.controller.config
        if not config.contains(floor):
            raise ValueError(f"Floor {floor} outside [{config.ground_floor}, {config.top_floor}]")
        async with self._lock:
            self.controller.request_floor(floor)
            return self.current_state()

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except WebSocketDisconnect:
                disconnected.add(client)
            except Exception:
                logger.exception("Dropping stream client after failed send")
                disconnected.add(client)
        for client in disconnected:
            await self.unregister(client)

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        await websocket.send_text(json.dumps(self.current_state()))

    async def unregister(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)
        with contextlib.suppress(Exception):
            await websocket.close()

    def current_state(self) -> dict:
        controller = self.controller
        car = controller.snapshot()
        status = controller.status()
        return {
            "tick": controller.ticks,
            "state": car.phase.value,
            "position": car.position,
            "target_floor": car.target_floor,
            "door_extent": car.door_extent,
            "pending_requests": list(controller.pending_requests),
            "status": {**asdict(status), "text": status.render()},
            "buttons": [
                {"floor": floor, "label": button_label(floor)}
                for floor in reversed(controller.config.floors)
            ],
            "config": asdict(controller.config),
        }


def create_app(manager: SimulationManager, run_driver: bool = True) -> FastAPI:
    @contextlib.asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if run_driver:
            await manager.start()
        try:
            yield
        finally:
            await manager.stop()

    app = FastAPI(title="carsim Elevator API", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/state")
    async def get_state() -> dict:
        return manager.current_state()

    @app.post("/requests")
    async def request_floor(request: FloorRequest) -> dict:
        try:
            return await manager.request_floor(request.floor)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))

    @app.post("/step")
    async def step(request: StepRequest) -> dict:
        return await manager.step(request.count)

    @app.websocket("/ws/stream")
    async def websocket_endpoint(websocket: WebSocket) -> None:
        await manager.register(websocket)
        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            await manager.unregister(websocket)

    return app


manager = SimulationManager()
app = create_app(manager)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
