from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from dataclasses import asdict
from typing import Dict, List, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from judge import Judge, ScriptedChannel
from scheduler import InProcessChannel, get_scheduler
from simulation import ScenarioParameters, SimulationError, format_scenario, generate_scenario

logger = logging.getLogger(__name__)


class AlgorithmSelection(BaseModel):
    name: str
    options: Dict[str, object] = {}


class ScenarioSelection(BaseModel):
    seed: int = 0
    num_floors: int = 10
    elevator_count: int = 3
    capacity: int = 10
    turns: int = 100
    arrival_rate: float = 0.1

    def parameters(self) -> ScenarioParameters:
        return ScenarioParameters(
            num_floors=self.num_floors,
            elevator_count=self.elevator_count,
            capacity=self.capacity,
            turns=self.turns,
            arrival_rate=self.arrival_rate,
        )


class ReplayRequest(BaseModel):
    scenario: ScenarioSelection = ScenarioSelection()
    output: str


class RunManager:
    """Steps a judged run with an in-process scheduler and streams each turn."""

    def __init__(self, scheduler_name: str = "greedy", tick_interval: float = 0.15) -> None:
        self.tick_interval = tick_interval
        self.clients: Set[WebSocket] = set()
        self.scenario_selection = ScenarioSelection()
        self.scheduler_name = scheduler_name
        self.scheduler_options: Dict[str, object] = {}
        self._task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()
        self._reset()

    def _reset(self) -> None:
        params = self.scenario_selection.parameters()
        self.scenario = generate_scenario(self.scenario_selection.seed, params)
        self.scheduler = get_scheduler(self.scheduler_name, **self.scheduler_options)
        self.judge = Judge(self.scenario, InProcessChannel(self.scheduler))
        self.last_snapshot = None
        self.error: Optional[str] = None

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
            async with self._lock:
                advanced = self.step()
                payload = self.current_state()
            if advanced:
                await self.broadcast(payload)
            await asyncio.sleep(self.tick_interval)

    def step(self) -> bool:
        if self.judge.finished or self.error is not None:
            return False
        try:
            self.last_snapshot = self.judge.play_turn()
        except SimulationError as exc:
            logger.warning("Live run stopped: %s", exc)
            self.error = str(exc)
        return True

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except WebSocketDisconnect:
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
        simulation = self.judge.simulation
        return {
            "turn": simulation.current_turn,
            "finished": self.judge.finished,
            "final_score": simulation.final_score() if self.judge.finished else None,
            "snapshot": asdict(self.last_snapshot) if self.last_snapshot else None,
            "metrics": asdict(simulation.metrics_snapshot()),
            "scheduler": self.scheduler_name,
            "seed": self.scenario_selection.seed,
            "error": self.error,
        }

    async def set_scheduler(self, name: str, options: Dict[str, object]) -> dict:
        async with self._lock:
            get_scheduler(name, **options)
            self.scheduler_name = name
            self.scheduler_options = dict(options)
            self._reset()
            return self.current_state()

    async def set_scenario(self, selection: ScenarioSelection) -> dict:
        async with self._lock:
            previous = self.scenario_selection
            self.scenario_selection = selection
            try:
                self._reset()
            except ValueError:
                self.scenario_selection = previous
                self._reset()
                raise
            return self.current_state()


def replay(request: ReplayRequest) -> dict:
    """Judge a saved agent output against a generated scenario, keeping every turn."""
    scenario = generate_scenario(request.scenario.seed, request.scenario.parameters())
    channel = ScriptedChannel.from_text(request.output)
    judge = Judge(scenario, channel, record_history=True)
    result = judge.run()
    history: List[dict] = [asdict(snapshot) for snapshot in result.history]
    return {
        "score": result.score,
        "delivered": result.delivered,
        "undelivered": result.undelivered,
        "history": history,
    }


manager = RunManager()
app = FastAPI(title="LiftJudge Simulation API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup() -> None:
    await manager.start()


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await manager.stop()


@app.get("/state")
async def get_state() -> dict:
    return manager.current_state()


@app.post("/algorithm")
async def set_algorithm(selection: AlgorithmSelection) -> dict:
    try:
        return await manager.set_scheduler(selection.name, selection.options)
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.post("/scenario")
async def set_scenario(selection: ScenarioSelection) -> dict:
    try:
        return await manager.set_scenario(selection)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.get("/scenario/text")
async def scenario_text(seed: int = 0) -> dict:
    selection = ScenarioSelection(seed=seed)
    scenario = generate_scenario(seed, selection.parameters())
    return {"seed": seed, "text": format_scenario(scenario)}


@app.post("/replay")
async def replay_output(request: ReplayRequest) -> dict:
    try:
        return replay(request)
    except (SimulationError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.websocket("/ws/stream")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await manager.register(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await manager.unregister(websocket)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
