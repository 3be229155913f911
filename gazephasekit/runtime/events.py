from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Optional, Literal, Dict, Any, List
import asyncio, logging, time
import websockets

log = logging.getLogger(__name__)

class Gaze(BaseModel):
    x:int; y:int; h:float; v:float

class Metrics(BaseModel):
    ear: Optional[float]=None
    ear_valid: bool=True
    pupil: Optional[float]=None
    blinks: int=0
    fps: int=0

class Event(BaseModel):
    ts: float = Field(default_factory=lambda: time.time())
    type: Literal["metrics","blink","phase_trigger","phase","cue","trail"]
    phase: Optional[int]=None
    completed: List[bool] = []
    gaze: Optional[Gaze]=None
    metrics: Optional[Metrics]=None
    extra: Dict[str,Any] = {}

def offer(queue: "asyncio.Queue[str]", line: str) -> bool:
    """Non-blocking put; when the queue is full the oldest line is dropped. Returns False on a drop."""
    dropped = False
    if queue.full():
        queue.get_nowait(); dropped = True
    queue.put_nowait(line)
    return not dropped

def ensure_running(task: "asyncio.Task"):
    """Re-raise the broadcaster's failure instead of feeding a queue nobody reads."""
    if task.done():
        exc = None if task.cancelled() else task.exception()
        if exc is not None:
            raise exc
        raise RuntimeError("event broadcaster stopped")

async def ws_broadcast(queue: "asyncio.Queue[str]", host="0.0.0.0", port=8765, ready: Optional[asyncio.Event]=None):
    clients=set()
    async def handler(websocket):
        clients.add(websocket)
        log.info("client connected: %s", websocket.remote_address)
        try:
            await websocket.wait_closed()
        finally:
            clients.discard(websocket)
            log.info("client disconnected: %s", websocket.remote_address)
    async with websockets.serve(handler, host, port):
        log.info("broadcasting events on ws://%s:%d", host, port)
        if ready is not None: ready.set()
        while True:
            msg = await queue.get()
            websockets.broadcast(set(clients), msg)

async def start_broadcast(queue: "asyncio.Queue[str]", host="0.0.0.0", port=8765) -> "asyncio.Task":
    """Run ws_broadcast in a task and return once it listens; bind errors are raised here."""
    ready = asyncio.Event()
    task = asyncio.create_task(ws_broadcast(queue, host, port, ready))
    waiter = asyncio.create_task(ready.wait())
    await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    waiter.cancel()
    if task.done():
        ensure_running(task)
    return task
