from __future__ import annotations
import typer, asyncio, logging
from rich import print
from rich.logging import RichHandler
from rich.markup import escape
from pathlib import Path
from typing import Optional
import numpy as np
from pydantic import ValidationError
import yaml
from .config import load_config, TrackerConfig
from .runtime.director import Director

log = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, help="GazePhaseKit CLI (gpk)")

def _setup_logging(verbose: bool):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(message)s",
                        datefmt="[%X]", handlers=[RichHandler(rich_tracebacks=True)], force=True)

def _config(path: Optional[str]) -> TrackerConfig:
    try:
        return load_config(path)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        print(f"[red]Invalid config[/red] {path}: {escape(str(e))}")
        raise typer.Exit(code=2)

@app.command()
def run(config: Optional[str]=typer.Option(None, help="YAML config"), ws: bool=typer.Option(False, help="Broadcast events over WebSocket"),
        host: str="0.0.0.0", port: int=8765, queue_size: int=typer.Option(256, min=1, help="Broadcast backlog before old lines are dropped"), camera: int=0, width: int=1280, height: int=720,
        mirror: bool=typer.Option(False, help="Flip frames horizontally before detection"),
        verbose: bool=typer.Option(False, "--verbose", "-v")):
    """
    Track a live camera, print JSONL events; optionally broadcast over WebSocket.
    """
    _setup_logging(verbose)
    cfg = _config(config)
    from .io.camera import frames
    from .eye.face_mesh import FaceLandmarks
    from .runtime.events import start_broadcast, offer, ensure_running

    director = Director(cfg)
    queue: "asyncio.Queue[str]" = asyncio.Queue(maxsize=queue_size)

    async def producer(bcast: "Optional[asyncio.Task]"):
        faces = FaceLandmarks()
        dropped = 0
        try:
            for f in frames(camera, width, height, mirror=mirror):
                if bcast is not None: ensure_running(bcast)
                pts = faces(f["image"])
                meta = f["meta"]
                events = director.process(pts, meta["w"], meta["h"]) if pts is not None else director.tick()
                for e in events:
                    line = e.model_dump_json()
                    if e.type != "metrics" or verbose: typer.echo(line)
                    if bcast is not None and not offer(queue, line):
                        dropped += 1
                        if dropped % 100 == 1: log.warning("broadcast queue full, %d lines dropped", dropped)
                await asyncio.sleep(0)
        finally:
            faces.close()
            director.stop()

    async def main():
        if not ws:
            return await producer(None)
        bcast = await start_broadcast(queue, host, port)
        try:
            await producer(bcast)
        finally:
            bcast.cancel()

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("[yellow]stopped[/yellow]")
    except OSError as e:
        print(f"[red]Event broadcaster failed[/red]: {escape(str(e))}")
        raise typer.Exit(code=1)

@app.command()
def replay(path: Path=typer.Argument(..., exists=True, dir_okay=False, help=".npy array of shape (N, 478, 2|3)"),
           config: Optional[str]=typer.Option(None, help="YAML config"), width: int=640, height: int=480,
           fps: float=30.0, metrics: bool=typer.Option(False, help="Also print per-frame metrics"),
           verbose: bool=typer.Option(False, "--verbose", "-v")):
    """
    Replay recorded landmarks through the tracker with a synthetic clock.
    """
    _setup_logging(verbose)
    cfg = _config(config)
    seq = np.load(path)
    if seq.ndim != 3:
        print(f"[red]Expected (N, 478, 2|3) landmarks, got {seq.shape}[/red]")
        raise typer.Exit(code=2)
    clock = {"t": 0.0}
    director = Director(cfg, clock=lambda: clock["t"])
    for i, pts in enumerate(seq):
        clock["t"] = i / fps
        for e in director.process(pts, width, height):
            if e.type != "metrics" or metrics: typer.echo(e.model_dump_json())
    s = director.session
    print(f"[green]frames[/green]={len(seq)} [green]blinks[/green]={s.blink_count} "
          f"[green]phase[/green]={s.phase.name} [green]completed[/green]={escape(str(s.completed))}")

if __name__ == "__main__":
    app()
