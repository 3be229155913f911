import asyncio, socket
import pytest
from gazephasekit.runtime.events import offer, ensure_running, start_broadcast

def test_offer_drops_oldest_when_full():
    async def go():
        q = asyncio.Queue(maxsize=2)
        assert offer(q, "a") and offer(q, "b")
        assert not offer(q, "c")
        return [q.get_nowait(), q.get_nowait()]
    assert asyncio.run(go()) == ["b", "c"]

def test_ensure_running_reraises_failure():
    async def boom():
        raise OSError("address in use")
    async def go():
        t = asyncio.create_task(boom())
        await asyncio.sleep(0)
        with pytest.raises(OSError):
            ensure_running(t)
        idle = asyncio.create_task(asyncio.sleep(10))
        ensure_running(idle)
        idle.cancel()
        with pytest.raises(asyncio.CancelledError):
            await idle
        with pytest.raises(RuntimeError):
            ensure_running(idle)
    asyncio.run(go())

def test_broadcast_bind_failure_surfaces_before_streaming():
    busy = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    busy.bind(("127.0.0.1", 0)); busy.listen(1)
    port = busy.getsockname()[1]
    try:
        async def go():
            await start_broadcast(asyncio.Queue(maxsize=4), "127.0.0.1", port)
        with pytest.raises(OSError):
            asyncio.run(go())
    finally:
        busy.close()
