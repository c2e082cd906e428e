"""Run the async client from synchronous code.

``asyncio.run()`` is used when no loop is running in this thread.
Inside a running loop (Jupyter, a GUI event loop) the coroutine is
handed to a daemon thread that owns its own loop instead, avoiding the
"event loop already running" error.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Coroutine, TypeVar

T = TypeVar("T")

_loop: asyncio.AbstractEventLoop | None = None
_lock = threading.Lock()


def _background_loop() -> asyncio.AbstractEventLoop:
    """Start (once) and return the daemon-thread event loop."""
    global _loop
    with _lock:
        if _loop is None or _loop.is_closed():
            _loop = asyncio.new_event_loop()
            threading.Thread(
                target=_loop.run_forever,
                name="libravatar-sync",
                daemon=True,
            ).start()
    return _loop


def run_sync(coro: Coroutine[object, object, T]) -> T:
    """Block until *coro* finishes and return its result."""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)

    future = asyncio.run_coroutine_threadsafe(coro, _background_loop())
    return future.result()
