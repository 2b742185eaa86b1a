"""Фоновый поток с собственным циклом asyncio для работы пайплайна.

UI-поток Tk не блокируется: корутины отправляются в цикл через `submit`,
а результаты возвращаются в UI через очередь контроллера.
"""
from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import Future
from typing import Any, Coroutine, Optional

logger = logging.getLogger(__name__)


class AsyncRunner:
    def __init__(self) -> None:
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._ready = threading.Event()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run_loop, name="image-props-pipeline", daemon=True)
        self._thread.start()
        self._ready.wait()

    def submit(self, coro: Coroutine[Any, Any, Any]) -> Future:
        if self._loop is None:
            self.start()
        loop = self._loop
        if loop is None:
            raise RuntimeError("Pipeline loop is not running")
        return asyncio.run_coroutine_threadsafe(coro, loop)

    def stop(self) -> None:
        if self._loop is None or self._thread is None:
            return
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=2.0)
        self._thread = None
        self._ready.clear()

    def _run_loop(self) -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        self._loop = loop
        self._ready.set()
        try:
            loop.run_forever()
        finally:
            loop.close()
            self._loop = None
            logger.debug("Pipeline loop stopped")
