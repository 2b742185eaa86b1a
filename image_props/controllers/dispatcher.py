"""Передача вызовов из фонового потока пайплайна в поток Tk.

Tk не потокобезопасен, поэтому фоновые события кладутся в очередь, а окно
периодически разбирает её через `after`.
"""
from __future__ import annotations

import logging
import queue
from typing import Callable

import customtkinter as ctk

logger = logging.getLogger(__name__)


class UiDispatcher:
    def __init__(self, window: ctk.CTk, poll_interval_ms: int = 50) -> None:
        self._window = window
        self._poll_interval_ms = poll_interval_ms
        self._queue: "queue.SimpleQueue[Callable[[], None]]" = queue.SimpleQueue()
        self._after_id: str | None = None

    def __call__(self, callback: Callable[[], None]) -> None:
        """Ставит вызов в очередь; безопасно из любого потока."""
        self._queue.put(callback)

    def start(self) -> None:
        self._after_id = self._window.after(self._poll_interval_ms, self._drain)

    def stop(self) -> None:
        if self._after_id is not None:
            self._window.after_cancel(self._after_id)
            self._after_id = None

    def _drain(self) -> None:
        while True:
            try:
                callback = self._queue.get_nowait()
            except queue.Empty:
                break
            try:
                callback()
            except Exception:
                # a broken callback must not stop the polling loop
                logger.exception("UI callback failed")
        self._after_id = self._window.after(self._poll_interval_ms, self._drain)
