from __future__ import annotations

import logging
from tkinter import TclError
from typing import Callable, List, Optional

import customtkinter as ctk
from tkinterdnd2 import DND_FILES

from image_props.services.local_fs import parse_drop_data

logger = logging.getLogger(__name__)

HIGHLIGHT_COLOR = ("#e8f4ff", "#1f3b57")


class DropZone(ctk.CTkFrame):
    """Область для перетаскивания файлов и папок со строкой статуса."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=96, **kwargs)

        # callbacks
        self.on_drop: Optional[Callable[[List[str]], None]] = None

        self._default_color = self.cget("fg_color")

        # layout
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._status = ctk.StringVar(value="")
        self._status_label = ctk.CTkLabel(self, textvariable=self._status, font=ctk.CTkFont(size=15))
        self._status_label.grid(row=0, column=0, padx=12, pady=(18, 2), sticky="nsew")

        self._hint = ctk.CTkLabel(self, text="Перетащите сюда файлы или папки", text_color="gray")
        self._hint.grid(row=1, column=0, padx=12, pady=(0, 14), sticky="n")

    # public API (sync from controller)
    def set_status(self, text: str) -> None:
        self._status.set(text)

    def get_status(self) -> str:
        return self._status.get()

    def enable_drop(self) -> bool:
        """Регистрирует зону как цель drag-and-drop; False, если tkdnd недоступен."""
        try:
            self.drop_target_register(DND_FILES)
            self.dnd_bind("<<DropEnter>>", self._on_drag_enter)
            self.dnd_bind("<<DropLeave>>", self._on_drag_leave)
            self.dnd_bind("<<Drop>>", self._on_drop)
        except (AttributeError, TclError) as exc:
            logger.warning("Drag and drop unavailable: %s", exc)
            return False
        return True

    # events
    def _on_drag_enter(self, event):
        self.configure(fg_color=HIGHLIGHT_COLOR)
        return event.action

    def _on_drag_leave(self, event):
        self.configure(fg_color=self._default_color)
        return event.action

    def _on_drop(self, event):
        self.configure(fg_color=self._default_color)
        paths = parse_drop_data(self, event.data)
        if self.on_drop:
            self.on_drop(paths)
        return event.action
