"""Боковая панель: выбор файлов, выбор папки, очистка таблицы.

Принципы:
- SRP: управляет только кнопками, не содержит логики обработки.
- ISP: события наружу через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk


class Toolbar(ctk.CTkFrame):
    """Панель с кнопками источников и очисткой результатов."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=220, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_select_files: Optional[Callable[[], None]] = None
        self.on_select_folder: Optional[Callable[[], None]] = None
        self.on_clear: Optional[Callable[[], None]] = None

        self._title = ctk.CTkLabel(self, text="Источники", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._files_btn = ctk.CTkButton(self, text="Выбрать файлы…", command=self._emit_select_files)
        self._files_btn.grid(row=1, column=0, padx=8, pady=(0, 6), sticky="ew")

        self._folder_btn = ctk.CTkButton(self, text="Выбрать папку…", command=self._emit_select_folder)
        self._folder_btn.grid(row=2, column=0, padx=8, pady=(0, 12), sticky="ew")

        # filler
        self.grid_rowconfigure(99, weight=1)

        self._clear_btn = ctk.CTkButton(
            self, text="Очистить таблицу", fg_color="transparent", border_width=1, command=self._emit_clear
        )
        self._clear_btn.grid(row=100, column=0, padx=8, pady=(0, 8), sticky="ew")

    # ---- Events ----
    def _emit_select_files(self) -> None:
        if self.on_select_files:
            self.on_select_files()

    def _emit_select_folder(self) -> None:
        if self.on_select_folder:
            self.on_select_folder()

    def _emit_clear(self) -> None:
        if self.on_clear:
            self.on_clear()
