"""Таблица результатов: одна строка на `ImageRecord`.

customtkinter не содержит табличного виджета, поэтому используется
`ttk.Treeview` внутри `CTkFrame` с прокруткой.
"""
from __future__ import annotations

from tkinter import ttk
from typing import Tuple

import customtkinter as ctk

from image_props.models.image_model import ImageRecord

COLUMNS: Tuple[Tuple[str, str, int], ...] = (
    ("name", "Имя файла", 260),
    ("size", "Размер (px)", 120),
    ("dpi", "DPI", 70),
    ("depth", "Глубина цвета", 110),
    ("compression", "Сжатие", 100),
)


def format_row(record: ImageRecord) -> Tuple[str, str, str, str, str]:
    """Значения ячеек: имя | ширина × высота | dpi | глубина | сжатие."""
    return (
        record.name,
        f"{record.width} × {record.height}",
        str(record.dpi),
        str(record.color_depth),
        record.compression,
    )


class ResultsTable(ctk.CTkFrame):
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._tree = ttk.Treeview(self, columns=[c[0] for c in COLUMNS], show="headings", selectmode="browse")
        for key, title, width in COLUMNS:
            self._tree.heading(key, text=title)
            self._tree.column(key, width=width, anchor="w" if key == "name" else "center", stretch=key == "name")
        self._tree.grid(row=0, column=0, sticky="nsew")

        self._scroll = ctk.CTkScrollbar(self, command=self._tree.yview)
        self._scroll.grid(row=0, column=1, sticky="ns")
        self._tree.configure(yscrollcommand=self._scroll.set)

    # ---- Public API ----
    def add_record(self, record: ImageRecord) -> None:
        """Добавляет строку в конец таблицы и прокручивает к ней."""
        item = self._tree.insert("", "end", values=format_row(record))
        self._tree.see(item)

    def clear(self) -> None:
        self._tree.delete(*self._tree.get_children())

    def row_count(self) -> int:
        return len(self._tree.get_children())
