import logging
from tkinter import TclError

import customtkinter as ctk
from tkinterdnd2 import TkinterDnD

from image_props.config import AppConfig
from image_props.controllers.app_controller import AppController
from image_props.controllers.dispatcher import UiDispatcher
from image_props.services.async_runner import AsyncRunner
from image_props.ui.drop_zone import DropZone
from image_props.ui.results_table import ResultsTable
from image_props.ui.toolbar import Toolbar

logger = logging.getLogger(__name__)


class ImagePropsApp(ctk.CTk, TkinterDnD.DnDWrapper):
    def __init__(self, config: AppConfig) -> None:
        super().__init__()
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        self.title(config.window_title)
        self.minsize(760, 480)

        # tkdnd is a Tcl extension; without it the app still works via pickers
        try:
            self.TkdndVersion = TkinterDnD._require(self)
            dnd_available = True
        except (RuntimeError, TclError) as exc:
            logger.warning("tkdnd could not be loaded: %s", exc)
            dnd_available = False

        # root layout: left toolbar, right drop zone above results table
        self.grid_columnconfigure(1, weight=1)
        self.grid_rowconfigure(0, weight=0)
        self.grid_rowconfigure(1, weight=1)

        self._toolbar = Toolbar(self)
        self._toolbar.grid(row=0, column=0, rowspan=2, sticky="ns", padx=(12, 6), pady=12)

        self._drop_zone = DropZone(self)
        self._drop_zone.grid(row=0, column=1, sticky="ew", padx=(6, 12), pady=(12, 6))
        if dnd_available:
            self._drop_zone.enable_drop()

        self._table = ResultsTable(self)
        self._table.grid(row=1, column=1, sticky="nsew", padx=(6, 12), pady=(6, 12))

        self._dispatcher = UiDispatcher(self, poll_interval_ms=config.poll_interval_ms)
        self._runner = AsyncRunner()
        self._runner.start()

        self._controller = AppController(
            toolbar=self._toolbar,
            drop_zone=self._drop_zone,
            table=self._table,
            runner=self._runner,
            dispatch=self._dispatcher,
            schedule=self.after,
            config=config,
        )
        self._controller.bind_events()
        self._dispatcher.start()

        self.protocol("WM_DELETE_WINDOW", self._on_close)

    def _on_close(self) -> None:
        self._dispatcher.stop()
        self._controller.shutdown()
        self.destroy()
