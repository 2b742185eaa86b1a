"""Контроллер приложения: оркестрация UI и сервисов.

SOLID:
- SRP: класс управляет связями между UI и сервисами (без логики извлечения метаданных).
- DIP: диалоги, планировщик и фоновый раннер внедряются, поэтому контроллер
  проверяется без дисплея.
Clean Code:
- Обработчики компактны; обход и извлечение вынесены в сервисы.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future
from dataclasses import dataclass, field
from tkinter import TclError, filedialog, messagebox
from typing import Any, Awaitable, Callable, List, Optional, Sequence

from image_props.config import AppConfig
from image_props.models.file_model import FileHandle
from image_props.models.image_model import ImageRecord
from image_props.services.batch_service import BatchPipeline
from image_props.services.collector_service import TreeCollector
from image_props.services.image_service import MetadataExtractor
from image_props.services.local_fs import LocalDirectoryHandle, LocalFile, entries_for_paths
from image_props.services.tag_reader import build_tag_reader

logger = logging.getLogger(__name__)

FILE_TYPES = (
    ("Images", "*.jpg *.jpeg *.png *.gif *.bmp *.tiff *.tif *.webp"),
    ("All files", "*.*"),
)

STATUS_PROCESSING = "Processing..."
STATUS_PROGRESS = "Processed: {processed} / {total}"
STATUS_COMPLETE = "Complete! Processed {total} images"
STATUS_NO_IMAGES = "No images found"
MSG_NO_FOLDER_IMAGES = "No image files found in folder"
MSG_NO_FOLDER_PICKER = "Folder selection is not supported on this system."


class CapabilityError(RuntimeError):
    """Хост не предоставляет нужную возможность (например, выбор каталога)."""


def _ask_files() -> Sequence[str]:
    return filedialog.askopenfilenames(title="Выберите изображения", filetypes=FILE_TYPES)


def _ask_directory() -> str:
    return filedialog.askdirectory(title="Выберите папку с изображениями", mustexist=True)


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Бинд событий (UI -> контроллер).
    - Сбор файлов через `TreeCollector` и запуск `BatchPipeline` в фоне.
    - Отображение прогресса и результатов; события устаревших запусков игнорируются.
    """
    toolbar: Any
    drop_zone: Any
    table: Any
    runner: Any
    dispatch: Callable[[Callable[[], None]], None]
    schedule: Callable[[int, Callable[[], None]], Any]
    config: AppConfig = field(default_factory=AppConfig)

    ask_files: Callable[[], Sequence[str]] = _ask_files
    ask_directory: Callable[[], str] = _ask_directory
    show_error: Callable[[str, str], Any] = messagebox.showerror
    show_info: Callable[[str, str], Any] = messagebox.showinfo

    collector: TreeCollector = field(default_factory=TreeCollector)
    pipeline: BatchPipeline = field(init=False)

    processed_count: int = 0
    total_count: int = 0
    _future: Optional[Future] = None

    def __post_init__(self) -> None:
        self.pipeline = BatchPipeline(MetadataExtractor(build_tag_reader(self.config)))

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами."""
        self.toolbar.on_select_files = self.handle_select_files
        self.toolbar.on_select_folder = self.handle_select_folder
        self.toolbar.on_clear = self.clear_table
        self.drop_zone.on_drop = self.handle_drop
        self.drop_zone.set_status(self.config.idle_prompt)

    # ---- Handlers ----
    def handle_select_files(self) -> None:
        try:
            paths = self.ask_files()
        except TclError:
            # Silent fail if dialog cannot open
            return
        if not paths:
            return
        files = self.collector.collect_files([LocalFile(p) for p in paths])
        self._start(self._constant(files))

    def handle_select_folder(self) -> None:
        try:
            path = self._pick_directory()
        except CapabilityError as exc:
            logger.warning("Folder picker unavailable: %s", exc)
            self.show_error("Image Properties", MSG_NO_FOLDER_PICKER)
            return
        if not path:
            return  # cancelled
        handle = LocalDirectoryHandle(path)
        self._start(lambda: self.collector.collect_directory(handle), notify_empty=True)

    def handle_drop(self, paths: Sequence[str]) -> None:
        if not paths:
            return
        entries = entries_for_paths(paths, self.config.directory_page_size)
        self._start(lambda: self.collector.collect_entries(entries))

    def clear_table(self) -> None:
        """Очищает таблицу и счётчики; выполняющийся запуск не затрагивается."""
        self.table.clear()
        self.processed_count = 0
        self.total_count = 0

    def shutdown(self) -> None:
        if self._future is not None and not self._future.done():
            self._future.cancel()
        self.runner.stop()

    # ---- ProgressReporter (вызывается из фонового потока) ----
    def started(self, run_id: int, total: int) -> None:
        self._post(run_id, self._show_started, total)

    def record_ready(self, run_id: int, record: ImageRecord) -> None:
        self._post(run_id, self.table.add_record, record)

    def progress(self, run_id: int, processed: int, total: int) -> None:
        self._post(run_id, self._show_progress, processed, total)

    def completed(self, run_id: int, total: int) -> None:
        self._post(run_id, self._show_finished, run_id, STATUS_COMPLETE.format(total=total))

    def no_images(self, run_id: int) -> None:
        self._post(run_id, self._show_finished, run_id, STATUS_NO_IMAGES)

    # ---- Helpers ----
    def _pick_directory(self) -> str:
        try:
            return self.ask_directory()
        except TclError as exc:
            raise CapabilityError(str(exc)) from exc

    def _start(self, collect: Callable[[], Awaitable[List[FileHandle]]], notify_empty: bool = False) -> None:
        if self._future is not None and not self._future.done():
            self._future.cancel()
        run_id = self.pipeline.next_run_id()
        self._future = self.runner.submit(self._collect_and_run(run_id, collect, notify_empty))
        self._future.add_done_callback(self._on_run_done)

    async def _collect_and_run(self, run_id: int, collect: Callable[[], Awaitable[List[FileHandle]]],
                               notify_empty: bool) -> List[ImageRecord]:
        files = await collect()
        logger.info("Collected %d image files", len(files))
        if not files and notify_empty:
            self._post(run_id, self.show_info, "Image Properties", MSG_NO_FOLDER_IMAGES)
        self._post(run_id, self.clear_table)
        return await self.pipeline.run(files, self, run_id=run_id)

    @staticmethod
    def _constant(files: List[FileHandle]) -> Callable[[], Awaitable[List[FileHandle]]]:
        async def collect() -> List[FileHandle]:
            return files
        return collect

    def _on_run_done(self, future: Future) -> None:
        if future.cancelled():
            logger.debug("Run cancelled")
            return
        exc = future.exception()
        if exc is not None:
            logger.error("Run failed: %s", exc, exc_info=exc)

    def _post(self, run_id: int, fn: Callable[..., Any], *args: Any) -> None:
        def apply() -> None:
            if self.pipeline.is_current(run_id):
                fn(*args)
        self.dispatch(apply)

    def _show_started(self, total: int) -> None:
        self.total_count = total
        self.drop_zone.set_status(STATUS_PROCESSING)

    def _show_progress(self, processed: int, total: int) -> None:
        self.processed_count = processed
        self.total_count = total
        self.drop_zone.set_status(STATUS_PROGRESS.format(processed=processed, total=total))

    def _show_finished(self, run_id: int, text: str) -> None:
        self.drop_zone.set_status(text)

        def reset() -> None:
            if self.pipeline.is_current(run_id):
                self.drop_zone.set_status(self.config.idle_prompt)
        self.schedule(self.config.status_reset_ms, reset)
