"""Последовательная обработка пакета файлов с отчётом о прогрессе.

Файлы обрабатываются строго по одному: следующий начинается только после
завершения предыдущего. Счётчики и результаты живут в `RunContext`
конкретного запуска, а не в общем состоянии.
"""
from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import List, Protocol, Sequence

from image_props.models.file_model import FileHandle
from image_props.models.image_model import ImageRecord
from image_props.services.image_service import MetadataExtractor

logger = logging.getLogger(__name__)


class ProgressReporter(Protocol):
    def started(self, run_id: int, total: int) -> None: ...

    def record_ready(self, run_id: int, record: ImageRecord) -> None: ...

    def progress(self, run_id: int, processed: int, total: int) -> None: ...

    def completed(self, run_id: int, total: int) -> None: ...

    def no_images(self, run_id: int) -> None: ...


@dataclass
class RunContext:
    run_id: int
    total: int = 0
    processed: int = 0
    records: List[ImageRecord] = field(default_factory=list)


class BatchPipeline:
    def __init__(self, extractor: MetadataExtractor) -> None:
        self._extractor = extractor
        self._run_ids = itertools.count(1)
        self._current_run_id = 0

    @property
    def current_run_id(self) -> int:
        return self._current_run_id

    def next_run_id(self) -> int:
        """Резервирует идентификатор нового запуска; прежний запуск становится устаревшим."""
        self._current_run_id = next(self._run_ids)
        return self._current_run_id

    def is_current(self, run_id: int) -> bool:
        return run_id == self._current_run_id

    async def run(self, files: Sequence[FileHandle], reporter: ProgressReporter, run_id: int | None = None) -> List[ImageRecord]:
        """Извлекает метаданные для каждого файла по порядку.

        Args:
            files: Упорядоченный список файлов от `TreeCollector`.
            reporter: Получатель событий прогресса.
            run_id: Заранее зарезервированный идентификатор (см. `next_run_id`).

        Returns:
            Записи в порядке входных файлов. Если во время работы начат другой
            запуск, возвращаются записи, готовые к этому моменту, а события
            устаревшего запуска больше не отправляются.
        """
        ctx = RunContext(run_id=run_id if run_id is not None else self.next_run_id(), total=len(files))
        if not self.is_current(ctx.run_id):
            logger.info("Run %d superseded before start", ctx.run_id)
            return ctx.records

        if ctx.total == 0:
            reporter.no_images(ctx.run_id)
            return ctx.records

        logger.info("Run %d: processing %d files", ctx.run_id, ctx.total)
        reporter.started(ctx.run_id, ctx.total)
        for file in files:
            record = await self._extractor.extract(file)
            ctx.records.append(record)
            ctx.processed += 1
            if not self.is_current(ctx.run_id):
                logger.info("Run %d superseded after %d/%d files", ctx.run_id, ctx.processed, ctx.total)
                return ctx.records
            reporter.record_ready(ctx.run_id, record)
            reporter.progress(ctx.run_id, ctx.processed, ctx.total)

        reporter.completed(ctx.run_id, ctx.total)
        logger.info("Run %d complete: %d files", ctx.run_id, ctx.total)
        return ctx.records
