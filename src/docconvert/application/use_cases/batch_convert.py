"""Use Case: Convert several documents, one after another.

Items are converted sequentially; a failing item is recorded and the loop
moves on. The caller is notified after every item so it can report
progress.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Iterator, Optional, Union

from docconvert.application.use_cases.convert_content import (
    ConvertContentUseCase,
    FormatTag,
    OptionsInput,
)
from docconvert.domain.errors import ConversionError
from docconvert.domain.models.conversion import ConversionResult

logger = logging.getLogger(__name__)


class BatchStatus(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class BatchItem:
    """One source document queued for conversion."""

    name: str
    content: Union[str, bytes]
    source_format: FormatTag


@dataclass(frozen=True)
class BatchOutcome:
    item: BatchItem
    status: BatchStatus
    result: Optional[ConversionResult] = None
    error: Optional[ConversionError] = None

    @property
    def ok(self) -> bool:
        return self.status is BatchStatus.COMPLETED


@dataclass
class BatchReport:
    """Outcomes in submission order."""

    outcomes: list[BatchOutcome] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.ok)

    @property
    def failure_count(self) -> int:
        return len(self.outcomes) - self.success_count

    def __iter__(self) -> Iterator[BatchOutcome]:
        return iter(self.outcomes)

    def __len__(self) -> int:
        return len(self.outcomes)


ProgressCallback = Callable[[int, int, BatchOutcome], None]


class BatchConvertUseCase:
    """Drive :class:`ConvertContentUseCase` over many items."""

    def __init__(self, convert: ConvertContentUseCase) -> None:
        self._convert = convert

    def execute(
        self,
        items: Iterable[BatchItem],
        target_format: FormatTag,
        options: OptionsInput = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> BatchReport:
        """Convert every item; never aborts on a per-item failure.

        ``on_progress(done, total, outcome)`` is called after each item.
        """
        queue = list(items)
        report = BatchReport()
        for done, item in enumerate(queue, start=1):
            try:
                result = self._convert.execute(
                    item.content,
                    item.source_format,
                    target_format,
                    options,
                    source_name=item.name,
                )
                outcome = BatchOutcome(item=item, status=BatchStatus.COMPLETED, result=result)
            except ConversionError as exc:
                logger.warning("Batch item %s failed: %s", item.name, exc.message)
                outcome = BatchOutcome(item=item, status=BatchStatus.FAILED, error=exc)
            report.outcomes.append(outcome)
            if on_progress is not None:
                on_progress(done, len(queue), outcome)

        logger.info(
            "Batch finished: %d converted, %d failed",
            report.success_count,
            report.failure_count,
        )
        return report
