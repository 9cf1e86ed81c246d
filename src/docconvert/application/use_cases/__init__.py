"""Application use cases."""

from docconvert.application.use_cases.batch_convert import (
    BatchConvertUseCase,
    BatchItem,
    BatchOutcome,
    BatchReport,
    BatchStatus,
)
from docconvert.application.use_cases.convert_content import ConvertContentUseCase

__all__ = [
    "BatchConvertUseCase",
    "BatchItem",
    "BatchOutcome",
    "BatchReport",
    "BatchStatus",
    "ConvertContentUseCase",
]
