"""
Word-frequency analysis for regulatory interim reports.

This package downloads or reads PDF reports, extracts and reflows their
text, counts words per report, and renders three views:
- Most common content words per report
- Combined frequency of qualifier words (may, can, could)
- Frequency of a single self-referential term
"""

__version__ = "0.1.0"

from .batch import ReportBatchRunner
from .config import Settings
from .errors import (
    AnalysisError,
    EmptyDocumentError,
    ExtractionError,
    InvalidReferenceError,
    NetworkFetchError,
)
from .models import BatchTable, ChartRow, WordCount

__all__ = [
    "AnalysisError",
    "BatchTable",
    "ChartRow",
    "EmptyDocumentError",
    "ExtractionError",
    "InvalidReferenceError",
    "NetworkFetchError",
    "ReportBatchRunner",
    "Settings",
    "WordCount",
]
