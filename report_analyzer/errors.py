"""Error types raised by the report analysis pipeline.

Every error records which document failed and at which stage, so the
batch runner and the CLI can report ``<document id> failed at <stage>``.
"""

from typing import Optional


class AnalysisError(Exception):
    """Base class for per-document pipeline failures."""

    stage = "pipeline"

    def __init__(self, message: str, document_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.document_id = document_id

    def __str__(self) -> str:
        if self.document_id:
            return f"[{self.document_id}] {self.stage} failed: {self.message}"
        return f"{self.stage} failed: {self.message}"


class NetworkFetchError(AnalysisError):
    """Remote document could not be downloaded."""

    stage = "fetch"


class ExtractionError(AnalysisError):
    """Document is unreadable or not a valid PDF."""

    stage = "extract"


class EmptyDocumentError(AnalysisError):
    """Document produced no tokens."""

    stage = "tokenize"


class InvalidReferenceError(AnalysisError):
    """Document Reference is empty or unusable."""

    stage = "load"
