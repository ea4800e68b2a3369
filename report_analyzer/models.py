"""
Record types passed between pipeline stages.

Data flows Page Text -> Segmented Line -> token -> Word Count row, and the
rows of every document are stacked into a single ``BatchTable``.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

import pandas as pd

from .errors import AnalysisError

WORD_COUNT_COLUMNS = ["document_id", "word", "n", "p"]


@dataclass(frozen=True)
class PageText:
    """Raw text of one physical page (1-based index)."""
    page_index: int
    text: str


@dataclass(frozen=True)
class SegmentedLine:
    """A reflowed chunk of page text no wider than the segment width."""
    page_index: int
    text: str


@dataclass(frozen=True)
class WordCount:
    """One row per unique (document, word) pair."""
    document_id: str
    word: str
    n: int
    p: float


@dataclass
class DocumentResult:
    """Outcome of running the pipeline for a single document."""
    document_id: str
    reference: str
    rows: List[WordCount] = field(default_factory=list)
    error: Optional[AnalysisError] = None
    pages: int = 0
    lines: int = 0
    tokens: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class BatchTable:
    """Stacked Word Count rows for every processed document.

    ``document_ids`` keeps the caller's mapping order so charts can show
    documents chronologically. Documents that produced no rows are still
    listed here.
    """
    document_ids: Tuple[str, ...]
    rows: Tuple[WordCount, ...]

    @classmethod
    def from_results(cls, results: Iterable[DocumentResult]) -> "BatchTable":
        doc_ids: List[str] = []
        rows: List[WordCount] = []
        for result in results:
            doc_ids.append(result.document_id)
            rows.extend(result.rows)
        return cls(document_ids=tuple(doc_ids), rows=tuple(rows))

    def __len__(self) -> int:
        return len(self.rows)

    def for_document(self, document_id: str) -> List[WordCount]:
        return [row for row in self.rows if row.document_id == document_id]

    def to_dataframe(self) -> pd.DataFrame:
        df = pd.DataFrame(
            [(r.document_id, r.word, r.n, r.p) for r in self.rows],
            columns=WORD_COUNT_COLUMNS,
        )
        df["document_id"] = pd.Categorical(
            df["document_id"], categories=list(self.document_ids), ordered=True
        )
        return df

    def to_csv(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.to_dataframe().to_csv(path, index=False)
        return path


@dataclass(frozen=True)
class ChartRow:
    """One bar in an analysis view chart."""
    document_id: str
    value: float
    label: str
    highlight: bool = False
