"""
Analysis views over the Report Batch Table.

Each view is a read-only query that returns ``ChartRow`` records ready
for plotting:

- ``top_words``: most frequent content words per document, with
  proportions recomputed over the filtered vocabulary (``p_valid``)
- ``keyword_aggregate``: summed proportion of a small keyword set
- ``word_trend``: proportion of a single word

The keyword and trend views use the proportions stored in the table,
computed over each document's full vocabulary.
"""

from collections import OrderedDict
from typing import AbstractSet, Dict, Iterable, List, Optional, Sequence

from .models import BatchTable, ChartRow
from .stopwords import DEFAULT_MONTH_NAMES, DEFAULT_SKIP_WORDS, ENGLISH_STOPWORDS


def _lower_set(words: Iterable[str]) -> AbstractSet[str]:
    return frozenset(w.lower() for w in words)


def _has_digit(word: str) -> bool:
    return any(ch.isdigit() for ch in word)


def top_words(table: BatchTable,
              top_n: int = 2,
              stopwords: Optional[Iterable[str]] = None,
              skip_words: Optional[Iterable[str]] = None,
              month_names: Optional[Iterable[str]] = None) -> List[ChartRow]:
    """
    Top ``top_n`` words per document after filtering.

    Stopwords, tokens containing digits, skip-list words, month names and
    single-character fragments (the "s" of "company's") are removed
    (case-insensitively). ``p_valid`` is each remaining word's
    share of the remaining total. Words are ranked by raw count with a
    stable sort, so ties keep the table's row order.
    """
    excluded = (
        _lower_set(ENGLISH_STOPWORDS if stopwords is None else stopwords)
        | _lower_set(DEFAULT_SKIP_WORDS if skip_words is None else skip_words)
        | _lower_set(DEFAULT_MONTH_NAMES if month_names is None else month_names)
    )

    rows: List[ChartRow] = []
    for doc_id in table.document_ids:
        valid = [
            r for r in table.for_document(doc_id)
            if len(r.word) > 1 and r.word.lower() not in excluded and not _has_digit(r.word)
        ]
        total = sum(r.n for r in valid)
        if total == 0:
            continue
        ranked = sorted(valid, key=lambda r: r.n, reverse=True)
        for r in ranked[:top_n]:
            rows.append(ChartRow(document_id=doc_id, value=r.n / total, label=r.word))
    return rows


def _ranked_with_highlight(values: Dict[str, float]) -> List[ChartRow]:
    """Order documents ascending by value and flag the maximum."""
    if not values:
        return []
    peak = max(values.values())
    ordered = sorted(values.items(), key=lambda item: item[1])
    return [
        ChartRow(
            document_id=doc_id,
            value=value,
            label=f"{value:.2%}",
            highlight=value == peak,
        )
        for doc_id, value in ordered
    ]


def _proportions_for(table: BatchTable, words: AbstractSet[str]) -> Dict[str, float]:
    totals: Dict[str, float] = OrderedDict((doc_id, 0.0) for doc_id in table.document_ids)
    for r in table.rows:
        if r.word in words:
            totals[r.document_id] = totals.get(r.document_id, 0.0) + r.p
    return totals


def keyword_aggregate(table: BatchTable, keywords: Sequence[str] = ("may", "can", "could")) -> List[ChartRow]:
    """Summed proportion of ``keywords`` per document, ascending."""
    return _ranked_with_highlight(_proportions_for(table, _lower_set(keywords)))


def word_trend(table: BatchTable, word: str = "we") -> List[ChartRow]:
    """Proportion of a single word per document, ascending."""
    return _ranked_with_highlight(_proportions_for(table, _lower_set([word])))
