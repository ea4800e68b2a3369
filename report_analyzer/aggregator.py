"""Word counts and proportions for a single document."""

from collections import Counter
from typing import Iterable, List

from .models import WordCount


def count_words(document_id: str, tokens: Iterable[str]) -> List[WordCount]:
    """
    Count token occurrences and their share of the document total.

    Rows are ordered by count descending, then word ascending, so the
    result does not depend on token order. An empty token sequence
    yields no rows.
    """
    counter = Counter(tokens)
    total = sum(counter.values())
    if total == 0:
        return []

    ordered = sorted(counter.items(), key=lambda item: (-item[1], item[0]))
    return [
        WordCount(document_id=document_id, word=word, n=n, p=n / total)
        for word, n in ordered
    ]
