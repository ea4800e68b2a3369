"""Split segmented text into lowercase word tokens."""

import re
from typing import AbstractSet, Iterable, List, Optional

from .models import SegmentedLine
from .stopwords import ENGLISH_STOPWORDS

# Runs of letters/digits; punctuation, whitespace and underscores delimit.
_TOKEN = re.compile(r"[^\W_]+")


def tokenize_text(text: str) -> List[str]:
    return _TOKEN.findall(text.lower())


def tokenize(lines: Iterable[SegmentedLine],
             remove_stopwords: bool = False,
             stopwords: Optional[AbstractSet[str]] = None) -> List[str]:
    """
    Tokenize segmented lines in order.

    Args:
        lines: Segmented lines of one document
        remove_stopwords: Drop tokens found in ``stopwords``
        stopwords: Stopword set; defaults to the standard English list

    Returns:
        Flat list of tokens in reading order. Digit-only tokens are kept.
    """
    tokens: List[str] = []
    for line in lines:
        tokens.extend(tokenize_text(line.text))

    if remove_stopwords:
        stop = {w.lower() for w in (stopwords if stopwords is not None else ENGLISH_STOPWORDS)}
        tokens = [t for t in tokens if t not in stop]
    return tokens
