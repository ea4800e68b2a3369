"""Reflow extracted page text into fixed-width lines.

PDF extraction breaks lines wherever the source layout wrapped them. Each
page is treated as one stream of words: hyphenated line breaks are
rejoined, all whitespace is collapsed, and the stream is re-wrapped at
word boundaries.
"""

import re
import textwrap
from typing import Iterable, List

from .models import PageText, SegmentedLine

DEFAULT_WIDTH = 100

_HYPHEN_BREAK = re.compile(r"(?<=\w)-[ \t]*\r?\n\s*(?=\w)")
_WHITESPACE = re.compile(r"\s+")


def _wrap(text: str, width: int) -> List[str]:
    # Overlong words stay whole on their own line rather than being split.
    return textwrap.wrap(
        text,
        width=width,
        break_long_words=False,
        break_on_hyphens=False,
    )


def normalize_text(text: str) -> str:
    """Rejoin words split across lines and collapse whitespace."""
    text = _HYPHEN_BREAK.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def segment_pages(pages: Iterable[PageText], width: int = DEFAULT_WIDTH) -> List[SegmentedLine]:
    if width < 1:
        raise ValueError(f"width must be positive, got {width}")
    lines: List[SegmentedLine] = []
    for page in pages:
        for chunk in _wrap(normalize_text(page.text), width):
            lines.append(SegmentedLine(page_index=page.page_index, text=chunk))
    return lines


def resegment_lines(lines: Iterable[SegmentedLine], width: int = DEFAULT_WIDTH) -> List[SegmentedLine]:
    """Re-wrap already segmented lines one at a time.

    Lines that already fit within ``width`` come back unchanged.
    """
    if width < 1:
        raise ValueError(f"width must be positive, got {width}")
    out: List[SegmentedLine] = []
    for line in lines:
        for chunk in _wrap(line.text, width):
            out.append(SegmentedLine(page_index=line.page_index, text=chunk))
    return out
