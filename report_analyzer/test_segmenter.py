import pytest

from report_analyzer.models import PageText, SegmentedLine
from report_analyzer.segmenter import normalize_text, resegment_lines, segment_pages

TEXT = (
    "The Authority has reviewed the interim report and considers that the\n"
    "company  could improve its   reporting of customer outcomes. We will\n"
    "monitor progress through the next regu-\nlatory period.\n"
)


def test_lines_respect_width_and_keep_page_index():
    pages = [PageText(1, TEXT), PageText(2, "Short page.")]
    lines = segment_pages(pages, width=40)

    assert all(len(line.text) <= 40 for line in lines)
    assert lines[-1] == SegmentedLine(page_index=2, text="Short page.")
    assert {line.page_index for line in lines[:-1]} == {1}


def test_source_line_breaks_are_discarded():
    lines = segment_pages([PageText(1, TEXT)], width=1000)
    assert len(lines) == 1
    assert "\n" not in lines[0].text
    assert "  " not in lines[0].text


def test_hyphenated_break_is_rejoined():
    assert "regulatory" in normalize_text(TEXT)
    assert normalize_text("well-known\nfact") == "well-known fact"


def test_resegmenting_lines_within_width_is_noop():
    lines = segment_pages([PageText(1, TEXT), PageText(2, TEXT)], width=50)
    assert resegment_lines(lines, width=50) == lines


def test_blank_page_produces_no_lines():
    assert segment_pages([PageText(1, "  \n\n ")]) == []


def test_overlong_word_kept_whole():
    word = "x" * 30
    lines = segment_pages([PageText(1, f"a {word} b")], width=10)
    assert [line.text for line in lines] == ["a", word, "b"]


def test_invalid_width():
    with pytest.raises(ValueError):
        segment_pages([PageText(1, "text")], width=0)


def test_chained_hyphen_breaks_are_rejoined():
    lines = segment_pages([PageText(1, "regu-\nl-\natory body")])
    assert [line.text for line in lines] == ["regulatory body"]
    assert normalize_text("a-\nb-\nc") == "abc"
