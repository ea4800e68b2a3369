"""Static word lists consulted while filtering tokens.

These are defaults only: the tokenizer and the analysis views take the
lists as parameters, and ``Settings`` can override the skip-list and
month names from the environment.
"""

from typing import FrozenSet

from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

ENGLISH_STOPWORDS: FrozenSet[str] = frozenset(ENGLISH_STOP_WORDS)

DEFAULT_MONTH_NAMES = (
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
)

# Layout and boilerplate terms that dominate every interim report
DEFAULT_SKIP_WORDS = (
    "interim", "report", "page", "section", "figure", "table", "annex",
    "appendix", "paragraph", "chapter", "per", "cent", "pp", "ibid",
    "www", "http", "https", "uk", "gov",
)
