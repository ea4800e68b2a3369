"""
Horizontal bar charts for the analysis views.

Each function takes the ``ChartRow`` list produced by ``views`` and writes
a PNG. Bars are drawn in the order given, bottom to top, so ascending
rows put the largest value at the top of the chart.
"""

import logging
from pathlib import Path
from typing import Sequence, Union

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402
import seaborn as sns  # noqa: E402

from .models import ChartRow  # noqa: E402

logger = logging.getLogger(__name__)

HIGHLIGHT_COLOR = "#d95f02"
BASE_COLOR = "#9e9e9e"


def rows_to_frame(rows: Sequence[ChartRow]) -> pd.DataFrame:
    """Chart rows as a DataFrame with ``document_id`` as an ordered categorical."""
    df = pd.DataFrame(
        [(r.document_id, r.value, r.label, r.highlight) for r in rows],
        columns=["document_id", "value", "label", "highlight"],
    )
    categories = list(dict.fromkeys(df["document_id"]))
    df["document_id"] = pd.Categorical(df["document_id"], categories=categories, ordered=True)
    return df


def _save(fig, output_path: Union[str, Path]) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    logger.info(f"Saved chart to {output_path}")
    return output_path


def plot_ranked(rows: Sequence[ChartRow], title: str, xlabel: str,
                output_path: Union[str, Path]) -> Path:
    """Plot one bar per document, highlighting the maximum."""
    df = rows_to_frame(rows)
    # reverse so the first row ends up at the bottom of the axis
    order = list(df["document_id"].cat.categories)[::-1]
    df["group"] = df["highlight"].map({True: "max", False: "other"})

    fig, ax = plt.subplots(figsize=(8, max(2.5, 0.5 * len(df) + 1)))
    sns.barplot(
        data=df,
        x="value",
        y="document_id",
        hue="group",
        order=order,
        palette={"max": HIGHLIGHT_COLOR, "other": BASE_COLOR},
        dodge=False,
        legend=False,
        ax=ax,
    )
    for _, row in df.iterrows():
        ax.text(row["value"], order.index(row["document_id"]), f" {row['label']}",
                va="center", fontsize=9)
    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel("")
    return _save(fig, output_path)


def plot_top_words(rows: Sequence[ChartRow], output_path: Union[str, Path],
                   title: str = "Most common words per report") -> Path:
    """Plot the top words of every document, grouped by document."""
    df = rows_to_frame(rows)
    df["bar"] = df["document_id"].astype(str) + ": " + df["label"]
    order = list(df["bar"])[::-1]

    fig, ax = plt.subplots(figsize=(8, max(2.5, 0.4 * len(df) + 1)))
    sns.barplot(
        data=df,
        x="value",
        y="bar",
        hue="document_id",
        order=order,
        palette="crest",
        dodge=False,
        legend=False,
        ax=ax,
    )
    ax.set_title(title)
    ax.set_xlabel("Share of filtered words")
    ax.set_ylabel("")
    return _save(fig, output_path)
