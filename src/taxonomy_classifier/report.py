"""Tabular export of article and corpus results."""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from .models import ArticleClassification, CorpusRow

logger = logging.getLogger(__name__)

ARTICLE_COLUMNS = ["module", "category", "matches", "percentage"]

CORPUS_COLUMNS = [
    "module",
    "category",
    "matches",
    "article",
    "total_matches_in_article",
    "prop_of_article_total",
    "prop_of_module_total",
    "word_count",
    "matches_per_1000_words",
]

SUMMARY_MODULE = "summary"


def article_frame(classification: ArticleClassification, summary: Optional[str] = None) -> pd.DataFrame:
    """
    Build the single-article table.

    Args:
        classification: Result of one article.
        summary: Narrative text appended as a final row, if given.
    """
    records = [
        {
            "module": r.module,
            "category": r.category,
            "matches": r.matches,
            "percentage": r.percentage_in_module,
        }
        for r in classification.rows()
    ]
    if summary:
        records.append({"module": SUMMARY_MODULE, "category": summary, "matches": None, "percentage": None})
    return pd.DataFrame.from_records(records, columns=ARTICLE_COLUMNS)


def corpus_frame(rows: Iterable[CorpusRow]) -> pd.DataFrame:
    """Build the cross-article table."""
    records = [
        {
            "module": r.module,
            "category": r.category,
            "matches": r.matches,
            "article": r.article_id,
            "total_matches_in_article": r.total_matches_in_article,
            "prop_of_article_total": r.prop_of_article_total,
            "prop_of_module_total": r.prop_of_module_total,
            "word_count": r.word_count,
            "matches_per_1000_words": r.matches_per_1000_words,
        }
        for r in rows
    ]
    return pd.DataFrame.from_records(records, columns=CORPUS_COLUMNS)


def failures_frame(failures: List[Tuple[Path, str]]) -> pd.DataFrame:
    """Table of files that could not be classified."""
    return pd.DataFrame.from_records(
        [{"file": str(path), "error": reason} for path, reason in failures],
        columns=["file", "error"],
    )


def write_csv(df: pd.DataFrame, path: Path) -> Path:
    """Write a table as UTF-8 CSV, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False, encoding="utf-8")
    logger.info(f"Wrote {len(df)} rows to {path}")
    return path
