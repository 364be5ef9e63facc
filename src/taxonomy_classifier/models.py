"""Result records produced by the classifier and the corpus aggregator."""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Document:
    """A normalized article, ready for classification."""

    id: str
    normalized_text: str
    word_count: int = 0


@dataclass(frozen=True)
class CategoryResult:
    """Matches for one category within one module of one article."""

    module: Optional[str]
    category: Optional[str]
    matches: int
    percentage_in_module: float


@dataclass(frozen=True)
class ArticleClassification:
    """All category results of one article, grouped by module."""

    article_id: str
    word_count: int
    results: Dict[str, Tuple[CategoryResult, ...]] = field(default_factory=dict)

    @property
    def total_matches(self) -> int:
        return sum(r.matches for rows in self.results.values() for r in rows)

    def rows(self):
        """Iterate over results in module order."""
        for rows in self.results.values():
            yield from rows


@dataclass(frozen=True)
class CorpusRow:
    """A category result joined with article-level totals."""

    article_id: str
    module: Optional[str]
    category: Optional[str]
    matches: int
    percentage_in_module: float
    total_matches_in_article: int
    prop_of_article_total: float
    prop_of_module_total: float
    word_count: int
    matches_per_1000_words: float

    @property
    def is_placeholder(self) -> bool:
        return self.module is None and self.category is None
