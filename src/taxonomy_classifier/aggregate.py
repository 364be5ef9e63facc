"""Cross-article aggregation of classification results."""

from collections import defaultdict
from typing import List, Mapping

from .models import ArticleClassification, CategoryResult, CorpusRow

PROPORTION_DECIMALS = 2


def _share(part: float, whole: float, scale: float = 100) -> float:
    """Scaled ratio rounded for reporting; zero when ``whole`` is zero."""
    if not whole:
        return 0.0
    return round(scale * part / whole, PROPORTION_DECIMALS)


def _placeholder() -> CategoryResult:
    return CategoryResult(module=None, category=None, matches=0, percentage_in_module=0.0)


def aggregate(per_article: Mapping[str, ArticleClassification]) -> List[CorpusRow]:
    """
    Join every article's category results with article and module totals.

    Articles without any match contribute a single placeholder row, so
    every input article appears in the output.

    Args:
        per_article: Classifications keyed by article id.

    Returns:
        Corpus rows in article order, then module and category order.
    """
    flat = []
    for article_id, classification in per_article.items():
        rows = list(classification.rows()) or [_placeholder()]
        flat.extend((article_id, classification.word_count, r) for r in rows)

    article_totals = defaultdict(int)
    module_totals = defaultdict(int)
    for article_id, _, r in flat:
        article_totals[article_id] += r.matches
        module_totals[(article_id, r.module)] += r.matches

    corpus = []
    for article_id, word_count, r in flat:
        article_total = article_totals[article_id]
        corpus.append(CorpusRow(
            article_id=article_id,
            module=r.module,
            category=r.category,
            matches=r.matches,
            percentage_in_module=r.percentage_in_module,
            total_matches_in_article=article_total,
            prop_of_article_total=_share(r.matches, article_total),
            prop_of_module_total=_share(r.matches, module_totals[(article_id, r.module)]),
            word_count=word_count,
            matches_per_1000_words=_share(r.matches, word_count, scale=1000),
        ))
    return corpus
