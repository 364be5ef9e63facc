"""
Keyword Taxonomy Classifier
===========================

Counts literal keyword occurrences in normalized article text and
reports, per taxonomy module, which categories matched and their share
of the module's matches.

Matching is a plain substring count: a keyword that appears inside a
longer word ("risk" in "risky") is counted.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .config import Config
from .errors import ClassifierError, LoadError
from .extract import load_document
from .models import ArticleClassification, CategoryResult, Document
from .taxonomy import CategoryDefinition, Taxonomy, load_taxonomy

logger = logging.getLogger(__name__)

PERCENTAGE_DECIMALS = 1

ClassificationResult = Dict[str, Tuple[CategoryResult, ...]]


def count_term(text: str, term: str) -> int:
    """Count non-overlapping literal occurrences of ``term`` in ``text``."""
    if not term:
        return 0
    return text.count(term)


def count_category_matches(text: str, category: CategoryDefinition) -> int:
    """Sum the occurrences of every term of a category."""
    return sum(count_term(text, term) for term in category.keywords)


def classify(
    text: str,
    taxonomy: Mapping[str, Sequence[CategoryDefinition]],
) -> ClassificationResult:
    """
    Classify normalized text against a taxonomy.

    Args:
        text: Normalized article text. It is not normalized again here.
        taxonomy: Module name to category definitions.

    Returns:
        Module name to matching categories, in taxonomy order. Modules
        without any match are left out, so empty text gives ``{}``.
    """
    result: ClassificationResult = {}
    if not text:
        return result

    for module, categories in taxonomy.items():
        counts = [
            (category.name, count_category_matches(text, category))
            for category in categories
            if category.keywords
        ]
        counts = [(name, matches) for name, matches in counts if matches > 0]
        if not counts:
            continue

        module_total = sum(matches for _, matches in counts)
        result[module] = tuple(
            CategoryResult(
                module=module,
                category=name,
                matches=matches,
                percentage_in_module=round(
                    100 * matches / module_total, PERCENTAGE_DECIMALS
                ),
            )
            for name, matches in counts
        )

    return result


def _ranked(rows: Sequence[CategoryResult], n: int) -> List[CategoryResult]:
    return sorted(rows, key=lambda r: r.matches, reverse=True)[:max(n, 0)]


def top_categories(result: Mapping[str, Sequence[CategoryResult]], n: int = 3) -> Dict[str, List[str]]:
    """
    Pick the most matched categories of each module.

    Ties keep the original category order.
    """
    top = {}
    for module, rows in result.items():
        top[module] = [r.category for r in _ranked(rows, n)]
    return top


def summarize(result: Mapping[str, Sequence[CategoryResult]], n: int = 3) -> str:
    """Write a short narrative of the dominant categories per module."""
    if not result:
        return "No taxonomy keywords were found in this article."

    sentences = []
    for module, rows in result.items():
        described = [
            f"{r.category} ({r.matches} matches, {r.percentage_in_module}%)"
            for r in _ranked(rows, n)
        ]
        sentences.append(f"{module} is dominated by {', '.join(described)}.")
    return " ".join(sentences)


@dataclass
class CorpusRun:
    """Outcome of classifying a collection of documents."""

    classifications: Dict[str, ArticleClassification] = field(default_factory=dict)
    failures: List[Tuple[Path, str]] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return len(self.classifications)


class KeywordClassifier:
    """
    Keyword classifier bound to a taxonomy.

    Usage:
        classifier = KeywordClassifier(config=Config(taxonomy_path="taxonomy.xlsx"))
        classifier.initialize()
        result = classifier.classify(normalized_text)
    """

    def __init__(self, taxonomy: Optional[Taxonomy] = None, config: Optional[Config] = None):
        """
        Initialize classifier.

        Args:
            taxonomy: Preloaded taxonomy. Loaded from ``config`` when omitted.
            config: Optional configuration. Uses defaults if not provided.
        """
        self.config = config or Config()
        self.taxonomy = taxonomy
        self._initialized = taxonomy is not None

    def initialize(self) -> bool:
        """
        Load the taxonomy if it was not given to the constructor.

        Returns:
            True if initialization succeeded.
        """
        if self._initialized:
            return True

        if self.config.taxonomy_path is None:
            raise ClassifierError(
                "No taxonomy given and no taxonomy file found; set Config.taxonomy_path"
            )

        logger.info("Initializing keyword classifier...")
        self.taxonomy = load_taxonomy(
            self.config.taxonomy_path,
            category_column=self.config.category_column,
            keywords_column=self.config.keywords_column,
        )
        self._initialized = True
        return True

    def classify(self, text: str) -> ClassificationResult:
        """Classify one normalized text."""
        if not self._initialized:
            self.initialize()
        return classify(text, self.taxonomy)

    def classify_document(self, document: Document) -> ArticleClassification:
        """Classify a normalized document."""
        return ArticleClassification(
            article_id=document.id,
            word_count=document.word_count,
            results=self.classify(document.normalized_text),
        )

    def classify_file(self, path: Path) -> ArticleClassification:
        """Extract, normalize and classify one article file."""
        return self.classify_document(load_document(path))

    def summarize(self, classification: ArticleClassification) -> str:
        return summarize(classification.results, self.config.top_n)

    def classify_corpus(self, paths: Iterable[Path], show_progress: bool = True) -> CorpusRun:
        """
        Classify every article in a collection.

        A file that cannot be loaded is logged and recorded in
        ``CorpusRun.failures``; the remaining files are still processed.

        Args:
            paths: Article files.
            show_progress: Whether to show progress bar.

        Returns:
            Classifications keyed by article id, plus failures.
        """
        from tqdm import tqdm

        if not self._initialized:
            self.initialize()

        paths = [Path(p) for p in paths]
        run = CorpusRun()
        start = time.time()

        iterator = tqdm(paths, desc="Classifying") if show_progress else paths
        for path in iterator:
            try:
                classification = self.classify_file(path)
            except LoadError as e:
                logger.warning(f"Skipping {path.name}: {e.reason}")
                run.failures.append((path, e.reason))
                continue

            if classification.article_id in run.classifications:
                reason = f"duplicate article id '{classification.article_id}'"
                logger.warning(f"Skipping {path.name}: {reason}")
                run.failures.append((path, reason))
                continue
            run.classifications[classification.article_id] = classification

        logger.info(
            f"Classified {run.succeeded} of {len(paths)} documents "
            f"in {time.time() - start:.1f}s ({len(run.failures)} failed)"
        )
        return run
