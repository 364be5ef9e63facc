"""
Taxonomy loading
================

A taxonomy maps module names (e.g. "Types of uncertainty") to an ordered
list of categories, each defined by comma-separated keyword terms.

Supported sources:
    - Excel workbook, one sheet per module
    - CSV in long format with a ``module`` column
    - JSON, ``{module: [{category, keywords}, ...]}`` or
      ``{module: {category: keywords}}``
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd

from .errors import LoadError, UnsupportedFormatError
from .text import normalize_text

logger = logging.getLogger(__name__)

TAXONOMY_EXTENSIONS = (".xlsx", ".csv", ".json")


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def parse_keywords(raw: Any) -> Tuple[str, ...]:
    """
    Split a raw keyword field into individual search terms.

    Terms are separated by commas, trimmed and lowercased. Empty terms
    are dropped, so ``"risk, , hazard"`` gives ``("risk", "hazard")``.
    A missing field yields an empty tuple.
    """
    if _is_missing(raw):
        return ()
    terms = (term.strip().lower() for term in str(raw).split(","))
    return tuple(term for term in terms if term)


@dataclass(frozen=True)
class CategoryDefinition:
    """A named category and the literal terms that count toward it."""

    name: str
    keywords: Tuple[str, ...]

    @classmethod
    def from_row(cls, label: Any, raw_keywords: Any) -> Optional["CategoryDefinition"]:
        """Build a definition, or return None when the row cannot match anything."""
        if _is_missing(label) or not str(label).strip():
            return None
        keywords = parse_keywords(raw_keywords)
        if not keywords:
            return None
        return cls(name=str(label).strip(), keywords=keywords)


class Taxonomy(Mapping):
    """Read-only, ordered mapping of module name to category definitions."""

    def __init__(self, modules: Iterable[Tuple[str, Iterable[CategoryDefinition]]] = ()):
        if isinstance(modules, Mapping):
            modules = modules.items()
        self._modules = MappingProxyType(
            {str(name): tuple(categories) for name, categories in modules}
        )

    def __getitem__(self, module: str) -> Tuple[CategoryDefinition, ...]:
        return self._modules[module]

    def __iter__(self):
        return iter(self._modules)

    def __len__(self) -> int:
        return len(self._modules)

    def __repr__(self) -> str:
        return f"Taxonomy({len(self)} modules, {self.category_count} categories)"

    @property
    def category_count(self) -> int:
        return sum(len(categories) for categories in self._modules.values())

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "Taxonomy":
        """
        Build a taxonomy from plain Python data.

        Each module value may be a ``{category: keywords}`` dict or a list
        of ``{"category": ..., "keywords": ...}`` records.
        """
        if not isinstance(data, Mapping):
            raise ValueError("taxonomy must map module names to categories")

        modules = []
        for module, entries in data.items():
            if isinstance(entries, Mapping):
                pairs = list(entries.items())
            else:
                if not isinstance(entries, (list, tuple)) or not all(isinstance(e, Mapping) for e in entries):
                    raise ValueError(
                        f"module '{module}' must hold {{category: keywords}} or a list of records"
                    )
                pairs = [
                    (_lookup(entry, "category"), _lookup(entry, "keywords"))
                    for entry in entries
                ]
            categories = _build_categories(module, pairs)
            if categories:
                modules.append((module, categories))
        return cls(modules)

    @classmethod
    def from_frames(
        cls,
        frames: Dict[str, pd.DataFrame],
        category_column: str = "category",
        keywords_column: str = "keywords",
    ) -> "Taxonomy":
        """Build a taxonomy from one DataFrame per module."""
        modules = []
        for module, df in frames.items():
            label_col = _find_column(df, category_column)
            keywords_col = _find_column(df, keywords_column)
            if label_col is None or keywords_col is None:
                logger.warning(
                    f"Skipping module '{module}': missing "
                    f"'{category_column}' or '{keywords_column}' column"
                )
                continue
            pairs = list(zip(df[label_col], df[keywords_col]))
            categories = _build_categories(module, pairs)
            if categories:
                modules.append((str(module).strip(), categories))
        return cls(modules)


def _lookup(entry: Dict[str, Any], name: str) -> Any:
    for key, value in entry.items():
        if str(key).strip().lower() == name:
            return value
    return None


def _find_column(df: pd.DataFrame, name: str) -> Optional[str]:
    """Find a column by name, ignoring case and surrounding whitespace."""
    wanted = name.strip().lower()
    for col in df.columns:
        if str(col).strip().lower() == wanted:
            return col
    return None


def _build_categories(module: str, pairs: List[Tuple[Any, Any]]) -> List[CategoryDefinition]:
    categories = []
    for label, raw_keywords in pairs:
        definition = CategoryDefinition.from_row(label, raw_keywords)
        if definition is None:
            logger.debug(f"Skipping category {label!r} in '{module}': no keywords")
            continue
        for term in definition.keywords:
            if normalize_text(term) != term:
                logger.warning(
                    f"Keyword '{term}' of '{definition.name}' in '{module}' contains "
                    "punctuation or stopwords and will not match normalized text"
                )
        categories.append(definition)
    return categories


def load_taxonomy(
    path: Path,
    category_column: str = "category",
    keywords_column: str = "keywords",
) -> Taxonomy:
    """
    Load a taxonomy from disk.

    Args:
        path: Excel workbook, CSV or JSON file.
        category_column: Header of the category label column.
        keywords_column: Header of the comma-separated keywords column.

    Returns:
        The loaded taxonomy.

    Raises:
        UnsupportedFormatError: If the file type is not supported.
        LoadError: If the file is missing or cannot be parsed.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix not in TAXONOMY_EXTENSIONS:
        raise UnsupportedFormatError(path, f"unsupported taxonomy format '{suffix}'")
    if not path.exists():
        raise LoadError(path, "taxonomy file not found")

    logger.info(f"Loading taxonomy from {path}")
    try:
        if suffix == ".xlsx":
            frames = pd.read_excel(path, sheet_name=None, dtype=str)
            taxonomy = Taxonomy.from_frames(frames, category_column, keywords_column)
        elif suffix == ".csv":
            df = pd.read_csv(path, dtype=str)
            module_col = _find_column(df, "module")
            if module_col is None:
                raise LoadError(path, "CSV taxonomy needs a 'module' column")
            frames = {
                name: group
                for name, group in df.groupby(module_col, sort=False)
            }
            taxonomy = Taxonomy.from_frames(frames, category_column, keywords_column)
        else:
            with open(path, encoding="utf-8") as f:
                taxonomy = Taxonomy.from_mapping(json.load(f))
    except LoadError:
        raise
    except (OSError, ValueError) as e:
        raise LoadError(path, str(e)) from e

    logger.info(f"Loaded {len(taxonomy)} modules with {taxonomy.category_count} categories")
    return taxonomy
