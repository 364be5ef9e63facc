"""Configuration for the keyword taxonomy classifier."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple
import os

from .extract import SUPPORTED_EXTENSIONS

TAXONOMY_ENV_VAR = "TAXONOMY_CLASSIFIER_TAXONOMY"
DEFAULT_TAXONOMY_NAME = "taxonomy.xlsx"


def _find_taxonomy() -> Optional[Path]:
    """
    Find the taxonomy workbook by checking multiple locations.

    Search order:
    1. TAXONOMY_CLASSIFIER_TAXONOMY environment variable
    2. ./taxonomy.xlsx (current working directory)
    3. ~/.taxonomy_classifier/taxonomy.xlsx (user home fallback)
    """
    # 1. Environment variable
    if env_path := os.environ.get(TAXONOMY_ENV_VAR):
        path = Path(env_path)
        if path.exists():
            return path

    # 2. Current working directory
    cwd_taxonomy = Path.cwd() / DEFAULT_TAXONOMY_NAME
    if cwd_taxonomy.exists():
        return cwd_taxonomy

    # 3. User home directory
    home_taxonomy = Path.home() / ".taxonomy_classifier" / DEFAULT_TAXONOMY_NAME
    if home_taxonomy.exists():
        return home_taxonomy

    return None


@dataclass
class Config:
    """Configuration settings for the keyword classifier."""

    # Taxonomy source (auto-detected if not specified)
    taxonomy_path: Optional[Path] = None
    category_column: str = "category"  # Header of the category label column
    keywords_column: str = "keywords"  # Header of the comma-separated keywords column

    # Reporting
    top_n: int = 3  # Categories per module in the narrative summary
    include_summary: bool = True

    # Input files
    supported_extensions: Tuple[str, ...] = SUPPORTED_EXTENSIONS

    def __post_init__(self):
        """Locate the taxonomy if no path was given."""
        if self.taxonomy_path is None:
            self.taxonomy_path = _find_taxonomy()

        # Ensure Path types
        if self.taxonomy_path is not None:
            self.taxonomy_path = Path(self.taxonomy_path)
        self.supported_extensions = tuple(ext.lower() for ext in self.supported_extensions)
