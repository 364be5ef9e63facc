"""Text extraction from article files (PDF, DOCX, TXT)."""

import logging
from pathlib import Path
from typing import Iterable, List

from .errors import LoadError, UnsupportedFormatError
from .models import Document
from .text import count_words, get_article_id, normalize_text

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".pdf", ".docx", ".txt")


def _read_pdf(path: Path) -> str:
    import fitz  # PyMuPDF

    with fitz.open(str(path)) as document:
        return "\n".join(page.get_text() for page in document)


def _read_docx(path: Path) -> str:
    import docx  # python-docx

    document = docx.Document(str(path))
    parts = [p.text for p in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            parts.extend(cell.text for cell in row.cells)
    return "\n".join(parts)


def _read_txt(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


_READERS = {
    ".pdf": _read_pdf,
    ".docx": _read_docx,
    ".txt": _read_txt,
}


def extract_text(path: Path) -> str:
    """
    Extract raw text from an article file.

    Raises:
        UnsupportedFormatError: If the extension has no reader.
        LoadError: If the file is missing or the reader fails.
    """
    path = Path(path)
    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise UnsupportedFormatError(path, f"unsupported file type '{path.suffix}'")
    if not path.is_file():
        raise LoadError(path, "file not found")

    try:
        return reader(path)
    except Exception as e:
        raise LoadError(path, f"could not read file: {e}") from e


def load_document(path: Path) -> Document:
    """Extract, count and normalize one article."""
    path = Path(path)
    raw = extract_text(path)
    word_count = count_words(raw)
    if word_count == 0:
        logger.warning(f"No text extracted from {path.name}")

    return Document(
        id=get_article_id(path),
        normalized_text=normalize_text(raw),
        word_count=word_count,
    )


def find_documents(
    directory: Path,
    extensions: Iterable[str] = SUPPORTED_EXTENSIONS,
) -> List[Path]:
    """List article files in a directory, sorted by name."""
    extensions = {ext.lower() for ext in extensions}
    return sorted(
        p for p in Path(directory).iterdir()
        if p.is_file() and p.suffix.lower() in extensions
    )
