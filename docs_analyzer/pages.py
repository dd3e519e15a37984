"""
Access to a cached documentation bundle on disk.

Layout of a bundle (one directory per library version):
  <docs_path>/pages/*.md, *.txt   page content, optional frontmatter
  <docs_path>/index.json          bundle metadata (library, version, ...)
  <docs_path>/sitemap.json        page list with URLs

Pages are enumerated in lexical filename order so that counts and tie
ordering are reproducible.
"""

import json
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

from .errors import DocumentReadError, PagesDirectoryNotFoundError

logger = logging.getLogger(__name__)

PAGES_DIRNAME = "pages"
MARKDOWN_SUFFIXES = (".md",)
PAGE_SUFFIXES = (".md", ".txt")

# Default worker count for page reads; 1 means sequential.
WORKERS_ENV_VAR = "DOCS_ANALYZER_WORKERS"


def pages_dir(docs_path: Path) -> Path:
    """Return <docs_path>/pages, or raise PagesDirectoryNotFoundError."""
    path = Path(docs_path) / PAGES_DIRNAME
    if not path.is_dir():
        raise PagesDirectoryNotFoundError(path)
    return path


def list_page_files(pages_path: Path, suffixes: tuple[str, ...] = PAGE_SUFFIXES) -> list[Path]:
    """Regular files under pages_path with an allowed suffix, sorted by filename."""
    files = [
        p for p in Path(pages_path).iterdir()
        if p.is_file() and p.name.endswith(suffixes)
    ]
    return sorted(files, key=lambda p: p.name)


def read_page(filepath: Path) -> str:
    """Read a page as UTF-8 text."""
    filepath = Path(filepath)
    try:
        return filepath.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DocumentReadError(filepath, f"not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise DocumentReadError(filepath, e.strerror or str(e)) from e


def default_workers() -> int:
    raw = os.getenv(WORKERS_ENV_VAR, "1")
    try:
        return max(1, int(raw))
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", WORKERS_ENV_VAR, raw)
        return 1


def _read_or_skip(filepath: Path, skip_unreadable: bool) -> str | None:
    try:
        return read_page(filepath)
    except DocumentReadError as e:
        if not skip_unreadable:
            raise
        logger.warning("Skipping unreadable page: %s", e)
        return None


def load_pages(
    docs_path: Path,
    suffixes: tuple[str, ...] = PAGE_SUFFIXES,
    *,
    workers: int | None = None,
    skip_unreadable: bool = False,
) -> list[tuple[str, str]]:
    """
    Read every page of a bundle.
    Returns (filename, content) pairs in enumeration order.

    A page that cannot be read aborts the whole load with DocumentReadError,
    unless skip_unreadable is set, in which case it is logged and left out.
    With workers > 1 the reads fan out over a thread pool; results are
    collected back in enumeration order.
    """
    pages_path = pages_dir(docs_path)
    files = list_page_files(pages_path, suffixes)
    if workers is None:
        workers = default_workers()
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    if workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            contents = list(executor.map(lambda p: _read_or_skip(p, skip_unreadable), files))
    else:
        contents = [_read_or_skip(p, skip_unreadable) for p in files]

    pages = [
        (filepath.name, content)
        for filepath, content in zip(files, contents)
        if content is not None
    ]
    logger.info("Loaded %d of %d pages from %s", len(pages), len(files), pages_path)
    return pages


def load_metadata(docs_path: Path) -> dict[str, Any] | None:
    """Return the bundle's index.json, or None when missing or unparseable."""
    index_path = Path(docs_path) / "index.json"
    try:
        with open(index_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as e:
        logger.warning("Could not load metadata from %s: %s", index_path, e)
        return None
    return data if isinstance(data, dict) else None
