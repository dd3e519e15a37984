"""
Exceptions raised by the documentation analyzers.
"""

from pathlib import Path


class DocsAnalyzerError(Exception):
    """Base class for all analyzer errors."""


class PagesDirectoryNotFoundError(DocsAnalyzerError, FileNotFoundError):
    """The documentation root has no pages/ subdirectory."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"Pages directory not found: {self.path}")


class SitemapNotFoundError(DocsAnalyzerError, FileNotFoundError):
    """The documentation root has no sitemap.json."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"Sitemap not found: {self.path}")


class DocumentReadError(DocsAnalyzerError):
    """A page file could not be read or decoded as UTF-8."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not read {self.path}: {reason}")


class AnalysisError(DocsAnalyzerError):
    """Raised by the orchestrator when one of the analyzers fails."""
