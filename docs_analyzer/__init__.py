"""Documentation bundle analysis package."""

from .errors import (
    AnalysisError,
    DocsAnalyzerError,
    DocumentReadError,
    PagesDirectoryNotFoundError,
    SitemapNotFoundError,
)
from .keywords import KeywordReport, extract_keywords, extract_keywords_from_content
from .markdown_walker import BlockNode, parse_blocks
from .tokenizer import tokenize, tokenize_and_clean
from .analyzer import AnalysisOptions, analyze_documentation
