"""
Text extraction and tokenization for keyword analysis.
Splits a page's block nodes into heading text and body text, then tokenizes
and filters words against the stopword tables.
"""

import re
from typing import NamedTuple

from nltk.tokenize import RegexpTokenizer

from .markdown_walker import HEADING, LIST_ITEM, PARAGRAPH, BlockNode
from .stopwords import STOPWORDS, TECH_STOPWORDS

# Word characters, keeping intra-word hyphens and apostrophes ("server-side", "don't").
_WORD_TOKENIZER = RegexpTokenizer(r"\w+(?:[-']\w+)*")

_KEYWORD_SHAPE = re.compile(r"[a-z][a-z0-9-]*")
_NUMERIC_SHAPE = re.compile(r"[\d-]+")

MIN_TOKEN_LENGTH = 3


class TextContent(NamedTuple):
    heading_text: str
    body_text: str


def extract_text_content(nodes: list[BlockNode]) -> TextContent:
    """
    Split block nodes into heading text and body text, each space-joined
    in document order. Heading levels are not distinguished; code and
    frontmatter blocks are ignored.
    """
    headings: list[str] = []
    body: list[str] = []
    for node in nodes:
        if node.type == HEADING:
            headings.append(node.text)
        elif node.type in (PARAGRAPH, LIST_ITEM):
            body.append(node.text)
    return TextContent(" ".join(headings), " ".join(body))


def tokenize(text: str) -> list[str]:
    """
    Lowercase text and split it into word tokens.
    Punctuation and whitespace separate tokens; hyphens and apostrophes
    between word characters do not.
    """
    if not text:
        return []
    return _WORD_TOKENIZER.tokenize(text.lower())


def is_keyword_token(token: str) -> bool:
    """
    Acceptance predicate for keyword tokens.
    The shape check is ASCII-only, so words with non-ASCII letters or
    apostrophes are rejected whole instead of being split into fragments.
    """
    return (
        len(token) >= MIN_TOKEN_LENGTH
        and token not in STOPWORDS
        and token not in TECH_STOPWORDS
        and _KEYWORD_SHAPE.fullmatch(token) is not None
        and _NUMERIC_SHAPE.fullmatch(token) is None
    )


def tokenize_and_clean(text: str) -> list[str]:
    """Tokenize text and drop tokens that fail is_keyword_token."""
    return [t for t in tokenize(text) if is_keyword_token(t)]
