"""
Keyword extraction: weighted term frequency per page and TF-IDF across the bundle.

Per page, heading tokens count HEADING_WEIGHT times and body tokens
BODY_WEIGHT times in the frequency map. The corpus TF-IDF step works on the
unweighted token stream of each page: tf is the raw count of a term in the
page, idf(t) = 1 + ln(N / (1 + df_t)), and each page adds tf * idf to the
term's corpus score.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from .markdown_walker import parse_blocks
from .pages import PAGE_SUFFIXES, load_pages
from .posting import InvertedIndex
from .tokenizer import extract_text_content, tokenize_and_clean

logger = logging.getLogger(__name__)

HEADING_WEIGHT = 3
BODY_WEIGHT = 1

DEFAULT_TOP_N = 50


@dataclass(frozen=True)
class DocumentKeywords:
    """Tokens and weighted frequencies of one page."""

    filename: str
    tokens: list[str]
    frequency: dict[str, int]
    heading_tokens: int
    body_tokens: int

    def to_dict(self) -> dict:
        return {
            "filename": self.filename,
            "tokens": list(self.tokens),
            "frequency": dict(self.frequency),
            "headingTokens": self.heading_tokens,
            "bodyTokens": self.body_tokens,
        }


@dataclass(frozen=True)
class KeywordScore:
    term: str
    score: float


@dataclass(frozen=True)
class TermCount:
    term: str
    count: int


@dataclass(frozen=True)
class KeywordReport:
    """
    Result of extract_keywords.
    - keywords: every term with its corpus TF-IDF score, descending
    - top_keywords: first top_n of keywords
    - most_frequent: first top_n terms by summed weighted frequency
    - total_tokens: heading + body tokens over all pages
    - unique_terms: number of scored terms
    """

    keywords: list[KeywordScore] = field(default_factory=list)
    top_keywords: list[KeywordScore] = field(default_factory=list)
    most_frequent: list[TermCount] = field(default_factory=list)
    total_documents: int = 0
    total_tokens: int = 0
    unique_terms: int = 0
    document_data: list[DocumentKeywords] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize to the JSON shape consumed by downstream tooling."""
        return {
            "keywords": [{"term": k.term, "score": k.score} for k in self.keywords],
            "topKeywords": [{"term": k.term, "score": k.score} for k in self.top_keywords],
            "mostFrequent": [{"term": t.term, "count": t.count} for t in self.most_frequent],
            "totalDocuments": self.total_documents,
            "totalTokens": self.total_tokens,
            "uniqueTerms": self.unique_terms,
            "documentData": [d.to_dict() for d in self.document_data],
        }


def build_frequency_map(heading_tokens: list[str], body_tokens: list[str]) -> dict[str, int]:
    """
    Weighted frequency of each token in a page.
    weight = HEADING_WEIGHT * heading count + BODY_WEIGHT * body count
    """
    frequency: dict[str, int] = {}
    for token in heading_tokens:
        frequency[token] = frequency.get(token, 0) + HEADING_WEIGHT
    for token in body_tokens:
        frequency[token] = frequency.get(token, 0) + BODY_WEIGHT
    return frequency


def extract_keywords_from_content(content: str, filename: str) -> DocumentKeywords:
    """Tokenize one page and build its weighted frequency map."""
    text = extract_text_content(parse_blocks(content))
    heading_tokens = tokenize_and_clean(text.heading_text)
    body_tokens = tokenize_and_clean(text.body_text)
    return DocumentKeywords(
        filename=filename,
        tokens=heading_tokens + body_tokens,
        frequency=build_frequency_map(heading_tokens, body_tokens),
        heading_tokens=len(heading_tokens),
        body_tokens=len(body_tokens),
    )


def inverse_document_frequency(df: int, total_documents: int) -> float:
    """
    idf = 1 + ln(N / (1 + df)).
    Strictly positive for 1 <= df <= N and decreasing in df.
    """
    return 1.0 + math.log(total_documents / (1.0 + df))


def compute_corpus_tfidf(token_streams: Iterable[list[str]]) -> dict[str, float]:
    """
    Sum per-document TF-IDF scores into one corpus-wide score per term.
    Terms are keyed in order of first appearance across the corpus.
    """
    index = InvertedIndex()
    total_documents = 0
    for doc_id, tokens in enumerate(token_streams):
        for term, tf in Counter(tokens).items():
            index.add_posting(term, doc_id, tf)
        total_documents += 1

    scores: dict[str, float] = {}
    for term in index.terms():
        postings = index.get_postings(term)
        idf = inverse_document_frequency(len(postings), total_documents)
        scores[term] = sum(p.tf * idf for p in postings)
    return scores


def aggregate_frequencies(documents: Iterable[DocumentKeywords]) -> dict[str, int]:
    """Sum weighted frequency maps over documents, keyed in first-appearance order."""
    totals: dict[str, int] = {}
    for doc in documents:
        for term, count in doc.frequency.items():
            totals[term] = totals.get(term, 0) + count
    return totals


def _rank(values: dict) -> list[tuple]:
    # Stable sort: equal values keep first-appearance order.
    return sorted(values.items(), key=lambda item: item[1], reverse=True)


def build_keyword_report(documents: list[DocumentKeywords], top_n: int = DEFAULT_TOP_N) -> KeywordReport:
    """Assemble the report from per-page keyword data (already in enumeration order)."""
    if not documents:
        return KeywordReport()

    term_scores = compute_corpus_tfidf(doc.tokens for doc in documents)
    keywords = [KeywordScore(term, score) for term, score in _rank(term_scores)]
    most_frequent = [
        TermCount(term, count) for term, count in _rank(aggregate_frequencies(documents))
    ]

    return KeywordReport(
        keywords=keywords,
        top_keywords=keywords[:top_n],
        most_frequent=most_frequent[:top_n],
        total_documents=len(documents),
        total_tokens=sum(doc.heading_tokens + doc.body_tokens for doc in documents),
        unique_terms=len(term_scores),
        document_data=list(documents),
    )


def extract_keywords(
    docs_path: Path,
    top_n: int = DEFAULT_TOP_N,
    *,
    workers: int | None = None,
    skip_unreadable: bool = False,
) -> KeywordReport:
    """
    Extract keywords from every .md/.txt page of a documentation bundle.

    Raises PagesDirectoryNotFoundError before reading anything when
    <docs_path>/pages is missing. A bundle with no pages yields an empty
    report. Unreadable pages abort with DocumentReadError unless
    skip_unreadable is set.
    """
    if top_n < 0:
        raise ValueError(f"top_n must be >= 0, got {top_n}")

    pages = load_pages(
        docs_path,
        PAGE_SUFFIXES,
        workers=workers,
        skip_unreadable=skip_unreadable,
    )
    documents = [extract_keywords_from_content(content, filename) for filename, content in pages]
    report = build_keyword_report(documents, top_n)
    logger.info(
        "Extracted %d unique terms from %d documents (%d tokens)",
        report.unique_terms,
        report.total_documents,
        report.total_tokens,
    )
    return report
