"""
Posting and inverted index data structures.

A posting records how many times a term occurs in one document's token
stream. The corpus TF-IDF step scores each term from its postings: the
posting count is the document frequency and each posting adds tf * idf.
"""

from dataclasses import dataclass
from typing import Iterator


@dataclass
class Posting:
    """
    Represents a term's occurrence in a document.
    - doc_id: position of the document in enumeration order
    - tf: raw term count in the document's token stream
    """

    doc_id: int
    tf: int

    def __repr__(self) -> str:
        return f"Posting(doc_id={self.doc_id!r}, tf={self.tf})"


class InvertedIndex:
    """
    Inverted index: map from term -> list of postings, in insertion order.
    Append-only add_posting; one posting per (term, document) is expected.
    """

    def __init__(self) -> None:
        self._index: dict[str, list[Posting]] = {}

    def add_posting(self, term: str, doc_id: int, tf: int) -> None:
        """Append a posting for a term in a document (no duplicate check)."""
        if term not in self._index:
            self._index[term] = []
        self._index[term].append(Posting(doc_id=doc_id, tf=tf))

    def get_postings(self, term: str) -> list[Posting]:
        """Return the list of postings for a term, or empty list."""
        return self._index.get(term, [])

    def terms(self) -> Iterator[str]:
        """Iterate over all terms in first-insertion order."""
        return iter(self._index)
