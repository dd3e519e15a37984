"""
Documentation hierarchy built from the URL paths listed in sitemap.json.
"""

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlparse

from .errors import SitemapNotFoundError

# Path segments that only namespace the docs and say nothing about structure.
IGNORED_SEGMENTS = frozenset({"docs", "documentation", "guide", "manual", "api-reference"})

LARGEST_SECTIONS = 10


@dataclass
class _TreeNode:
    segment: str
    title: str
    depth: int
    pages: list[dict] = field(default_factory=list)
    children: dict[str, "_TreeNode"] = field(default_factory=dict)
    page_count: int = 0

    def to_dict(self) -> dict:
        return {
            "segment": self.segment,
            "title": self.title,
            "depth": self.depth,
            "pages": self.pages,
            "children": {k: v.to_dict() for k, v in self.children.items()},
            "pageCount": self.page_count,
        }


def parse_url_path(url: str) -> list[str]:
    """Non-empty path segments of a URL, or of a bare path."""
    parsed = urlparse(url)
    path = parsed.path if parsed.scheme and parsed.netloc else url
    return [segment for segment in path.split("/") if segment]


def segment_to_title(segment: str) -> str:
    """'server-actions' -> 'Server Actions'"""
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), re.sub(r"[-_]", " ", segment))


def _insert(tree: dict[str, _TreeNode], segments: list[str], page: dict, depth: int = 0) -> None:
    segment = segments[0]
    node = tree.get(segment)
    if node is None:
        node = tree[segment] = _TreeNode(segment, segment_to_title(segment), depth)
    if len(segments) == 1:
        node.pages.append(page)
    else:
        _insert(node.children, segments[1:], page, depth + 1)
    node.page_count += 1


def _to_sections(tree: dict[str, _TreeNode], parent_path: str = "") -> list[dict]:
    sections = []
    for node in tree.values():
        full_path = f"{parent_path}/{node.segment}" if parent_path else node.segment
        section = {
            "path": full_path,
            "segment": node.segment,
            "title": node.title,
            "depth": node.depth,
            "pageCount": node.page_count,
            "directPages": len(node.pages),
            "pages": node.pages,
            "hasChildren": bool(node.children),
        }
        if node.children:
            section["subsections"] = _to_sections(node.children, full_path)
        sections.append(section)
    # Largest first, then alphabetical.
    sections.sort(key=lambda s: (-s["pageCount"], s["title"].lower()))
    return sections


def _walk(sections: list[dict], depth: int = 0):
    for section in sections:
        yield section, depth
        yield from _walk(section.get("subsections", []), depth + 1)


def calculate_stats(sections: list[dict]) -> dict:
    max_depth = 0
    total_sections = 0
    total_pages = 0
    for section, depth in _walk(sections):
        max_depth = max(max_depth, depth)
        total_sections += 1
        total_pages += section["directPages"]
    return {
        "maxDepth": max_depth,
        "totalSections": total_sections,
        "totalPages": total_pages,
        "topLevelSections": len(sections),
    }


def find_largest_sections(sections: list[dict], top_n: int = LARGEST_SECTIONS) -> list[dict]:
    flat = [
        {"path": s["path"], "title": s["title"], "pageCount": s["pageCount"], "depth": s["depth"]}
        for s, _ in _walk(sections)
    ]
    flat.sort(key=lambda s: s["pageCount"], reverse=True)
    return flat[:top_n]


def build_hierarchy(docs_path: Path) -> dict:
    """
    Build the section tree of a bundle from <docs_path>/sitemap.json.
    Raises SitemapNotFoundError when the sitemap is missing.
    """
    sitemap_path = Path(docs_path) / "sitemap.json"
    if not sitemap_path.is_file():
        raise SitemapNotFoundError(sitemap_path)
    with open(sitemap_path, "r", encoding="utf-8") as f:
        sitemap = json.load(f)

    pages = sitemap.get("pages") or []
    if not pages:
        return {
            "tree": {},
            "sections": [],
            "stats": {"maxDepth": 0, "totalSections": 0, "totalPages": 0, "topLevelSections": 0},
            "largestSections": [],
            "totalPages": 0,
        }

    tree: dict[str, _TreeNode] = {}
    for page in pages:
        segments = [
            s for s in parse_url_path(page.get("url", ""))
            if s.lower() not in IGNORED_SEGMENTS
        ]
        if segments:
            _insert(tree, segments, page)
            continue
        # Root level page
        segment = page.get("filename") or "index"
        node = tree.get(segment)
        if node is None:
            title = page.get("title") or segment_to_title(segment)
            node = tree[segment] = _TreeNode(segment, title, 0)
        node.pages.append(page)
        node.page_count += 1

    sections = _to_sections(tree)
    return {
        "tree": {k: v.to_dict() for k, v in tree.items()},
        "sections": sections,
        "stats": calculate_stats(sections),
        "largestSections": find_largest_sections(sections),
        "totalPages": len(pages),
    }


def get_breadcrumb(url: str) -> list[str]:
    return [segment_to_title(segment) for segment in parse_url_path(url)]
