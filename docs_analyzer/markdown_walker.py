"""
Markdown block walker for cached documentation pages.
Renders CommonMark with markdown-it-py and walks the HTML with BeautifulSoup,
producing heading, paragraph, list item and code blocks in document order.
A leading YAML frontmatter block is split off before rendering and reported
as its own node.
"""

import logging
import re
import warnings
from dataclasses import dataclass, field
from typing import Any

import yaml
from bs4 import BeautifulSoup, Comment, MarkupResemblesLocatorWarning, Tag
from markdown_it import MarkdownIt

warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

logger = logging.getLogger(__name__)

HEADING = "heading"
PARAGRAPH = "paragraph"
LIST_ITEM = "list_item"
CODE = "code"
FRONTMATTER = "frontmatter"

# CommonMark keeps fences nested in list items and blockquotes as code blocks.
_MARKDOWN = MarkdownIt("commonmark").enable("table")
_HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
_BLOCK_TAGS = [*_HEADING_TAGS, "p", "li", "pre"]

_FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*$\r?\n?",
    re.DOTALL | re.MULTILINE,
)
_URL_LINE_RE = re.compile(r"^url:\s*(.+)$", re.MULTILINE)


@dataclass
class BlockNode:
    """
    One block-level element of a page.
    - type: heading, paragraph, list_item, code or frontmatter
    - text: literal text (code source for code blocks, raw YAML for frontmatter)
    - position: index in document order
    - level: heading level (1-6), 0 otherwise
    - depth: list nesting depth (0 for top-level items)
    - language: fenced code language, if any
    - meta: parsed frontmatter mapping
    """

    type: str
    text: str
    position: int
    level: int = 0
    depth: int = 0
    language: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """
    Split a leading ---/--- frontmatter block from the markdown body.
    Returns (raw frontmatter or None, body).
    """
    text = text.lstrip("\ufeff")
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return None, text
    return match.group(1), text[match.end():]


def _parse_frontmatter(raw: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        logger.debug("Unparseable frontmatter, falling back to url line: %s", e)
        data = None
    if isinstance(data, dict):
        return data
    # Not a mapping: keep whatever url line there is for provenance.
    match = _URL_LINE_RE.search(raw)
    return {"url": match.group(1).strip()} if match else {}


def _is_inside(node, names: tuple[str, ...], stop: Tag) -> bool:
    for parent in node.parents:
        if parent is stop:
            return False
        if parent.name in names:
            return True
    return False


def _collect_text(tag: Tag, exclude: tuple[str, ...] = ()) -> str:
    """Concatenate the text under tag, skipping text nested in any excluded element."""
    parts = []
    for string in tag.find_all(string=True):
        if isinstance(string, Comment):
            continue
        if exclude and _is_inside(string, exclude, tag):
            continue
        parts.append(str(string))
    return " ".join("".join(parts).split())


def _code_language(code_tag: Tag | None) -> str | None:
    if code_tag is None:
        return None
    for cls in code_tag.get("class") or []:
        if cls.startswith("language-"):
            return cls[len("language-"):] or None
    return None


def _to_node(tag: Tag, position: int) -> BlockNode | None:
    name = tag.name
    if name in _HEADING_TAGS:
        return BlockNode(HEADING, _collect_text(tag), position, level=int(name[1]))
    if name == "pre":
        code_tag = tag.find("code")
        source = (code_tag or tag).get_text()
        return BlockNode(CODE, source.rstrip("\n"), position, language=_code_language(code_tag))
    if name == "p":
        # Paragraphs of loose lists belong to their list item.
        if tag.find_parent("li") is not None:
            return None
        return BlockNode(PARAGRAPH, _collect_text(tag, exclude=("code",)), position)
    if name == "li":
        text = _collect_text(tag, exclude=("ul", "ol", "pre", "code"))
        return BlockNode(LIST_ITEM, text, position, depth=len(tag.find_parents("li")))
    return None


def parse_blocks(text: str) -> list[BlockNode]:
    """
    Parse page text into an ordered list of block nodes.
    Lenient: malformed markdown or frontmatter never raises.
    """
    raw_frontmatter, body = split_frontmatter(text or "")
    nodes: list[BlockNode] = []
    if raw_frontmatter is not None:
        nodes.append(
            BlockNode(
                FRONTMATTER,
                raw_frontmatter.strip(),
                0,
                meta=_parse_frontmatter(raw_frontmatter),
            )
        )

    html = _MARKDOWN.render(body)
    soup = BeautifulSoup(html, "lxml")
    for tag in soup.find_all(_BLOCK_TAGS):
        node = _to_node(tag, len(nodes))
        if node is not None:
            nodes.append(node)
    return nodes


def source_url(nodes: list[BlockNode]) -> str | None:
    """Return the frontmatter url field, if the page has one."""
    for node in nodes:
        if node.type == FRONTMATTER:
            url = node.meta.get("url")
            return str(url).strip() if url else None
    return None
