"""
Code example extraction and categorization.
Each non-empty code block is categorized from the heading and prose that
precede it, falling back to its language.
"""

from dataclasses import dataclass
from pathlib import Path

from .markdown_walker import CODE, HEADING, LIST_ITEM, PARAGRAPH, parse_blocks, source_url
from .pages import MARKDOWN_SUFFIXES, load_pages

CONTEXT_CHARS = 200
PREVIEW_CHARS = 100
PREVIEWS_PER_CATEGORY = 3
DEFAULT_LANGUAGE = "text"

# (category, context keywords), checked in order.
CONTEXT_RULES = [
    ("Installation", ("install", "npm", "yarn")),
    ("Configuration", ("config", "setup", "initialization")),
    ("Usage Example", ("example", "usage", "how to")),
    ("API Reference", ("api", "method", "function")),
    ("Testing", ("test", "spec")),
    ("Type Definitions", ("type", "interface", "definition")),
    ("Troubleshooting", ("error", "debug", "fix")),
    ("Migration", ("migrate", "upgrade", "breaking change")),
]

LANGUAGE_DEFAULTS = {
    "bash": "Command Line",
    "sh": "Command Line",
    "shell": "Command Line",
    "json": "Configuration",
    "yaml": "Configuration",
    "toml": "Configuration",
}


@dataclass
class CodeExample:
    language: str
    category: str
    title: str
    code: str
    source_url: str
    source_file: str
    lines: int

    def to_dict(self) -> dict:
        return {
            "language": self.language,
            "category": self.category,
            "title": self.title,
            "code": self.code,
            "sourceUrl": self.source_url,
            "sourceFile": self.source_file,
            "lines": self.lines,
        }


def categorize_code_example(preceding_text: str, language: str) -> str:
    text = preceding_text.lower()
    for category, needles in CONTEXT_RULES:
        if any(needle in text for needle in needles):
            return category
    return LANGUAGE_DEFAULTS.get(language, "General Example")


def extract_code_examples_from_content(
    content: str,
    filename: str,
    source: str | None = None,
) -> list[CodeExample]:
    """
    Extract code blocks from one page.
    source defaults to the frontmatter url, then to the filename.
    """
    nodes = parse_blocks(content)
    source = source or source_url(nodes) or filename
    examples: list[CodeExample] = []
    last_heading = ""
    context = ""

    for node in nodes:
        if node.type == HEADING:
            last_heading = node.text
            context = node.text
        elif node.type in (PARAGRAPH, LIST_ITEM):
            context = (context + " " + node.text)[-CONTEXT_CHARS:]
        elif node.type == CODE:
            if not node.text.strip():
                continue
            language = node.language or DEFAULT_LANGUAGE
            examples.append(
                CodeExample(
                    language=language,
                    category=categorize_code_example(context, language),
                    title=last_heading or filename,
                    code=node.text,
                    source_url=source,
                    source_file=filename,
                    lines=len(node.text.split("\n")),
                )
            )

    return examples


def analyze_languages(examples: list[CodeExample]) -> dict[str, dict]:
    """Example count and categories seen per language."""
    languages: dict[str, dict] = {}
    for ex in examples:
        entry = languages.setdefault(ex.language, {"count": 0, "categories": []})
        entry["count"] += 1
        if ex.category not in entry["categories"]:
            entry["categories"].append(ex.category)
    return languages


def analyze_categories(examples: list[CodeExample]) -> dict[str, dict]:
    """Example count, languages and the first few previews per category."""
    categories: dict[str, dict] = {}
    for ex in examples:
        entry = categories.setdefault(ex.category, {"count": 0, "languages": [], "examples": []})
        entry["count"] += 1
        if ex.language not in entry["languages"]:
            entry["languages"].append(ex.language)
        if len(entry["examples"]) < PREVIEWS_PER_CATEGORY:
            preview = ex.code[:PREVIEW_CHARS] + ("..." if len(ex.code) > PREVIEW_CHARS else "")
            entry["examples"].append({"title": ex.title, "language": ex.language, "preview": preview})
    return categories


def extract_code_examples(
    docs_path: Path,
    *,
    workers: int | None = None,
    skip_unreadable: bool = False,
) -> dict:
    all_examples: list[CodeExample] = []
    for filename, content in load_pages(
        docs_path, MARKDOWN_SUFFIXES, workers=workers, skip_unreadable=skip_unreadable
    ):
        all_examples.extend(extract_code_examples_from_content(content, filename))

    languages = analyze_languages(all_examples)
    categories = analyze_categories(all_examples)
    return {
        "examples": [ex.to_dict() for ex in all_examples],
        "totalCount": len(all_examples),
        "languages": languages,
        "categories": categories,
        "languageCount": len(languages),
        "categoryCount": len(categories),
    }
