"""
API method detection.
Method names come from headings shaped like a call ("useEffect()") and from
function declarations in fenced code blocks, matched per language.
"""

import re
from dataclasses import dataclass
from pathlib import Path

from .markdown_walker import CODE, HEADING, parse_blocks, source_url
from .pages import PAGE_SUFFIXES, load_pages

JS_FUNCTION = re.compile(r"(?:export\s+)?(?:async\s+)?function\s+([a-zA-Z_$][a-zA-Z0-9_$]*)\s*\(")
JS_ARROW = re.compile(r"(?:export\s+)?const\s+([a-zA-Z_$][a-zA-Z0-9_$]*)\s*=\s*(?:async\s*)?\(")
JS_METHOD = re.compile(r"([a-zA-Z_$][a-zA-Z0-9_$]*)\s*\([^)]*\)\s*[:{]")
PY_FUNCTION = re.compile(r"def\s+([a-zA-Z_][a-zA-Z0-9_]*)\s*\(")
GO_FUNCTION = re.compile(r"func\s+(?:\([^)]*\)\s*)?([A-Z][a-zA-Z0-9_]*)\s*\(")
RUST_FUNCTION = re.compile(r"(?:pub\s+)?fn\s+([a-zA-Z_][a-zA-Z0-9_]*)\s*[(<]")
JAVA_METHOD = re.compile(
    r"(?:public|private|protected)\s+(?:static\s+)?(?:async\s+)?[a-zA-Z<>\[\],\s]+\s+([a-zA-Z_][a-zA-Z0-9_]*)\s*\("
)
METHOD_HEADING = re.compile(r"^([a-zA-Z_$][a-zA-Z0-9_$.]*)\s*\(")

# Control-flow keywords that JS_METHOD would otherwise pick up ("if (x) {").
_JS_KEYWORDS = frozenset({"if", "for", "while", "switch", "catch", "function", "return", "with"})

LANGUAGE_PATTERNS = {
    "javascript": (JS_FUNCTION, JS_ARROW, JS_METHOD),
    "js": (JS_FUNCTION, JS_ARROW, JS_METHOD),
    "jsx": (JS_FUNCTION, JS_ARROW, JS_METHOD),
    "typescript": (JS_FUNCTION, JS_ARROW, JS_METHOD),
    "ts": (JS_FUNCTION, JS_ARROW, JS_METHOD),
    "tsx": (JS_FUNCTION, JS_ARROW, JS_METHOD),
    "python": (PY_FUNCTION,),
    "py": (PY_FUNCTION,),
    "go": (GO_FUNCTION,),
    "rust": (RUST_FUNCTION,),
    "rs": (RUST_FUNCTION,),
    "java": (JAVA_METHOD,),
    "csharp": (JAVA_METHOD,),
    "cs": (JAVA_METHOD,),
    "c#": (JAVA_METHOD,),
}

CATEGORY_NAMES = ("hooks", "functions", "classes", "methods", "components", "utilities", "other")


@dataclass
class ApiMethod:
    name: str
    type: str
    category: str
    source: str
    source_file: str
    context: str
    language: str | None = None

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "type": self.type,
            "category": self.category,
            "source": self.source,
            "sourceFile": self.source_file,
            "context": self.context,
        }
        if self.language is not None:
            data["language"] = self.language
        return data


def extract_methods_from_code(code: str, language: str) -> list[str]:
    """Declared method names in a code block, deduplicated, in match order."""
    methods: list[str] = []
    patterns = LANGUAGE_PATTERNS.get(language.lower(), ())
    is_python = patterns == (PY_FUNCTION,)
    for pattern in patterns:
        for match in pattern.finditer(code):
            name = match.group(1)
            if not name or name in methods:
                continue
            if is_python and name.startswith("_"):
                continue
            if pattern is JS_METHOD and name in _JS_KEYWORDS:
                continue
            methods.append(name)
    return methods


def extract_method_from_heading(heading: str) -> str | None:
    match = METHOD_HEADING.match(heading)
    return match.group(1) if match else None


def detect_api_methods_from_content(
    content: str,
    filename: str,
    source: str | None = None,
) -> list[ApiMethod]:
    nodes = parse_blocks(content)
    source = source or source_url(nodes) or filename
    methods: list[ApiMethod] = []
    seen: set[str] = set()
    last_heading = ""

    for node in nodes:
        if node.type == HEADING:
            last_heading = node.text
            name = extract_method_from_heading(node.text)
            if name:
                methods.append(ApiMethod(name, "heading", "API Reference", source, filename, node.text))
                seen.add(name)
        elif node.type == CODE:
            language = node.language or "text"
            for name in extract_methods_from_code(node.text, language):
                if name in seen:
                    continue
                seen.add(name)
                methods.append(
                    ApiMethod(
                        name,
                        "code",
                        last_heading or "General",
                        source,
                        filename,
                        last_heading,
                        language=language,
                    )
                )

    return methods


def categorize_api_methods(methods: list[ApiMethod]) -> dict[str, list[ApiMethod]]:
    """Bucket methods by naming convention: hooks, components, classes, methods, utilities."""
    categories: dict[str, list[ApiMethod]] = {name: [] for name in CATEGORY_NAMES}
    for method in methods:
        name = method.name
        context = (method.context or "").lower()
        if re.match(r"use[A-Z]", name):
            categories["hooks"].append(method)
        elif re.fullmatch(r"[A-Z][a-zA-Z0-9]*", name) and not re.fullmatch(r"[A-Z_]+", name):
            categories["components"].append(method)
        elif name[:1].isupper() and "class" in context:
            categories["classes"].append(method)
        elif "." in name or "method" in context:
            categories["methods"].append(method)
        elif re.match(r"[a-z_$]", name):
            categories["utilities"].append(method)
        else:
            categories["other"].append(method)
    return categories


def detect_api_methods(
    docs_path: Path,
    *,
    workers: int | None = None,
    skip_unreadable: bool = False,
) -> dict:
    all_methods: list[ApiMethod] = []
    for filename, content in load_pages(
        docs_path, PAGE_SUFFIXES, workers=workers, skip_unreadable=skip_unreadable
    ):
        all_methods.extend(detect_api_methods_from_content(content, filename))

    unique: list[ApiMethod] = []
    seen: set[str] = set()
    for method in all_methods:
        if method.name not in seen:
            seen.add(method.name)
            unique.append(method)

    by_category = categorize_api_methods(unique)
    by_language: dict[str, list[dict]] = {}
    for method in unique:
        if method.language:
            by_language.setdefault(method.language, []).append(method.to_dict())

    return {
        "methods": [m.to_dict() for m in unique],
        "totalCount": len(all_methods),
        "uniqueCount": len(unique),
        "byCategory": {k: [m.to_dict() for m in v] for k, v in by_category.items()},
        "byLanguage": by_language,
        "categoryCount": sum(1 for v in by_category.values() if v),
    }
