"""
Runs the individual analyzers over one documentation bundle and summarizes them.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from .api_methods import detect_api_methods
from .code_examples import extract_code_examples
from .errors import AnalysisError
from .hierarchy import build_hierarchy
from .keywords import DEFAULT_TOP_N, extract_keywords
from .pages import load_metadata
from .topics import extract_topics

logger = logging.getLogger(__name__)


@dataclass
class AnalysisOptions:
    include_topics: bool = True
    include_code_examples: bool = True
    include_api_methods: bool = True
    include_keywords: bool = True
    include_hierarchy: bool = True
    top_keywords: int = DEFAULT_TOP_N
    workers: int | None = None
    skip_unreadable: bool = False


def analyze_documentation(docs_path: Path, options: AnalysisOptions | None = None) -> dict:
    """
    Run every enabled analyzer over docs_path.
    Any failure is re-raised as AnalysisError chained to its cause.
    """
    options = options or AnalysisOptions()
    docs_path = Path(docs_path)
    logger.info("Starting documentation analysis of %s", docs_path)

    results = {
        "metadata": None,
        "topics": None,
        "codeExamples": None,
        "apiMethods": None,
        "keywords": None,
        "hierarchy": None,
        "summary": {},
        "analyzedAt": datetime.now(timezone.utc).isoformat(),
    }

    try:
        metadata = load_metadata(docs_path) or {}
        results["metadata"] = metadata or None
        logger.info("Library: %s v%s", metadata.get("library"), metadata.get("version"))

        if options.include_topics:
            results["topics"] = extract_topics(
                docs_path, workers=options.workers, skip_unreadable=options.skip_unreadable
            )
            logger.info(
                "Found %d topics across %d main sections",
                results["topics"]["topicCount"],
                results["topics"]["mainTopicCount"],
            )

        if options.include_code_examples:
            results["codeExamples"] = extract_code_examples(
                docs_path, workers=options.workers, skip_unreadable=options.skip_unreadable
            )
            logger.info(
                "Found %d code examples in %d languages",
                results["codeExamples"]["totalCount"],
                results["codeExamples"]["languageCount"],
            )

        if options.include_api_methods:
            results["apiMethods"] = detect_api_methods(
                docs_path, workers=options.workers, skip_unreadable=options.skip_unreadable
            )
            logger.info("Detected %d unique API methods", results["apiMethods"]["uniqueCount"])

        if options.include_keywords:
            report = extract_keywords(
                docs_path,
                options.top_keywords,
                workers=options.workers,
                skip_unreadable=options.skip_unreadable,
            )
            results["keywords"] = report.to_dict()
            logger.info(
                "Extracted %d unique terms (top %d selected)",
                report.unique_terms,
                len(report.top_keywords),
            )

        if options.include_hierarchy:
            results["hierarchy"] = build_hierarchy(docs_path)
            logger.info(
                "Built hierarchy with %d sections (max depth: %d)",
                results["hierarchy"]["stats"]["totalSections"],
                results["hierarchy"]["stats"]["maxDepth"],
            )
    except Exception as e:
        raise AnalysisError(f"Documentation analysis failed: {e}") from e

    topics = results["topics"] or {}
    code_examples = results["codeExamples"] or {}
    hierarchy_stats = (results["hierarchy"] or {}).get("stats", {})
    results["summary"] = {
        "library": metadata.get("library"),
        "version": metadata.get("version"),
        "totalPages": metadata.get("page_count"),
        "sourceType": metadata.get("source_type"),
        "framework": metadata.get("framework"),
        "topicCount": topics.get("topicCount", 0),
        "mainTopicCount": topics.get("mainTopicCount", 0),
        "codeExampleCount": code_examples.get("totalCount", 0),
        "languageCount": code_examples.get("languageCount", 0),
        "apiMethodCount": (results["apiMethods"] or {}).get("uniqueCount", 0),
        "keywordCount": (results["keywords"] or {}).get("uniqueTerms", 0),
        "hierarchySections": hierarchy_stats.get("totalSections", 0),
        "maxDepth": hierarchy_stats.get("maxDepth", 0),
    }
    logger.info("Analysis complete")
    return results


def generate_activation_patterns(analysis: dict, library_name: str) -> list[str]:
    """
    Phrases that should bring this library's docs to mind: the library name,
    strong top keywords, main topic titles and hook names.
    """
    patterns = [library_name]

    for kw in ((analysis.get("keywords") or {}).get("topKeywords") or [])[:10]:
        if len(kw["term"]) > 3 and kw["score"] > 1.0 and kw["term"] not in patterns:
            patterns.append(kw["term"])

    for topic in ((analysis.get("topics") or {}).get("mainTopics") or [])[:5]:
        cleaned = " ".join(topic.lower().split())
        if len(cleaned) > 3 and cleaned not in patterns:
            patterns.append(cleaned)

    hooks = ((analysis.get("apiMethods") or {}).get("byCategory") or {}).get("hooks") or []
    for hook in hooks[:5]:
        if hook["name"] not in patterns:
            patterns.append(hook["name"])

    return patterns


def generate_summary_description(analysis: dict) -> str:
    summary = analysis.get("summary") or {}
    parts = []
    if summary.get("topicCount"):
        parts.append(f"{summary['topicCount']} topics")
    if summary.get("codeExampleCount"):
        parts.append(f"{summary['codeExampleCount']} code examples")
    if summary.get("apiMethodCount"):
        parts.append(f"{summary['apiMethodCount']} API methods")
    main_topics = (analysis.get("topics") or {}).get("mainTopics") or []
    if main_topics:
        parts.append(f"covering {', '.join(main_topics[:3])}")
    return ", ".join(parts)


def get_examples_by_category(analysis: dict, category: str, limit: int = 5) -> list[dict]:
    categories = (analysis.get("codeExamples") or {}).get("categories") or {}
    if category not in categories:
        return []
    return categories[category]["examples"][:limit]


def get_most_used_languages(analysis: dict, limit: int = 5) -> list[str]:
    languages = (analysis.get("codeExamples") or {}).get("languages") or {}
    ranked = sorted(languages.items(), key=lambda item: item[1]["count"], reverse=True)
    return [lang for lang, _ in ranked[:limit]]


def get_largest_sections(analysis: dict, limit: int = 10) -> list[dict]:
    return ((analysis.get("hierarchy") or {}).get("largestSections") or [])[:limit]
