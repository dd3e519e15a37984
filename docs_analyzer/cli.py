"""
Command line entry point for documentation bundle analysis.

Usage (from repo root):
    python -m docs_analyzer.cli path/to/docs/nextjs/15.0.3
    python -m docs_analyzer.cli path/to/docs/nextjs/15.0.3 --mode all --output analysis.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable

from .analyzer import AnalysisOptions, analyze_documentation, generate_summary_description
from .errors import DocsAnalyzerError
from .keywords import DEFAULT_TOP_N, KeywordReport, extract_keywords


def print_keyword_report(report: KeywordReport, show: int = 20) -> None:
    print("\n" + "=" * 50)
    print("KEYWORD ANALYSIS")
    print("=" * 50)
    print()
    print("| Metric                    | Value |")
    print("|---------------------------|-------|")
    print(f"| Documents processed       | {report.total_documents} |")
    print(f"| Total tokens              | {report.total_tokens} |")
    print(f"| Unique terms              | {report.unique_terms} |")
    print()
    if report.top_keywords:
        print("Top keywords (TF-IDF):")
        for rank, kw in enumerate(report.top_keywords[:show], start=1):
            print(f"{rank:3d}. {kw.term:<30} {kw.score:.4f}")
        print()
    if report.most_frequent:
        print("Most frequent (weighted count):")
        for rank, tc in enumerate(report.most_frequent[:show], start=1):
            print(f"{rank:3d}. {tc.term:<30} {tc.count}")
        print()
    print("=" * 50)


def print_analysis_summary(analysis: dict) -> None:
    summary = analysis["summary"]
    print("\n" + "=" * 50)
    print("DOCUMENTATION ANALYSIS")
    print("=" * 50)
    print()
    print("| Metric                    | Value |")
    print("|---------------------------|-------|")
    for label, key in (
        ("Library", "library"),
        ("Version", "version"),
        ("Topics", "topicCount"),
        ("Main topics", "mainTopicCount"),
        ("Code examples", "codeExampleCount"),
        ("Languages", "languageCount"),
        ("API methods", "apiMethodCount"),
        ("Unique keywords", "keywordCount"),
        ("Hierarchy sections", "hierarchySections"),
        ("Max depth", "maxDepth"),
    ):
        print(f"| {label:<25} | {summary.get(key)} |")
    print()
    description = generate_summary_description(analysis)
    if description:
        print(description)
        print()
    print("=" * 50)


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Analyze a cached documentation bundle.")
    parser.add_argument("docs_path", type=Path, help="Bundle directory containing pages/")
    parser.add_argument(
        "--mode",
        choices=("keywords", "all"),
        default="keywords",
        help="Run keyword extraction only, or every analyzer (default: keywords).",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=DEFAULT_TOP_N,
        help=f"Number of top keywords to keep (default: {DEFAULT_TOP_N}).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Threads used to read pages (default: $DOCS_ANALYZER_WORKERS or 1).",
    )
    parser.add_argument(
        "--skip-unreadable",
        action="store_true",
        help="Skip pages that cannot be read instead of aborting.",
    )
    parser.add_argument(
        "--no-hierarchy",
        action="store_true",
        help="In 'all' mode, do not build the sitemap hierarchy.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the full result as JSON to this path.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress.")
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.top < 0:
        parser.error("--top must be >= 0")
    if args.workers is not None and args.workers < 1:
        parser.error("--workers must be >= 1")

    try:
        if args.mode == "keywords":
            report = extract_keywords(
                args.docs_path,
                args.top,
                workers=args.workers,
                skip_unreadable=args.skip_unreadable,
            )
            result = report.to_dict()
            print_keyword_report(report)
        else:
            options = AnalysisOptions(
                include_hierarchy=not args.no_hierarchy,
                top_keywords=args.top,
                workers=args.workers,
                skip_unreadable=args.skip_unreadable,
            )
            result = analyze_documentation(args.docs_path, options)
            print_analysis_summary(result)
    except DocsAnalyzerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(result, f, indent=2, ensure_ascii=False)
        print(f"\nResult saved to: {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
