import math

import pytest

from docs_analyzer.errors import DocumentReadError, PagesDirectoryNotFoundError
from docs_analyzer.keywords import (
    DocumentKeywords,
    KeywordReport,
    aggregate_frequencies,
    build_frequency_map,
    compute_corpus_tfidf,
    extract_keywords,
    extract_keywords_from_content,
    inverse_document_frequency,
)


# --- Per-document extraction ---

def test_server_actions_scenario():
    doc = extract_keywords_from_content(
        "# Server Actions\n\nServer actions allow you to perform operations.\n",
        "a.md",
    )
    assert doc.filename == "a.md"
    assert doc.tokens == ["server", "actions", "server", "actions", "perform", "operations"]
    assert doc.heading_tokens == 2
    assert doc.body_tokens == 4
    assert doc.frequency == {"server": 4, "actions": 4, "perform": 1, "operations": 1}
    for stopword in ("you", "to", "allow"):
        assert stopword not in doc.tokens


def test_heading_weighting():
    doc = extract_keywords_from_content("# Hooks overview\n\nHooks compose. Prefer hooks.\n", "hooks.md")
    assert doc.frequency["hooks"] == 3 * 1 + 1 * 2


def test_stopword_only_document_is_empty():
    doc = extract_keywords_from_content(
        "# The Example\n\nThis is the code that you should use.\n", "empty.md"
    )
    assert doc.tokens == []
    assert doc.frequency == {}
    assert doc.heading_tokens == 0
    assert doc.body_tokens == 0


def test_code_blocks_do_not_contribute_tokens():
    doc = extract_keywords_from_content("# Routing\n\n```js\nrouter.navigate()\n```\n", "r.md")
    assert doc.tokens == ["routing"]


def test_build_frequency_map():
    assert build_frequency_map(["cache"], ["cache", "cache", "store"]) == {"cache": 5, "store": 1}
    assert build_frequency_map([], []) == {}


# --- Corpus TF-IDF ---

def test_idf_positive_and_decreasing():
    values = [inverse_document_frequency(df, 5) for df in range(1, 6)]
    assert all(v > 0 for v in values)
    assert values == sorted(values, reverse=True)
    assert len(set(values)) == len(values)


def test_corpus_tfidf_no_documents():
    assert compute_corpus_tfidf([]) == {}


def test_corpus_tfidf_scores():
    scores = compute_corpus_tfidf([["hooks"] * 5 + ["render"], ["render", "state"]])
    assert scores["hooks"] == pytest.approx(5 * (1 + math.log(2 / 2)))
    assert scores["render"] == pytest.approx(2 * (1 + math.log(2 / 3)))
    assert scores["state"] == pytest.approx(1.0)
    assert "missing" not in scores
    assert list(scores) == ["hooks", "render", "state"]


def test_term_in_one_document_gets_higher_idf_than_shared_term():
    n = 2
    assert inverse_document_frequency(1, n) > inverse_document_frequency(2, n)


def test_aggregate_frequencies():
    docs = [
        DocumentKeywords("a.md", ["alpha"], {"alpha": 3, "beta": 1}, 1, 1),
        DocumentKeywords("b.md", ["beta"], {"beta": 2}, 0, 2),
    ]
    assert aggregate_frequencies(docs) == {"alpha": 3, "beta": 3}


# --- Whole bundle ---

def test_hooks_across_two_documents(make_bundle):
    docs = make_bundle({
        "a.md": "Hooks hooks hooks hooks hooks render.\n",
        "b.md": "Render state.\n",
    })
    report = extract_keywords(docs)

    assert report.total_documents == 2
    assert report.total_tokens == 8
    assert report.unique_terms == 3
    assert [k.term for k in report.keywords] == ["hooks", "render", "state"]
    assert report.keywords[0].score == pytest.approx(5.0)
    assert [(t.term, t.count) for t in report.most_frequent] == [
        ("hooks", 5),
        ("render", 2),
        ("state", 1),
    ]


def test_missing_pages_directory(tmp_path):
    with pytest.raises(PagesDirectoryNotFoundError) as exc_info:
        extract_keywords(tmp_path / "nextjs" / "15.0.3")
    assert str(tmp_path / "nextjs" / "15.0.3" / "pages") in str(exc_info.value)
    assert isinstance(exc_info.value, FileNotFoundError)


def test_empty_bundle_returns_zero_report(make_bundle):
    docs = make_bundle({"notes.json": "{}", "page.html": "<h1>Ignored</h1>"})
    report = extract_keywords(docs)
    assert report == KeywordReport()
    assert report.to_dict() == {
        "keywords": [],
        "topKeywords": [],
        "mostFrequent": [],
        "totalDocuments": 0,
        "totalTokens": 0,
        "uniqueTerms": 0,
        "documentData": [],
    }


def test_only_md_and_txt_pages_are_read(make_bundle):
    docs = make_bundle({
        "guide.md": "# Routing\n",
        "notes.txt": "Middleware.\n",
        "skip.rst": "Ignored words here.\n",
    })
    (docs / "pages" / "folder.md").mkdir()
    report = extract_keywords(docs)
    assert [d.filename for d in report.document_data] == ["guide.md", "notes.txt"]
    assert {k.term for k in report.keywords} == {"routing", "middleware"}


@pytest.mark.parametrize("top_n", [0, 1, 2, 3, 100])
def test_top_n_bounds(make_bundle, top_n):
    docs = make_bundle({"a.md": "Alpha beta gamma.\n"})
    report = extract_keywords(docs, top_n)
    assert len(report.top_keywords) == min(top_n, report.unique_terms)
    assert len(report.keywords) == 3


def test_negative_top_n_rejected(make_bundle):
    docs = make_bundle({"a.md": "Alpha.\n"})
    with pytest.raises(ValueError):
        extract_keywords(docs, -1)


def test_negative_top_n_rejected_before_reading(tmp_path):
    with pytest.raises(ValueError):
        extract_keywords(tmp_path / "missing", -1)


def test_ties_keep_first_appearance_order(make_bundle):
    # Enumeration is lexical by filename, so a.md is processed before b.md.
    docs = make_bundle({
        "b.md": "Zeta.\n",
        "a.md": "Omega delta.\n",
    })
    report = extract_keywords(docs)
    assert [k.term for k in report.keywords] == ["omega", "delta", "zeta"]
    assert [t.term for t in report.most_frequent] == ["omega", "delta", "zeta"]
    assert [d.filename for d in report.document_data] == ["a.md", "b.md"]


def test_extraction_is_idempotent(make_bundle):
    docs = make_bundle({
        "a.md": "# Caching\n\nCaching revalidation caching.\n",
        "b.md": "# Routing\n\nDynamic routing segments.\n",
    })
    assert extract_keywords(docs).to_dict() == extract_keywords(docs).to_dict()


def test_parallel_reads_match_sequential(make_bundle):
    pages = {f"page{i:02d}.md": f"# Topic{i}\n\nShared words plus unique{i}.\n" for i in range(12)}
    docs = make_bundle(pages)
    sequential = extract_keywords(docs, workers=1).to_dict()
    parallel = extract_keywords(docs, workers=4).to_dict()
    assert parallel == sequential


def test_unreadable_page_aborts(make_bundle):
    docs = make_bundle({"a.md": "Alpha.\n", "b.md": b"\xff\xfe broken \xc3"})
    with pytest.raises(DocumentReadError) as exc_info:
        extract_keywords(docs)
    assert exc_info.value.path.name == "b.md"


def test_unreadable_page_skipped_on_request(make_bundle, caplog):
    docs = make_bundle({"a.md": "Alpha.\n", "b.md": b"\xff\xfe broken \xc3"})
    report = extract_keywords(docs, skip_unreadable=True)
    assert report.total_documents == 1
    assert [d.filename for d in report.document_data] == ["a.md"]
    assert "Skipping unreadable page" in caplog.text


def test_report_document_data_shape(make_bundle):
    docs = make_bundle({"a.md": "# Server Actions\n\nServer actions allow you to perform operations.\n"})
    data = extract_keywords(docs).to_dict()
    assert data["documentData"] == [{
        "filename": "a.md",
        "tokens": ["server", "actions", "server", "actions", "perform", "operations"],
        "frequency": {"server": 4, "actions": 4, "perform": 1, "operations": 1},
        "headingTokens": 2,
        "bodyTokens": 4,
    }]
