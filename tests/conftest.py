import json

import pytest


@pytest.fixture
def make_bundle(tmp_path):
    """
    Factory for a documentation bundle on disk:
    make_bundle({"a.md": "..."}, metadata={...}, sitemap={...}) -> bundle path.
    """

    def _make(pages=None, *, metadata=None, sitemap=None, name="bundle"):
        root = tmp_path / name
        pages_dir = root / "pages"
        pages_dir.mkdir(parents=True)
        for filename, content in (pages or {}).items():
            path = pages_dir / filename
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        if metadata is not None:
            (root / "index.json").write_text(json.dumps(metadata), encoding="utf-8")
        if sitemap is not None:
            (root / "sitemap.json").write_text(json.dumps(sitemap), encoding="utf-8")
        return root

    return _make
