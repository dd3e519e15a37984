from docs_analyzer.markdown_walker import (
    CODE,
    FRONTMATTER,
    HEADING,
    LIST_ITEM,
    PARAGRAPH,
    parse_blocks,
    source_url,
    split_frontmatter,
)

PAGE = """---
url: https://example.com/docs/intro
title: Intro
---

# Getting Started

Some *intro* text with `inline` code.

- first item
- second item
    - nested item

Install it:

```bash
npm install thing
```

## Next Steps
"""


def test_blocks_in_document_order():
    nodes = parse_blocks(PAGE)
    assert [n.type for n in nodes] == [
        FRONTMATTER,
        HEADING,
        PARAGRAPH,
        LIST_ITEM,
        LIST_ITEM,
        LIST_ITEM,
        PARAGRAPH,
        CODE,
        HEADING,
    ]
    assert [n.position for n in nodes] == list(range(len(nodes)))


def test_heading_levels_and_text():
    headings = [n for n in parse_blocks(PAGE) if n.type == HEADING]
    assert [(h.level, h.text) for h in headings] == [(1, "Getting Started"), (2, "Next Steps")]


def test_paragraph_text_skips_inline_code():
    paragraph = next(n for n in parse_blocks(PAGE) if n.type == PARAGRAPH)
    assert paragraph.text == "Some intro text with code."


def test_list_items_carry_nesting_depth():
    items = [n for n in parse_blocks(PAGE) if n.type == LIST_ITEM]
    assert [(i.text, i.depth) for i in items] == [
        ("first item", 0),
        ("second item", 0),
        ("nested item", 1),
    ]


def test_code_block_language_and_source():
    code = next(n for n in parse_blocks(PAGE) if n.type == CODE)
    assert code.language == "bash"
    assert code.text == "npm install thing"


def test_frontmatter_is_parsed():
    nodes = parse_blocks(PAGE)
    assert nodes[0].meta == {"url": "https://example.com/docs/intro", "title": "Intro"}
    assert source_url(nodes) == "https://example.com/docs/intro"


def test_invalid_frontmatter_keeps_url_line():
    text = "---\nurl: https://x.io/a\ntitle: [unclosed\n---\n# Title\n"
    nodes = parse_blocks(text)
    assert nodes[0].type == FRONTMATTER
    assert source_url(nodes) == "https://x.io/a"
    assert nodes[1].text == "Title"


def test_no_frontmatter():
    raw, body = split_frontmatter("# Title\n\nBody\n")
    assert raw is None
    assert body == "# Title\n\nBody\n"
    assert source_url(parse_blocks(body)) is None


def test_empty_input():
    assert parse_blocks("") == []


def test_fence_inside_ordered_list_item_is_a_code_block():
    text = "1. Install the package:\n\n   ```bash\n   npm install next\n   ```\n\n2. Run it.\n"
    nodes = parse_blocks(text)
    assert [(n.type, n.text) for n in nodes] == [
        (LIST_ITEM, "Install the package:"),
        (CODE, "npm install next"),
        (LIST_ITEM, "Run it."),
    ]
    assert nodes[1].language == "bash"


def test_fence_inside_blockquote_is_a_code_block():
    nodes = parse_blocks("> Note:\n>\n> ```python\n> run()\n> ```\n")
    assert [(n.type, n.text) for n in nodes] == [(PARAGRAPH, "Note:"), (CODE, "run()")]
    assert nodes[1].language == "python"


def test_two_space_nested_list_depth():
    items = parse_blocks("- parent\n  - child\n")
    assert [(i.type, i.text, i.depth) for i in items] == [
        (LIST_ITEM, "parent", 0),
        (LIST_ITEM, "child", 1),
    ]


def test_list_directly_after_paragraph_line():
    nodes = parse_blocks("Intro text:\n- first item\n- second item\n")
    assert [(n.type, n.text) for n in nodes] == [
        (PARAGRAPH, "Intro text:"),
        (LIST_ITEM, "first item"),
        (LIST_ITEM, "second item"),
    ]
