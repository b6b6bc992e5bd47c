"""Tests for the Markdown tree source."""

from __future__ import annotations

from pathlib import Path

import pytest

from slimfilter.node import Node, NodeType, is_snippet
from slimfilter.parser import MarkdownParser

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def find_nodes(root: Node, name: str) -> list[Node]:
    """Collect all tag nodes called *name* under *root*."""
    return [n for n in root.walk() if n.name == name and not is_snippet(n)]


def first_node(root: Node, name: str) -> Node:
    nodes = find_nodes(root, name)
    assert nodes, f"No {name} node found"
    return nodes[0]


@pytest.fixture
def parser() -> MarkdownParser:
    return MarkdownParser()


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

class TestBlocks:
    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_heading_levels(self, parser: MarkdownParser, level: int) -> None:
        doc = parser.parse(f"{'#' * level} Heading {level}")
        heading = first_node(doc, f"h{level}")
        assert heading.content == f"Heading {level}"

    def test_root_has_no_parent(self, parser: MarkdownParser) -> None:
        doc = parser.parse("# Title")
        assert doc.parent is None
        assert doc.children[0].parent is doc

    def test_paragraph_text_as_content(self, parser: MarkdownParser) -> None:
        doc = parser.parse("Hello, world!")
        para = first_node(doc, "p")
        assert para.content == "Hello, world!"
        assert para.children == []

    def test_multiple_paragraphs(self, parser: MarkdownParser) -> None:
        doc = parser.parse("First.\n\nSecond.\n\nThird.")
        assert [p.content for p in find_nodes(doc, "p")] == ["First.", "Second.", "Third."]

    def test_hard_line_break_becomes_token(self, parser: MarkdownParser) -> None:
        doc = parser.parse("one  \ntwo")
        assert first_node(doc, "p").content == "one${newline}two"

    def test_code_block(self, parser: MarkdownParser) -> None:
        doc = parser.parse("```python\nprint('hello')\n```")
        pre = first_node(doc, "pre")
        code = pre.children[0]
        assert code.name == "code"
        assert code.attribute("class") == "language-python"
        assert code.content == "print('hello')"

    def test_code_block_without_language(self, parser: MarkdownParser) -> None:
        doc = parser.parse("```\nplain\n```")
        assert first_node(doc, "code").attributes == []

    def test_horizontal_rule(self, parser: MarkdownParser) -> None:
        doc = parser.parse("Above\n\n---\n\nBelow")
        assert [n.name for n in doc.children] == ["p", "hr", "p"]

    def test_blockquote(self, parser: MarkdownParser) -> None:
        doc = parser.parse("> quoted")
        quote = first_node(doc, "blockquote")
        assert quote.children[0].name == "p"
        assert quote.children[0].content == "quoted"


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------

class TestLists:
    def test_unordered(self, parser: MarkdownParser) -> None:
        doc = parser.parse("- a\n- b")
        ul = first_node(doc, "ul")
        assert [li.content for li in ul.children] == ["a", "b"]

    def test_ordered(self, parser: MarkdownParser) -> None:
        doc = parser.parse("1. a\n2. b")
        ol = first_node(doc, "ol")
        assert len(ol.children) == 2
        assert ol.attribute("start") is None

    def test_ordered_start(self, parser: MarkdownParser) -> None:
        doc = parser.parse("3. a\n4. b")
        assert first_node(doc, "ol").attribute("start") == "3"

    def test_nested(self, parser: MarkdownParser) -> None:
        doc = parser.parse("- outer\n  - inner")
        outer = first_node(doc, "li")
        assert outer.content == "outer"
        assert outer.children[0].name == "ul"

    def test_task_list(self, parser: MarkdownParser) -> None:
        doc = parser.parse("- [x] done\n- [ ] todo")
        done, todo = find_nodes(doc, "li")
        box = done.children[0]
        assert box.name == "input"
        assert box.attribute("type") == "checkbox"
        assert box.attribute("checked") == ""
        assert todo.children[0].attribute("checked") is None
        assert done.children[1].type == NodeType.SNIPPET
        assert done.children[1].content == "| done"


# ---------------------------------------------------------------------------
# Inline
# ---------------------------------------------------------------------------

class TestInline:
    def test_mixed_inline_uses_snippets(self, parser: MarkdownParser) -> None:
        doc = parser.parse("Normal **bold** text")
        para = first_node(doc, "p")
        kinds = [(c.type, c.name, c.content) for c in para.children]
        assert kinds == [
            (NodeType.SNIPPET, "", "' Normal"),
            (NodeType.TAG, "strong", "bold"),
            (NodeType.SNIPPET, "", "| text"),
        ]

    @pytest.mark.parametrize("md, name", [
        ("*it*", "em"),
        ("**b**", "strong"),
        ("~~s~~", "del"),
        ("`c`", "code"),
    ])
    def test_inline_elements(self, parser: MarkdownParser, md: str, name: str) -> None:
        doc = parser.parse(md)
        node = first_node(doc, name)
        assert node.content in {"it", "b", "s", "c"}

    def test_link(self, parser: MarkdownParser) -> None:
        doc = parser.parse('[GitHub](https://github.com "Home")')
        link = first_node(doc, "a")
        assert link.attribute("href") == "https://github.com"
        assert link.attribute("title") == "Home"
        assert link.content == "GitHub"

    def test_image(self, parser: MarkdownParser) -> None:
        doc = parser.parse("![alt text](https://example.com/img.png)")
        img = first_node(doc, "img")
        assert img.attribute("src") == "https://example.com/img.png"
        assert img.attribute("alt") == "alt text"
        assert img.attribute("title") is None


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

class TestTables:
    def test_simple_table(self, parser: MarkdownParser) -> None:
        doc = parser.parse("| A | B |\n|---|---|\n| 1 | 2 |")
        table = first_node(doc, "table")
        assert [c.name for c in table.children] == ["thead", "tbody"]
        assert [th.content for th in find_nodes(table, "th")] == ["A", "B"]
        assert [td.content for td in find_nodes(table, "td")] == ["1", "2"]

    def test_alignment(self, parser: MarkdownParser) -> None:
        doc = parser.parse("| L | R |\n|:--|--:|\n| a | b |")
        cells = find_nodes(doc, "td")
        assert cells[0].attribute("style") == "text-align: left"
        assert cells[1].attribute("style") == "text-align: right"


class TestSampleFixture:
    def test_parses(self, parser: MarkdownParser) -> None:
        sample = FIXTURES_DIR / "sample.md"
        doc = parser.parse(sample.read_text(encoding="utf-8"))
        for name in ["h1", "h2", "ul", "ol", "blockquote", "pre", "table", "hr", "a", "img"]:
            assert find_nodes(doc, name), name
