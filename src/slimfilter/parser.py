"""Markdown source that produces a generic tag tree for the output filters.

Uses mistune v3 to parse Markdown and converts the token stream into
HTML-shaped :class:`~slimfilter.node.Node` trees: headings become ``h1``..
``h6``, lists become ``ul``/``ol`` with ``li`` items, and so on.

Inline text is kept as the owning tag's ``content`` whenever the tag holds
nothing but text.  Text mixed with inline tags becomes snippet nodes
carrying Slim text lines (``| text``).
"""

from __future__ import annotations

from typing import Any, Optional

import mistune

from slimfilter.node import Attribute, Node, NodeType, make_root

# Inline token types that carry plain text only
_TEXT_TYPES = frozenset({"text", "softbreak", "linebreak"})


class MarkdownParser:
    """Parse Markdown text into a :class:`Node` tree."""

    def __init__(self) -> None:
        self._md = mistune.create_markdown(
            renderer=None,  # AST mode
            plugins=["table", "strikethrough", "task_lists"],
        )

    # -- public API ---------------------------------------------------------

    def parse(self, markdown_text: str) -> Node:
        """Return a synthetic root ``Node`` for *markdown_text*."""
        tokens: list[dict[str, Any]] = self._md(markdown_text)  # type: ignore[assignment]
        return make_root(self._convert_tokens(tokens))

    # -- token conversion ---------------------------------------------------

    def _convert_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        nodes: list[Node] = []
        for tok in tokens:
            node = self._convert_token(tok)
            if node is not None:
                nodes.append(node)
        return nodes

    def _convert_token(self, tok: dict[str, Any]) -> Optional[Node]:
        ttype = tok.get("type", "")
        handler = getattr(self, f"_handle_{ttype}", None)
        if handler:
            return handler(tok)
        # Fallback - keep unknown tokens as literal text if they carry any.
        raw = tok.get("raw", tok.get("text", ""))
        if isinstance(raw, str) and raw.strip():
            return _text_snippet(raw)
        return None

    # -- inline helpers -----------------------------------------------------

    def _append_inline(self, parent: Node, tokens: Any) -> None:
        """Attach inline *tokens* to *parent* as content or child nodes."""
        if isinstance(tokens, str):
            tokens = [{"type": "text", "raw": tokens}]
        if not tokens:
            return

        if not parent.children and all(t.get("type") in _TEXT_TYPES for t in tokens):
            parent.content = _plain_text(tokens, line_break="${newline}")
            return

        buffer: list[dict[str, Any]] = []
        for tok in tokens:
            if tok.get("type") in _TEXT_TYPES:
                buffer.append(tok)
                continue
            self._flush_text(parent, buffer)
            child = self._convert_token(tok)
            if child is not None:
                parent.add_child(child)
        self._flush_text(parent, buffer)

    @staticmethod
    def _flush_text(parent: Node, buffer: list[dict[str, Any]]) -> None:
        if buffer:
            text = _plain_text(buffer, line_break=" ")
            if text.strip():
                parent.add_child(_text_snippet(text))
            buffer.clear()

    def _element(self, name: str, tok: dict, *attrs: Attribute) -> Node:
        node = Node(name=name, attributes=list(attrs))
        self._append_inline(node, tok.get("children") or tok.get("text", ""))
        return node

    # -- block handlers -----------------------------------------------------

    def _handle_heading(self, tok: dict) -> Node:
        level = tok.get("attrs", {}).get("level", tok.get("level", 1))
        return self._element(f"h{max(1, min(6, level))}", tok)

    def _handle_paragraph(self, tok: dict) -> Node:
        return self._element("p", tok)

    def _handle_thematic_break(self, _tok: dict) -> Node:
        return Node(name="hr")

    def _handle_block_code(self, tok: dict) -> Node:
        """Fenced / indented code block."""
        attrs = tok.get("attrs", {})
        raw = tok.get("raw", tok.get("text", ""))
        text = raw if isinstance(raw, str) else str(raw)
        code = Node(name="code", content=text.rstrip("\n"))
        info = (attrs.get("info", tok.get("info", "")) or "").strip()
        if info:
            code.set_attribute("class", f"language-{info.split()[0]}")
        pre = Node(name="pre")
        pre.add_child(code)
        return pre

    def _handle_block_quote(self, tok: dict) -> Node:
        return self._container("blockquote", tok.get("children", []))

    def _handle_block_html(self, tok: dict) -> Optional[Node]:
        raw = tok.get("raw", "").strip()
        return Node(content=raw, type=NodeType.SNIPPET) if raw else None

    def _handle_blank_line(self, _tok: dict) -> Optional[Node]:
        return None

    # -- lists --------------------------------------------------------------

    def _handle_list(self, tok: dict) -> Node:
        attrs = tok.get("attrs", {})
        ordered = attrs.get("ordered", False)
        node = self._container("ol" if ordered else "ul", tok.get("children", []))
        start = attrs.get("start", 1) or 1
        if ordered and start != 1:
            node.attributes.insert(0, Attribute(name="start", value=str(start)))
        return node

    def _handle_list_item(self, tok: dict) -> Node:
        return self._list_item(tok, checkbox=None)

    def _handle_task_list_item(self, tok: dict) -> Node:
        checked = bool(tok.get("attrs", {}).get("checked", False))
        return self._list_item(tok, checkbox=checked)

    def _list_item(self, tok: dict, *, checkbox: Optional[bool]) -> Node:
        item = Node(name="li")
        if checkbox is not None:
            box = Node(name="input", attributes=[
                Attribute(name="type", value="checkbox"),
                Attribute(name="disabled"),
            ])
            if checkbox:
                box.set_attribute("checked")
            item.add_child(box)

        for child in tok.get("children", []):
            if child.get("type") == "block_text":
                self._append_inline(item, child.get("children") or child.get("text", ""))
                continue
            node = self._convert_token(child)
            if node is not None:
                item.add_child(node)
        return item

    def _handle_block_text(self, tok: dict) -> Node:
        """Block text outside a list item."""
        return self._element("p", tok)

    # -- table --------------------------------------------------------------

    def _handle_table(self, tok: dict) -> Node:
        table = Node(name="table")
        for child in tok.get("children", []):
            ctype = child.get("type", "")
            if ctype == "table_head":
                head = table.add_child(Node(name="thead"))
                head.add_child(self._table_row(child.get("children", [])))
            elif ctype == "table_body":
                body = table.add_child(Node(name="tbody"))
                for row in child.get("children", []):
                    body.add_child(self._table_row(row.get("children", [])))
        return table

    def _table_row(self, cell_tokens: list[dict]) -> Node:
        row = Node(name="tr")
        for cell_tok in cell_tokens:
            cell_attrs = cell_tok.get("attrs", {})
            cell = Node(name="th" if cell_attrs.get("head") else "td")
            align = cell_attrs.get("align")
            if align:
                cell.set_attribute("style", f"text-align: {align}")
            self._append_inline(cell, cell_tok.get("children", []))
            row.add_child(cell)
        return row

    # -- inline handlers ----------------------------------------------------

    def _handle_text(self, tok: dict) -> Node:
        return _text_snippet(tok.get("raw", tok.get("text", "")))

    def _handle_strong(self, tok: dict) -> Node:
        return self._element("strong", tok)

    def _handle_emphasis(self, tok: dict) -> Node:
        return self._element("em", tok)

    def _handle_strikethrough(self, tok: dict) -> Node:
        return self._element("del", tok)

    def _handle_codespan(self, tok: dict) -> Node:
        raw = tok.get("raw", tok.get("text", ""))
        return Node(name="code", content=str(raw))

    def _handle_link(self, tok: dict) -> Node:
        attrs = tok.get("attrs", {})
        link_attrs = [Attribute(name="href", value=attrs.get("url", tok.get("link", "")))]
        if attrs.get("title"):
            link_attrs.append(Attribute(name="title", value=attrs["title"]))
        return self._element("a", tok, *link_attrs)

    def _handle_image(self, tok: dict) -> Node:
        attrs = tok.get("attrs", {})
        alt = attrs.get("alt", "") or _plain_text(tok.get("children") or [], line_break=" ")
        img = Node(name="img", attributes=[
            Attribute(name="src", value=attrs.get("url", tok.get("src", ""))),
            Attribute(name="alt", value=alt),
        ])
        if attrs.get("title"):
            img.set_attribute("title", attrs["title"])
        return img

    def _handle_inline_html(self, tok: dict) -> Node:
        return Node(content=tok.get("raw", ""), type=NodeType.SNIPPET)

    # -- helpers ------------------------------------------------------------

    def _container(self, name: str, children: list[dict]) -> Node:
        node = Node(name=name)
        for child in self._convert_tokens(children):
            node.add_child(child)
        return node


def _plain_text(tokens: list[dict[str, Any]], *, line_break: str) -> str:
    parts: list[str] = []
    for tok in tokens:
        ttype = tok.get("type")
        if ttype == "softbreak":
            parts.append(" ")
        elif ttype == "linebreak":
            parts.append(line_break)
        elif "children" in tok:
            parts.append(_plain_text(tok["children"], line_break=line_break))
        else:
            parts.append(str(tok.get("raw", tok.get("text", ""))))
    return "".join(parts)


def _text_snippet(text: str) -> Node:
    """Slim text line; ``'`` keeps the trailing space before inline tags."""
    marker = "'" if text[-1:].isspace() else "|"
    return Node(content=f"{marker} {text.strip()}", type=NodeType.SNIPPET)
