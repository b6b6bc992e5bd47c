"""Line-per-node layout and tree serialization.

:func:`format_tree` resets every node's ``start``/``end`` templates to the
injection marker and, for profiles with ``tag_nl`` enabled, puts every tag
and snippet on its own line with one indentation level per depth.
:func:`to_string` then concatenates the filtered templates back into text.
"""

from __future__ import annotations

import logging
import re

from slimfilter.node import MARKER, Node, is_snippet
from slimfilter.profile import OutputProfile

logger = logging.getLogger(__name__)

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def pad_string(text: str, pad: str) -> str:
    """Indent every line of *text* after the first with *pad*."""
    lines = _LINE_BREAK_RE.split(text)
    if not pad or len(lines) == 1:
        return text
    return "\n".join([lines[0]] + [pad + line for line in lines[1:]])


def _is_very_first_child(node: Node) -> bool:
    parent = node.parent
    return parent is not None and parent.parent is None and parent.children[0] is node


def _format_tag(node: Node, profile: OutputProfile) -> None:
    node.start = node.end = MARKER
    node.head = None
    if not profile.tag_nl:
        return
    if not _is_very_first_child(node):
        node.start = "\n" + node.start
    if node.children:
        node.end = "\n" + node.end
    node.padding = profile.indent


def _format_snippet(node: Node, profile: OutputProfile) -> None:
    node.start = node.end = ""
    if profile.tag_nl and not _is_very_first_child(node):
        node.start = "\n"
        node.padding = profile.indent


def format_tree(tree: Node, profile: OutputProfile) -> Node:
    """Lay out *tree* one node per line according to *profile*."""
    logger.debug("Formatting tree with profile %r", profile.name)
    for node in tree.walk():
        if is_snippet(node):
            _format_snippet(node, profile)
        else:
            _format_tag(node, profile)
    return tree


def to_string(node: Node) -> str:
    """Serialize a filtered tree.

    Each node renders as ``start + pad(content + children) + end``; the
    synthetic root contributes only its children.
    """
    inner = node.content + "".join(to_string(child) for child in node.children)
    if node.parent is None:
        return inner
    return node.start + pad_string(inner, node.padding) + node.end
