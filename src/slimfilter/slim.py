"""Slim output filter - rewrites a tag tree into Slim template markup.

The filter walks a generic tag tree (see :mod:`slimfilter.node`) and, for
every tag node, replaces the injection marker in ``node.start`` with a Slim
tag head::

    div#main.content(title="x")

IDs and classes use the ``#id`` / ``.class`` shorthand, a bare ``div``
followed by shorthand is elided, and remaining attributes are wrapped
according to the ``slim.attributesWrapper`` preference.  Slim has no
closing tags, so every processed node's ``end`` is emptied.
"""

from __future__ import annotations

import logging
import re
from typing import NamedTuple, Optional

from slimfilter.formatter import format_tree, pad_string
from slimfilter.node import Attribute, Node, is_snippet, is_unary
from slimfilter.preferences import ATTRIBUTES_WRAPPER, Preferences
from slimfilter.profile import OutputProfile, get_profile, require_capabilities
from slimfilter.tabstops import replace_variables

logger = logging.getLogger(__name__)

_NL_RE = re.compile(r"[\n\r]")
_INDENTED_TEXT_RE = re.compile(r"^\s*\|")
_SPACE_RE = re.compile(r"^\s")
_WHITESPACE_RUN_RE = re.compile(r"\s+")

# Characters opening a wrapped attribute list; a tag head starting with
# one of them must keep its tag name.
_WRAPPER_OPENERS = "([{"


class AttributeWrapper(NamedTuple):
    open: str
    close: str


_WRAPPERS = {
    "round": AttributeWrapper("(", ")"),
    "square": AttributeWrapper("[", "]"),
    "curly": AttributeWrapper("{", "}"),
}

_NO_WRAPPER = AttributeWrapper(" ", "")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def wrapper_for(value: Optional[str]) -> AttributeWrapper:
    """Return the delimiter pair for an attribute wrapping preference.

    ``none`` and unrecognised values yield a single leading space and no
    closing delimiter.
    """
    return _WRAPPERS.get(value or "none", _NO_WRAPPER)


def transform_class_name(class_name: str) -> str:
    """``" a b  c "`` -> ``"a.b.c"``"""
    return _WHITESPACE_RUN_RE.sub(".", class_name.strip())


def stringify_attrs(
    attrs: list[Attribute],
    profile: OutputProfile,
    wrapper: AttributeWrapper = _NO_WRAPPER,
) -> str:
    """Render *attrs* as a wrapped, space separated attribute list.

    Boolean attributes render as a bare name inside delimiters and as
    ``name=true`` when unwrapped, so the list stays self-delimiting.
    """
    quote = profile.attribute_quote()
    rendered: list[str] = []
    for attr in attrs:
        if attr.is_boolean:
            if wrapper.close:
                rendered.append(attr.name)
                continue
            value = "true"
        else:
            value = quote + attr.value + quote
        rendered.append(f"{attr.name}={value}")
    return wrapper.open + " ".join(rendered) + wrapper.close


# ---------------------------------------------------------------------------
# SlimFilter
# ---------------------------------------------------------------------------

class SlimFilter:
    """Rewrite a tag tree into Slim markup in place.

    Usage::

        slim = SlimFilter(get_profile("html"), attributes_wrapper="round")
        slim.process(tree)
        text = to_string(tree)

    The wrapping preference is read once, when the filter is created.
    """

    def __init__(
        self,
        profile: OutputProfile,
        *,
        preferences: Optional[Preferences] = None,
        attributes_wrapper: Optional[str] = None,
    ) -> None:
        require_capabilities(profile)
        self.profile = profile
        if attributes_wrapper is None and preferences is not None:
            attributes_wrapper = preferences.get(ATTRIBUTES_WRAPPER)
        self.wrapper: AttributeWrapper = wrapper_for(attributes_wrapper)

    # -- public API ---------------------------------------------------------

    def process(self, tree: Node, level: int = 0) -> Node:
        """Filter every tag below *tree*, depth-first, pre-order."""
        if not level:
            # Slim requires every tag on its own line
            tree = format_tree(tree, get_profile("xml"))

        for item in tree.children:
            if not is_snippet(item):
                self.process_tag(item)
            self.process(item, level + 1)

        return tree

    def process_tag(self, node: Node) -> Node:
        """Inject the Slim tag head into a single *node*."""
        if node.parent is None:
            # root element, nothing to emit
            return node

        profile = self.profile
        attrs = self._make_attributes_string(node)
        unary = is_unary(node)
        self_closing = "/" if profile.self_closing_tag and unary else ""

        tag_name = profile.tag_name(node.name)
        if tag_name.lower() == "div" and attrs and attrs[0] not in _WRAPPER_OPENERS:
            # implicit div
            tag_name = ""

        node.end = ""
        self._process_tag_content(node)
        node.inject_head(tag_name + attrs + self_closing)

        if not node.children and not unary:
            node.start += profile.cursor()

        logger.debug("Processed <%s> -> %r", node.name, node.start)
        return node

    # -- internals ----------------------------------------------------------

    def _make_attributes_string(self, node: Node) -> str:
        profile = self.profile
        cursor = profile.cursor()
        attrs = ""
        other_attrs: list[Attribute] = []

        for attr in node.attributes:
            attr_name = profile.attribute_name(attr.name)
            lowered = attr_name.lower()
            if lowered == "id":
                attrs += "#" + (attr.value or cursor)
            elif lowered == "class":
                attrs += "." + transform_class_name(attr.value or cursor)
            else:
                other_attrs.append(Attribute(
                    name=attr_name,
                    value=attr.value or cursor,
                    is_boolean=profile.is_boolean(attr.name, attr.value),
                ))

        if other_attrs:
            attrs += stringify_attrs(other_attrs, profile, self.wrapper)

        return attrs

    @staticmethod
    def _process_tag_content(node: Node) -> None:
        if not node.content:
            return

        def _newline(match: str, name: str) -> str:
            if name in ("nl", "newline"):
                return "\n"
            return match

        content = replace_variables(node.content, _newline)

        if _NL_RE.search(content) and not _INDENTED_TEXT_RE.match(content):
            # multiline content: verbatim text block
            node.content = "\n| " + pad_string(content, "  ")
        elif not _SPACE_RE.match(content):
            node.content = " " + content


def process(
    tree: Node,
    profile: OutputProfile,
    level: int = 0,
    *,
    preferences: Optional[Preferences] = None,
    attributes_wrapper: Optional[str] = None,
) -> Node:
    """Run the Slim filter over *tree* and return it."""
    slim = SlimFilter(
        profile,
        preferences=preferences,
        attributes_wrapper=attributes_wrapper,
    )
    return slim.process(tree, level)
