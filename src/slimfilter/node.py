"""Generic tag tree consumed by the output filters.

A tree is a synthetic *root* :class:`Node` (no parent) owning an ordered
list of tag and snippet nodes.  Every node keeps a weak reference to its
parent so that the tree has a single owner and no reference cycles.

Before filtering, each node's ``start`` holds the injection marker
:data:`MARKER`; output filters replace it with rendered markup.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional

from slimfilter.errors import MalformedNodeError

MARKER = "%s"

# Elements that never have a closing form or children
VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "command", "embed", "hr", "img", "input",
    "keygen", "link", "meta", "param", "source", "track", "wbr",
})


class NodeType(Enum):
    TAG = "tag"
    SNIPPET = "snippet"


@dataclass
class Attribute:
    name: str
    value: str = ""
    is_boolean: bool = False


@dataclass(eq=False)
class Node:
    name: str = ""
    attributes: list[Attribute] = field(default_factory=list)
    content: str = ""
    children: list[Node] = field(default_factory=list)
    type: NodeType = NodeType.TAG
    self_closing: bool = False
    start: str = MARKER
    end: str = ""
    padding: str = ""
    head: Optional[str] = None
    _parent: Optional[weakref.ReferenceType] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for child in self.children:
            child._parent = weakref.ref(self)

    # -- tree structure -----------------------------------------------------

    @property
    def parent(self) -> Optional[Node]:
        return self._parent() if self._parent is not None else None

    def add_child(self, child: Node) -> Node:
        """Append *child* and point its parent reference at this node."""
        child._parent = weakref.ref(self)
        self.children.append(child)
        return child

    def index(self) -> int:
        """Position of this node among its parent's children (0 for root)."""
        parent = self.parent
        if parent is None:
            return 0
        for idx, sibling in enumerate(parent.children):
            if sibling is self:
                return idx
        return 0

    def walk(self) -> Iterator[Node]:
        """Yield every descendant depth-first, pre-order (root excluded)."""
        for child in self.children:
            yield child
            yield from child.walk()

    # -- attributes ---------------------------------------------------------

    def attribute(self, name: str) -> Optional[str]:
        """Return the value of the first attribute called *name*."""
        for attr in self.attributes:
            if attr.name == name:
                return attr.value
        return None

    def set_attribute(self, name: str, value: str = "") -> None:
        self.attributes.append(Attribute(name=name, value=value))

    # -- output templates ---------------------------------------------------

    def inject_head(self, head: str) -> None:
        """Replace the single injection marker in ``start`` with *head*.

        Raises:
            MalformedNodeError: If ``start`` does not contain the marker.
        """
        if MARKER not in self.start:
            raise MalformedNodeError(self.name, self.start)
        self.start = self.start.replace(MARKER, head, 1)
        self.head = head

    # -- construction helpers -----------------------------------------------

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Node:
        """Build a node (and its subtree) from a plain mapping.

        Accepted keys: ``name``, ``attributes`` (list of ``{name, value}``
        mappings or ``[name, value]`` pairs), ``content``, ``children``,
        ``snippet`` and ``self_closing``.
        """
        attrs: list[Attribute] = []
        for raw in data.get("attributes", []):
            if isinstance(raw, dict):
                attrs.append(Attribute(name=raw["name"], value=raw.get("value", "") or ""))
            else:
                name, value = raw
                attrs.append(Attribute(name=name, value=value or ""))
        node = cls(
            name=data.get("name", ""),
            attributes=attrs,
            content=data.get("content", "") or "",
            type=NodeType.SNIPPET if data.get("snippet") else NodeType.TAG,
            self_closing=bool(data.get("self_closing", False)),
        )
        for child in data.get("children", []):
            node.add_child(cls.from_dict(child))
        return node


def make_root(children: Optional[list[Node]] = None) -> Node:
    """Return a synthetic root node owning *children*."""
    return Node(children=list(children or []))


def is_snippet(node: Node) -> bool:
    return node.type == NodeType.SNIPPET


def is_unary(node: Node) -> bool:
    """Whether *node* is a void element.

    Nodes with children, content or snippet nodes are never unary.
    """
    if node.children or node.content or is_snippet(node):
        return False
    return node.self_closing or node.name.lower() in VOID_ELEMENTS
