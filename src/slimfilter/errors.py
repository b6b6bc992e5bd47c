"""Exception types raised by the Slim output filter."""

from __future__ import annotations


class SlimFilterError(Exception):
    """Base class for all slimfilter errors."""


class MalformedNodeError(SlimFilterError, ValueError):
    """A node's ``start`` template has no injection marker."""

    def __init__(self, node_name: str, start: str) -> None:
        super().__init__(
            f"Node {node_name!r} has no injection marker in start template {start!r}"
        )
        self.node_name = node_name
        self.start = start


class MissingCapabilityError(SlimFilterError, TypeError):
    """An output profile does not provide a required query."""

    def __init__(self, capability: str) -> None:
        super().__init__(f"Output profile is missing required capability {capability!r}")
        self.capability = capability
