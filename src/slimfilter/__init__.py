"""slimfilter - rewrite generic tag trees into Slim template markup."""

from __future__ import annotations

__version__ = "0.1.0"

from slimfilter.errors import MalformedNodeError, MissingCapabilityError, SlimFilterError
from slimfilter.formatter import format_tree, to_string
from slimfilter.node import Attribute, Node, NodeType, is_snippet, is_unary, make_root
from slimfilter.profile import OutputProfile, get_profile
from slimfilter.slim import SlimFilter, process, stringify_attrs, wrapper_for

__all__ = [
    "Attribute",
    "MalformedNodeError",
    "MissingCapabilityError",
    "Node",
    "NodeType",
    "OutputProfile",
    "SlimFilter",
    "SlimFilterError",
    "format_tree",
    "get_profile",
    "is_snippet",
    "is_unary",
    "make_root",
    "process",
    "stringify_attrs",
    "to_string",
    "wrapper_for",
]
