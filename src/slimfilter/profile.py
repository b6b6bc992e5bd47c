"""Output profiles: naming, quoting and casing policy for generated markup.

A profile answers the queries an output filter needs (``tag_name``,
``attribute_name``, ``attribute_quote``, ``cursor``, ``is_boolean`` and
``self_closing_tag``).  Named presets are registered in :data:`PROFILES`
and selected by explicit lookup with :func:`get_profile`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any

from slimfilter.errors import MissingCapabilityError

DEFAULT_BOOLEAN_ATTRIBUTES = (
    "^contenteditable|seamless|async|autofocus|autoplay|checked|controls|"
    "defer|disabled|formnovalidate|hidden|ismap|loop|multiple|muted|"
    "novalidate|readonly|required|reversed|selected|typemustmatch$"
)

REQUIRED_CAPABILITIES = (
    "tag_name",
    "attribute_name",
    "attribute_quote",
    "cursor",
    "is_boolean",
)


def _apply_case(text: str, case: str) -> str:
    if case == "lower":
        return text.lower()
    if case == "upper":
        return text.upper()
    return text


# ---------------------------------------------------------------------------
# OutputProfile
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class OutputProfile:
    """Read-only output policy."""

    name: str = "plain"
    tag_case: str = "asis"          # asis, lower, upper
    attr_case: str = "asis"
    attr_quotes: str = "double"     # single, double
    self_closing_tag: bool = False
    tag_nl: bool = True
    indent: str = "  "
    place_cursor: bool = True
    caret: str = "|"
    boolean_attributes: str = DEFAULT_BOOLEAN_ATTRIBUTES

    def derive(self, **overrides: Any) -> OutputProfile:
        """Return a copy with selected fields overridden."""
        return replace(self, **overrides)

    def tag_name(self, name: str) -> str:
        return _apply_case(name, self.tag_case)

    def attribute_name(self, name: str) -> str:
        return _apply_case(name, self.attr_case)

    def attribute_quote(self) -> str:
        return "'" if self.attr_quotes == "single" else '"'

    def cursor(self) -> str:
        """Text marking where the editor caret should land."""
        return self.caret if self.place_cursor else ""

    def is_boolean(self, name: str, value: str) -> bool:
        """Whether attribute *name* should be rendered in boolean form.

        An attribute is boolean when its value repeats its name
        (``checked="checked"``), or when it has no value and its name
        matches :attr:`boolean_attributes`.
        """
        if value == name:
            return True
        if not value and self.boolean_attributes:
            return re.search(self.boolean_attributes, name, re.IGNORECASE) is not None
        return False


# ---------------------------------------------------------------------------
# Preset registry
# ---------------------------------------------------------------------------

PROFILES: dict[str, OutputProfile] = {
    "plain": OutputProfile(name="plain", tag_nl=False, place_cursor=False),
    "html": OutputProfile(name="html"),
    "xhtml": OutputProfile(name="xhtml", tag_case="lower", attr_case="lower", self_closing_tag=True),
    "xml": OutputProfile(name="xml", self_closing_tag=True, tag_nl=True),
    "line": OutputProfile(name="line", tag_nl=False, indent="", place_cursor=False),
}


def get_profile(name: str) -> OutputProfile:
    """Look up a registered profile by *name*.

    Raises:
        ValueError: If no profile is registered under *name*.
    """
    try:
        return PROFILES[name]
    except KeyError:
        raise ValueError(
            f"Unknown profile {name!r}. Choose from: {', '.join(PROFILES)}"
        ) from None


def require_capabilities(profile: Any) -> None:
    """Check that *profile* provides every query an output filter uses.

    Raises:
        MissingCapabilityError: Naming the first missing query.
    """
    for capability in REQUIRED_CAPABILITIES:
        if not callable(getattr(profile, capability, None)):
            raise MissingCapabilityError(capability)
    if not hasattr(profile, "self_closing_tag"):
        raise MissingCapabilityError("self_closing_tag")
