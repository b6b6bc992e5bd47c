"""In-memory preference registry.

Preferences are defined once with a default value and a description, then
read (and optionally overridden) by name.  Nothing is persisted.

Usage::

    prefs = create_default_preferences()
    prefs.set(ATTRIBUTES_WRAPPER, "round")
    prefs.get(ATTRIBUTES_WRAPPER)   # 'round'
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any

ATTRIBUTES_WRAPPER = "slim.attributesWrapper"
WRAPPER_CHOICES = ["none", "round", "square", "curly"]

_UNSET = object()


@dataclass
class Preference:
    name: str
    default: Any
    description: str = ""
    value: Any = field(default=_UNSET, repr=False)

    @property
    def current(self) -> Any:
        return self.default if self.value is _UNSET else self.value


class Preferences:
    """Registry of named preferences."""

    def __init__(self) -> None:
        self._prefs: dict[str, Preference] = {}

    def define(self, name: str, default: Any, description: str = "") -> None:
        """Register *name* with its *default* value.

        Redefining an existing preference replaces its default and
        description but keeps an explicitly set value.
        """
        existing = self._prefs.get(name)
        pref = Preference(name=name, default=default, description=description)
        if existing is not None:
            pref.value = existing.value
        self._prefs[name] = pref

    def get(self, name: str) -> Any:
        return self._lookup(name).current

    def set(self, name: str, value: Any) -> None:
        self._lookup(name).value = value

    def reset(self, name: str | None = None) -> None:
        """Restore *name* (or every preference) to its default."""
        targets = [self._lookup(name)] if name is not None else self._prefs.values()
        for pref in targets:
            pref.value = _UNSET

    def describe(self, name: str) -> str:
        return self._lookup(name).description

    def names(self) -> list[str]:
        return sorted(self._prefs)

    def snapshot(self) -> dict[str, Any]:
        """Return a detached ``{name: current value}`` mapping."""
        return {name: deepcopy(pref.current) for name, pref in self._prefs.items()}

    def _lookup(self, name: str) -> Preference:
        try:
            return self._prefs[name]
        except KeyError:
            raise KeyError(f"Unknown preference {name!r}") from None


def create_default_preferences() -> Preferences:
    """Return a registry holding the Slim filter's preferences."""
    prefs = Preferences()
    prefs.define(
        ATTRIBUTES_WRAPPER,
        "none",
        "Defines how attributes will be wrapped: "
        "none (no wrapping), round (round braces), "
        "square (square braces) or curly (curly braces).",
    )
    return prefs
