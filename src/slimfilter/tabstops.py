"""Named ``${token}`` substitution in node content."""

from __future__ import annotations

import re
from typing import Callable

_VARIABLE_RE = re.compile(r"\$\{([a-zA-Z_][\w\-]*)\}")


def replace_variables(text: str, resolver: Callable[[str, str], str]) -> str:
    """Replace every ``${name}`` token in *text*.

    *resolver* is called as ``resolver(full_match, name)`` and returns the
    replacement; returning *full_match* leaves the token untouched.
    Escaped tokens (``\\${name}``) are never resolved.
    """

    def _sub(match: re.Match) -> str:
        start = match.start()
        if start and text[start - 1] == "\\":
            return match.group(0)
        return resolver(match.group(0), match.group(1))

    return _VARIABLE_RE.sub(_sub, text)
