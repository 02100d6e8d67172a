r"""Compile glob-style route patterns into reusable predicates.

Patterns are matched against complete route paths and are case-sensitive.
``*`` matches characters within a single segment, ``**`` matches zero or more
whole segments, ``?`` matches one character other than ``/``, and ``{a,b}``
selects between alternatives inside a segment.

Example
-------
>>> from llms_index.matching import create_exclusion_matcher
>>> is_excluded = create_exclusion_matcher(["/docs/tutorial-extras/**"])
>>> is_excluded("/docs/tutorial-extras")
True
>>> is_excluded("/docs/tutorial-extras-other")
False
"""

from __future__ import annotations

import collections.abc as cabc
import functools
import re

from .errors import LlmsConfigError

GLOBSTAR = "**"


def _never(_path: str) -> bool:
    return False


def _translate_segment(segment: str, pattern: str) -> str:
    """Return the regex source for one non-globstar pattern segment."""
    if GLOBSTAR in segment:
        msg = f"Invalid route pattern '{pattern}': '**' must be a whole segment."
        raise LlmsConfigError(msg)
    if segment == "*":
        return "[^/]+"

    parts: list[str] = []
    idx = 0
    while idx < len(segment):
        char = segment[idx]
        if char == "*":
            parts.append("[^/]*")
        elif char == "?":
            parts.append("[^/]")
        elif char == "{":
            end = segment.find("}", idx)
            if end == -1:
                msg = f"Invalid route pattern '{pattern}': unbalanced '{{'."
                raise LlmsConfigError(msg)
            options = segment[idx + 1 : end].split(",")
            parts.append("(?:" + "|".join(re.escape(opt) for opt in options) + ")")
            idx = end
        elif char == "}":
            msg = f"Invalid route pattern '{pattern}': unbalanced '}}'."
            raise LlmsConfigError(msg)
        else:
            parts.append(re.escape(char))
        idx += 1
    return "".join(parts)


def glob_to_regex(pattern: str) -> str:
    """Translate ``pattern`` into an anchored regular expression source.

    Parameters
    ----------
    pattern : str
        Route glob starting with ``/``.

    Returns
    -------
    str
        Regex source anchored at both ends. A trailing ``/`` on the tested
        path is tolerated.

    Raises
    ------
    LlmsConfigError
        If the pattern is empty, relative, or uses ``**`` inside a segment.
    """
    if not pattern or not pattern.startswith("/"):
        msg = f"Invalid route pattern '{pattern}': patterns must start with '/'."
        raise LlmsConfigError(msg)

    body: list[str] = []
    for segment in pattern.strip("/").split("/"):
        if not segment:
            continue
        if segment == GLOBSTAR:
            body.append("(?:/[^/]+)*")
        else:
            body.append("/" + _translate_segment(segment, pattern))
    return "^" + "".join(body) + r"/?\Z"


def validate_pattern(pattern: str) -> None:
    """Raise :class:`LlmsConfigError` when ``pattern`` cannot be compiled."""
    glob_to_regex(pattern)


@functools.lru_cache(maxsize=256)
def _compile(patterns: tuple[str, ...]) -> re.Pattern[str]:
    sources = [glob_to_regex(pattern) for pattern in patterns]
    return re.compile("|".join(f"(?:{source})" for source in sources))


def create_exclusion_matcher(
    patterns: cabc.Iterable[str],
) -> cabc.Callable[[str], bool]:
    """Return a predicate reporting whether a route path matches any pattern.

    The compiled expression is memoized per distinct pattern tuple, so building
    matchers for the same configuration repeatedly costs a dictionary lookup.
    """
    key = tuple(patterns)
    if not key:
        return _never
    compiled = _compile(key)

    def is_excluded(path: str) -> bool:
        return compiled.match(path) is not None

    return is_excluded


def matches_pattern(path: str, pattern: str) -> bool:
    """Return ``True`` when ``path`` matches the single glob ``pattern``."""
    return _compile((pattern,)).match(path) is not None


def static_prefix(pattern: str) -> str | None:
    """Return the wildcard-free path a trailing-globstar pattern is rooted at.

    ``/api/**`` yields ``/api`` and ``/guides`` yields ``/guides``; patterns
    with wildcards before their final ``/**`` or ``/*`` yield ``None``.
    """
    trimmed = pattern.rstrip("/")
    for suffix in ("/" + GLOBSTAR, "/*"):
        if trimmed.endswith(suffix):
            trimmed = trimmed[: -len(suffix)]
            break
    if any(char in trimmed for char in "*?{}"):
        return None
    return trimmed or "/"


__all__ = [
    "create_exclusion_matcher",
    "glob_to_regex",
    "matches_pattern",
    "static_prefix",
    "validate_pattern",
]
