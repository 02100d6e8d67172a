"""Structural validation for the section forest and route rules."""

from __future__ import annotations

import collections
import collections.abc as cabc
import re

from .._constants import SECTION_ID_PATTERN
from ..errors import LlmsConfigError
from ..matching import validate_pattern
from .models import RouteRule, SectionDefinition

_SECTION_ID_RE = re.compile(SECTION_ID_PATTERN)


def iter_sections(
    sections: cabc.Iterable[SectionDefinition],
) -> cabc.Iterator[tuple[SectionDefinition, tuple[str, ...]]]:
    """Yield every section depth-first with the ids of its ancestors."""

    def _walk(
        nodes: cabc.Iterable[SectionDefinition], parents: tuple[str, ...]
    ) -> cabc.Iterator[tuple[SectionDefinition, tuple[str, ...]]]:
        for section in nodes:
            yield section, parents
            yield from _walk(section.subsections, (*parents, section.id))

    yield from _walk(sections, ())


def _pattern_issue(pattern: str, owner: str) -> str | None:
    try:
        validate_pattern(pattern)
    except LlmsConfigError as exc:
        return f"{owner}: {exc}"
    return None


def pattern_issues(patterns: cabc.Iterable[str], owner: str) -> list[str]:
    """Return one message per malformed glob in ``patterns``."""
    return [
        issue
        for issue in (_pattern_issue(pattern, owner) for pattern in patterns)
        if issue is not None
    ]


def validate_sections(
    sections: cabc.Sequence[SectionDefinition],
    route_rules: cabc.Sequence[RouteRule] = (),
) -> None:
    """Validate the whole section forest in a single flattening pass.

    Parameters
    ----------
    sections : Sequence[SectionDefinition]
        Top-level section definitions, possibly nested.
    route_rules : Sequence[RouteRule], optional
        Global route rules whose patterns are validated alongside the
        section globs.

    Raises
    ------
    LlmsConfigError
        Listing every duplicated id, malformed id, and malformed glob found.
        Duplicate ids are never resolved by declaration order.
    """
    issues: list[str] = []
    counts: collections.Counter[str] = collections.Counter()
    for section, _parents in iter_sections(sections):
        counts[section.id] += 1
        if not _SECTION_ID_RE.match(section.id):
            issues.append(
                f"Section id '{section.id}' must be kebab-case (a-z, 0-9, '-')."
            )
        for entry in section.routes:
            issue = _pattern_issue(entry.route, f"Section '{section.id}'")
            if issue:
                issues.append(issue)

    duplicates = sorted(section_id for section_id, n in counts.items() if n > 1)
    issues.extend(
        f"Duplicate section id '{section_id}' ({counts[section_id]} definitions)."
        for section_id in duplicates
    )

    for rule in route_rules:
        issue = _pattern_issue(rule.route, "Route rule")
        if issue:
            issues.append(issue)

    if issues:
        msg = "Invalid section configuration"
        raise LlmsConfigError(msg, issues)


__all__ = ["iter_sections", "pattern_issues", "validate_sections"]
