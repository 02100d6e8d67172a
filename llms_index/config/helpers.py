"""Utility helpers shared by the llms_index configuration loader.

Every reader appends a message to ``issues`` instead of raising so the loader
can report all problems in one :class:`~llms_index.errors.LlmsConfigError`.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

Issues = list[str]


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _check_keys(
    payload: typ.Mapping[str, typ.Any],
    allowed: cabc.Collection[str],
    where: str,
    issues: Issues,
) -> None:
    """Record an issue for every key of ``payload`` not in ``allowed``."""
    issues.extend(
        f"{where}: unknown option '{key}'." for key in payload if key not in allowed
    )


def _read_mapping(
    payload: typ.Mapping[str, typ.Any], key: str, where: str, issues: Issues
) -> typ.Mapping[str, typ.Any] | None:
    """Return the nested mapping at ``key``; ``None`` when absent or invalid."""
    value = payload.get(key)
    match value:
        case None:
            return None
        case dict():
            return value
        case _:
            issues.append(f"{where}.{key}: expected a mapping.")
            return None


def _read_bool(
    payload: typ.Mapping[str, typ.Any], key: str, where: str, issues: Issues
) -> bool | None:
    """Return the boolean at ``key`` or ``None`` when unset."""
    value = payload.get(key)
    if value is None or isinstance(value, bool):
        return value
    issues.append(f"{where}.{key}: expected a boolean, got {value!r}.")
    return None


def _read_number(
    payload: typ.Mapping[str, typ.Any], key: str, where: str, issues: Issues
) -> float | None:
    """Return the numeric value at ``key`` or ``None`` when unset."""
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        issues.append(f"{where}.{key}: expected a number, got {value!r}.")
        return None
    return value


def _read_str(
    payload: typ.Mapping[str, typ.Any],
    key: str,
    where: str,
    issues: Issues,
    *,
    required: bool = False,
) -> str | None:
    """Return the string at ``key``; record an issue when required but empty."""
    value = payload.get(key)
    if value is not None and not isinstance(value, str):
        issues.append(f"{where}.{key}: expected a string, got {value!r}.")
        return None
    if required and not _optional_str(value):
        issues.append(f"{where}.{key}: required.")
        return None
    return value


def _read_str_list(
    payload: typ.Mapping[str, typ.Any], key: str, where: str, issues: Issues
) -> list[str] | None:
    """Return the list of strings at ``key`` or ``None`` when unset."""
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        issues.append(f"{where}.{key}: expected a list of strings.")
        return None
    return list(value)


def _read_mapping_list(
    payload: typ.Mapping[str, typ.Any], key: str, where: str, issues: Issues
) -> list[tuple[str, typ.Mapping[str, typ.Any]]]:
    """Return ``(location, mapping)`` pairs for a list of mappings at ``key``."""
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        issues.append(f"{where}.{key}: expected a list.")
        return []
    items: list[tuple[str, typ.Mapping[str, typ.Any]]] = []
    for idx, item in enumerate(value):
        location = f"{where}.{key}[{idx}]"
        if isinstance(item, dict):
            items.append((location, item))
        else:
            issues.append(f"{location}: expected a mapping.")
    return items


def _read_choice(
    payload: typ.Mapping[str, typ.Any],
    key: str,
    where: str,
    issues: Issues,
    *,
    choices: cabc.Collection[object],
    default: typ.Any,
) -> typ.Any:
    """Return the value at ``key`` when it is one of ``choices``."""
    value = payload.get(key, default)
    if value is None:
        return default
    if not any(
        type(value) is type(choice) and value == choice for choice in choices
    ):
        allowed = ", ".join(repr(choice) for choice in choices)
        issues.append(f"{where}.{key}: expected one of {allowed}, got {value!r}.")
        return default
    return value


__all__ = [
    "Issues",
    "_check_keys",
    "_optional_str",
    "_read_bool",
    "_read_choice",
    "_read_mapping",
    "_read_mapping_list",
    "_read_number",
    "_read_str",
    "_read_str_list",
]
