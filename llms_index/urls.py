"""Format link targets and heading slugs for generated index documents."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from ._constants import INDEX_MD

_SLUG_STRIP = re.compile(r"[^\w\- ]+", re.UNICODE)
_WHITESPACE = re.compile(r"\s+")


def ensure_leading_slash(path: str) -> str:
    """Return ``path`` prefixed with ``/`` when it lacks one."""
    return path if path.startswith("/") else f"/{path}"


def join_url(base: str, path: str) -> str:
    """Join ``base`` and ``path`` with exactly one slash between them."""
    if not base:
        return ensure_leading_slash(path)
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


def _base_pathname(base_url: str) -> str:
    """Return the path component of ``base_url`` without a trailing slash."""
    parts = urlsplit(base_url)
    pathname = parts.path if parts.scheme else base_url
    return pathname.rstrip("/")


def strip_base_url(route_path: str, base_url: str) -> str:
    """Remove the ``base_url`` path prefix from ``route_path`` when present.

    >>> strip_base_url("/my-project/docs/intro", "/my-project/")
    '/docs/intro'
    """
    if not base_url or base_url == "/":
        return route_path
    prefix = _base_pathname(base_url)
    if prefix and route_path.startswith(prefix):
        stripped = route_path[len(prefix) :]
        return ensure_leading_slash(stripped) if stripped else "/"
    return route_path


def format_url(
    route_path: str,
    *,
    enable_files: bool = True,
    relative_paths: bool = True,
    markdown_file: str | None = None,
    base_url: str = "",
) -> str:
    """Return the link target for a document.

    Parameters
    ----------
    route_path : str
        Document route path.
    enable_files : bool, optional
        When ``True`` links point at the generated ``.md`` file (or the
        explicit ``markdown_file``) instead of the HTML route.
    relative_paths : bool, optional
        When ``False`` and ``base_url`` is set, links are absolute.
    markdown_file : str, optional
        Explicit markdown artifact path, used for attachments.
    base_url : str, optional
        Site URL, optionally including a base path.

    Examples
    --------
    >>> format_url("/docs/intro/")
    '/docs/intro.md'
    >>> format_url("/", enable_files=True)
    '/index.md'
    >>> format_url("/docs/x", relative_paths=False, base_url="https://a.dev")
    'https://a.dev/docs/x.md'
    """
    target = ensure_leading_slash(route_path)
    if enable_files and markdown_file:
        target = ensure_leading_slash(markdown_file)
    elif enable_files:
        if target.endswith("/") and target != "/":
            target = target[:-1]
        target = INDEX_MD if target == "/" else f"{target}.md"

    if not base_url:
        return target
    if not relative_paths:
        return join_url(base_url, strip_base_url(target, base_url))

    prefix = _base_pathname(base_url)
    if prefix and not target.startswith(prefix):
        return join_url(prefix, target)
    return target


def heading_slug(text: str) -> str:
    """Return the anchor slug a markdown renderer derives from a heading.

    >>> heading_slug("Getting Started!")
    'getting-started'
    """
    cleaned = _SLUG_STRIP.sub("", text.strip().lower())
    return _WHITESPACE.sub("-", cleaned)


def title_slug(title: str) -> str:
    """Return the path segment used for synthetic attachment routes.

    >>> title_slug("Payment API  Spec")
    'payment-api-spec'
    """
    return _WHITESPACE.sub("-", title.lower())


__all__ = [
    "ensure_leading_slash",
    "format_url",
    "heading_slug",
    "join_url",
    "strip_base_url",
    "title_slug",
]
