"""Classify catalogue routes and decide whether a purpose includes them.

Classification trusts plugin provenance first. When a route lost its plugin
association (versioned docs routes commonly do), only reliable structural
indicators are consulted; anything else is :attr:`ContentType.UNKNOWN`, which
every include decision treats exactly like docs.

Example
-------
>>> from llms_index.classifier import classify_route
>>> from llms_index.models import Route
>>> classify_route(Route(path="/blog/post", component="@theme/BlogPostPage"))
<ContentType.BLOG: 'blog'>
"""

from __future__ import annotations

import typing as typ

from ._constants import (
    BLOG_COMPONENTS,
    BLOG_PLUGIN,
    DOC_ITEM_COMPONENT,
    PAGES_PLUGIN,
    ROOT_ROUTE_PATH,
)
from .matching import create_exclusion_matcher
from .models import ContentType, Route

if typ.TYPE_CHECKING:
    from .config.models import IncludeFilterConfig

_PLUGIN_TYPES: dict[str, ContentType] = {
    BLOG_PLUGIN: ContentType.BLOG,
    PAGES_PLUGIN: ContentType.PAGES,
}


def classify_route(route: Route) -> ContentType:
    """Return the content type for ``route``."""
    if route.plugin_name:
        return _PLUGIN_TYPES.get(route.plugin_name, ContentType.DOCS)
    return _classify_by_indicators(route)


def _classify_by_indicators(route: Route) -> ContentType:
    if route.component == DOC_ITEM_COMPONENT:
        return ContentType.DOCS
    if route.component in BLOG_COMPONENTS:
        return ContentType.BLOG
    if route.path == ROOT_ROUTE_PATH:
        return ContentType.PAGES
    return ContentType.UNKNOWN


def type_is_included(content_type: ContentType, config: IncludeFilterConfig) -> bool:
    """Return the include flag of ``config`` that governs ``content_type``."""
    match content_type:
        case ContentType.BLOG:
            return config.include_blog
        case ContentType.PAGES:
            return config.include_pages
        case _:
            return config.include_docs


def is_docs_like(content_type: ContentType) -> bool:
    """Return ``True`` for types subject to the versioned-docs filter."""
    return content_type in (ContentType.DOCS, ContentType.UNKNOWN)


def should_include_route(route: Route, config: IncludeFilterConfig) -> bool:
    """Decide whether ``route`` survives the filter ``config``.

    Parameters
    ----------
    route : Route
        Catalogue route to test.
    config : IncludeFilterConfig
        Purpose-specific include flags and exclusion patterns.

    Returns
    -------
    bool
        ``False`` as soon as the content type flag, the versioned-docs flag,
        the generated-index flag, or an exclusion pattern rejects the route,
        checked in that order.
    """
    content_type = classify_route(route)
    if not type_is_included(content_type, config):
        return False
    if (
        is_docs_like(content_type)
        and route.is_versioned
        and not config.include_versioned_docs
    ):
        return False
    if route.is_generated_index and not config.include_generated_index:
        return False
    return not create_exclusion_matcher(config.exclude_routes)(route.path)


__all__ = [
    "classify_route",
    "is_docs_like",
    "should_include_route",
    "type_is_included",
]
