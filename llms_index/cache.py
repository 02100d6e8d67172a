"""Persist classified routes and re-filter them without reprocessing content.

A build writes one :class:`CachedRouteInfo` per processed route. Later runs
re-apply the include rules to that snapshot to answer two questions cheaply:
which cached routes a purpose keeps, and whether the active configuration
would change what the previous build produced.

Example
-------
>>> from llms_index.cache import CachedRouteInfo, would_filtering_change_cached_routes
>>> from llms_index.config import PluginOptions
>>> from llms_index.models import ContentType
>>> cached = [
...     CachedRouteInfo("/docs/a", ContentType.DOCS),
...     CachedRouteInfo("/blog/b", ContentType.BLOG),
... ]
>>> would_filtering_change_cached_routes(cached, PluginOptions()).change_reason
'Configuration would exclude 1 route(s)'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ

import msgspec
import msgspec.json as msgspec_json

from ._constants import CACHE_VERSION
from .classifier import (
    classify_route,
    is_docs_like,
    should_include_route,
    type_is_included,
)
from .config import (
    get_effective_config_for_route,
    get_llms_txt_include_config,
    get_union_include_config,
)
from .matching import create_exclusion_matcher
from .models import ContentType, Route

if typ.TYPE_CHECKING:
    from .config import IncludeFilterConfig, PluginOptions

logger = logging.getLogger(__name__)


class CachedRouteInfo(msgspec.Struct, frozen=True, rename="camel", omit_defaults=True):
    """Classification facts recorded for one route during a build."""

    path: str
    content_type: ContentType
    is_versioned: bool = False
    is_generated_index: bool = False
    content_selectors: tuple[str, ...] | None = None
    markdown_file: str | None = None


class CacheSchema(msgspec.Struct, rename="camel"):
    """Top-level cache document."""

    version: int = CACHE_VERSION
    routes: list[CachedRouteInfo] = msgspec.field(default_factory=list)


@dc.dataclass(slots=True, frozen=True)
class FilterChangeReport:
    """Outcome of comparing a cached route set with the active configuration."""

    would_change: bool
    current_count: int
    filtered_count: int
    change_reason: str | None = None


def build_cached_route_info(
    route: Route, options: PluginOptions, *, markdown_file: str | None = None
) -> CachedRouteInfo:
    """Classify ``route`` and capture its non-default content selectors."""
    effective = get_effective_config_for_route(
        route.path, options, route.content_selectors
    )
    selectors = effective.content_selectors if effective.source != "default" else None
    return CachedRouteInfo(
        path=route.path,
        content_type=classify_route(route),
        is_versioned=route.is_versioned,
        is_generated_index=route.is_generated_index,
        content_selectors=selectors,
        markdown_file=markdown_file,
    )


def build_cache(
    routes: cabc.Iterable[Route],
    options: PluginOptions,
    markdown_files: cabc.Mapping[str, str] | None = None,
) -> CacheSchema:
    """Return the cache for every route the union of both purposes keeps."""
    union = get_union_include_config(options)
    files = markdown_files or {}
    return CacheSchema(
        routes=[
            build_cached_route_info(route, options, markdown_file=files.get(route.path))
            for route in routes
            if should_include_route(route, union)
        ]
    )


def encode_cache(cache: CacheSchema) -> bytes:
    """Serialize ``cache`` to JSON bytes."""
    return msgspec_json.encode(cache)


def decode_cache(payload: bytes | str) -> CacheSchema:
    """Parse a cache document; raises ``msgspec.ValidationError`` on bad data."""
    return msgspec_json.decode(payload, type=CacheSchema)


def _route_facts(route: Route) -> tuple[ContentType, bool, bool]:
    return classify_route(route), route.is_versioned, route.is_generated_index


def is_cache_stale(cache: CacheSchema, routes: cabc.Iterable[Route]) -> bool:
    """Return ``True`` when a cached route's classification facts changed.

    Only classification facts are compared (type, version and generated-index
    flags); filter configuration changes never make the cache stale.
    """
    if cache.version != CACHE_VERSION:
        return True
    current = {route.path: _route_facts(route) for route in routes}
    return any(
        current.get(cached.path)
        != (cached.content_type, cached.is_versioned, cached.is_generated_index)
        for cached in cache.routes
    )


def filter_cached_routes_by_config(
    cached_routes: cabc.Sequence[CachedRouteInfo],
    include_config: IncludeFilterConfig,
) -> list[CachedRouteInfo]:
    """Apply the include rules to cached classification facts.

    Parameters
    ----------
    cached_routes : Sequence[CachedRouteInfo]
        Snapshot written by a previous build.
    include_config : IncludeFilterConfig
        Filter to apply.

    Returns
    -------
    list[CachedRouteInfo]
        Routes kept, in their cached order.
    """
    is_excluded = create_exclusion_matcher(include_config.exclude_routes)
    excluded = {"type": 0, "version": 0, "generated": 0, "pattern": 0}
    kept: list[CachedRouteInfo] = []
    for route in cached_routes:
        if not type_is_included(route.content_type, include_config):
            excluded["type"] += 1
        elif (
            is_docs_like(route.content_type)
            and route.is_versioned
            and not include_config.include_versioned_docs
        ):
            excluded["version"] += 1
        elif route.is_generated_index and not include_config.include_generated_index:
            excluded["generated"] += 1
        elif is_excluded(route.path):
            excluded["pattern"] += 1
        else:
            kept.append(route)

    if len(kept) < len(cached_routes):
        logger.debug(
            "Cache filtering: %d/%d routes included (excluded: %d by type, "
            "%d by version, %d by generated, %d by pattern)",
            len(kept),
            len(cached_routes),
            excluded["type"],
            excluded["version"],
            excluded["generated"],
            excluded["pattern"],
        )
    else:
        logger.debug("Cache filtering: all %d routes included", len(kept))
    return kept


def filter_cached_routes_for_indexing(
    cached_routes: cabc.Sequence[CachedRouteInfo], options: PluginOptions
) -> list[CachedRouteInfo]:
    """Return cached routes that belong in ``llms.txt``."""
    return filter_cached_routes_by_config(
        cached_routes, get_llms_txt_include_config(options)
    )


def filter_cached_routes_for_processing(
    cached_routes: cabc.Sequence[CachedRouteInfo], options: PluginOptions
) -> list[CachedRouteInfo]:
    """Return cached routes either purpose needs."""
    return filter_cached_routes_by_config(
        cached_routes, get_union_include_config(options)
    )


def would_filtering_change_cached_routes(
    cached_routes: cabc.Sequence[CachedRouteInfo], options: PluginOptions
) -> FilterChangeReport:
    """Report whether the active index configuration drops cached routes."""
    filtered = filter_cached_routes_for_indexing(cached_routes, options)
    would_change = len(filtered) != len(cached_routes)
    reason = None
    if would_change:
        reason = (
            f"Configuration would exclude {len(cached_routes) - len(filtered)} route(s)"
        )
    return FilterChangeReport(
        would_change=would_change,
        current_count=len(cached_routes),
        filtered_count=len(filtered),
        change_reason=reason,
    )


__all__ = [
    "CacheSchema",
    "CachedRouteInfo",
    "FilterChangeReport",
    "build_cache",
    "build_cached_route_info",
    "decode_cache",
    "encode_cache",
    "filter_cached_routes_by_config",
    "filter_cached_routes_for_indexing",
    "filter_cached_routes_for_processing",
    "is_cache_stale",
    "would_filtering_change_cached_routes",
]
