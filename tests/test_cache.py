"""Tests for the route cache and cache-based re-filtering."""

from __future__ import annotations

import msgspec.json as msgspec_json
import pytest

from llms_index.cache import (
    CachedRouteInfo,
    CacheSchema,
    build_cache,
    decode_cache,
    encode_cache,
    filter_cached_routes_by_config,
    filter_cached_routes_for_indexing,
    filter_cached_routes_for_processing,
    is_cache_stale,
    would_filtering_change_cached_routes,
)
from llms_index.config import (
    IncludeFilterConfig,
    LlmsTxtOptions,
    MarkdownOptions,
    PluginOptions,
    RouteRule,
)
from llms_index.models import ContentType, Route

DOCS_PLUGIN = "docusaurus-plugin-content-docs"
BLOG_PLUGIN = "docusaurus-plugin-content-blog"


@pytest.fixture
def cached_routes() -> list[CachedRouteInfo]:
    """Return a cache snapshot covering every filter dimension."""
    return [
        CachedRouteInfo("/docs/a", ContentType.DOCS),
        CachedRouteInfo("/docs/1.0/a", ContentType.DOCS, is_versioned=True),
        CachedRouteInfo("/docs/category/x", ContentType.DOCS, is_generated_index=True),
        CachedRouteInfo("/blog/post", ContentType.BLOG),
        CachedRouteInfo("/legacy", ContentType.UNKNOWN),
    ]


def test_indexing_filter_uses_llms_txt_defaults(
    cached_routes: list[CachedRouteInfo],
) -> None:
    """Versioned docs and blog posts are dropped from the index by default."""
    kept = filter_cached_routes_for_indexing(cached_routes, PluginOptions())
    assert [route.path for route in kept] == [
        "/docs/a",
        "/docs/category/x",
        "/legacy",
    ], f"unexpected indexing set {kept!r}"


def test_processing_filter_uses_union(cached_routes: list[CachedRouteInfo]) -> None:
    """The processing pass keeps versioned docs because markdown wants them."""
    options = PluginOptions(llms_txt=LlmsTxtOptions(include_blog=True))
    kept = filter_cached_routes_for_processing(cached_routes, options)
    assert len(kept) == len(cached_routes), (
        f"expected every route kept, got {[route.path for route in kept]!r}"
    )


def test_would_filtering_change_reports_count(
    cached_routes: list[CachedRouteInfo],
) -> None:
    """The change report carries both counts and a readable reason."""
    report = would_filtering_change_cached_routes(cached_routes, PluginOptions())
    assert report.would_change is True
    assert (report.current_count, report.filtered_count) == (5, 3)
    assert report.change_reason == "Configuration would exclude 2 route(s)"


def test_would_filtering_change_no_change() -> None:
    """An unaffected cache reports no change and no reason."""
    report = would_filtering_change_cached_routes(
        [CachedRouteInfo("/docs/a", ContentType.DOCS)], PluginOptions()
    )
    assert report.would_change is False
    assert report.change_reason is None


def test_build_cache_records_non_default_selectors() -> None:
    """Only selectors from a non-default layer are persisted."""
    options = PluginOptions(
        markdown=MarkdownOptions(route_rules=[RouteRule("/docs/api/**", (".api",))])
    )
    routes = [
        Route("/docs/api/x", DOCS_PLUGIN),
        Route("/docs/plain", DOCS_PLUGIN),
        Route("/search", DOCS_PLUGIN),
    ]
    cache = build_cache(routes, options, {"/docs/plain": "docs/plain.md"})
    by_path = {route.path: route for route in cache.routes}
    assert "/search" not in by_path, "expected default exclusion applied"
    assert by_path["/docs/api/x"].content_selectors == (".api",)
    assert by_path["/docs/plain"].content_selectors is None
    assert by_path["/docs/plain"].markdown_file == "docs/plain.md"


def test_cache_json_uses_camel_case_keys() -> None:
    """The persisted document uses camelCase and omits defaults."""
    cache = CacheSchema(
        routes=[CachedRouteInfo("/docs/a", ContentType.DOCS, is_versioned=True)]
    )
    payload = msgspec_json.decode(encode_cache(cache))
    assert payload == {
        "version": 1,
        "routes": [{"path": "/docs/a", "contentType": "docs", "isVersioned": True}],
    }, f"unexpected cache payload {payload!r}"
    assert decode_cache(encode_cache(cache)) == cache


def test_cache_staleness_tracks_classification_facts() -> None:
    """Changing a route's classification marks the cache stale."""
    routes = [Route("/docs/a", DOCS_PLUGIN), Route("/blog/b", BLOG_PLUGIN)]
    options = PluginOptions(llms_txt=LlmsTxtOptions(include_blog=True))
    cache = build_cache(routes, options)
    assert not is_cache_stale(cache, routes)
    changed = [Route("/docs/a", DOCS_PLUGIN, is_versioned=True), routes[1]]
    assert is_cache_stale(cache, changed)
    assert is_cache_stale(CacheSchema(version=0), routes), (
        "expected an old cache version to be stale"
    )


def test_versioned_unknown_routes_are_filtered_like_docs() -> None:
    """Unclassified versioned routes follow the versioned-docs switch."""
    routes = [
        CachedRouteInfo("/docs/2.0/a", ContentType.DOCS, is_versioned=True),
        CachedRouteInfo("/2.0/legacy", ContentType.UNKNOWN, is_versioned=True),
        CachedRouteInfo("/legacy", ContentType.UNKNOWN),
    ]
    kept = filter_cached_routes_by_config(
        routes, IncludeFilterConfig(include_versioned_docs=False)
    )
    assert [route.path for route in kept] == ["/legacy"], (
        f"expected versioned docs and unknown routes dropped, got {kept!r}"
    )
    everything = filter_cached_routes_by_config(
        routes, IncludeFilterConfig(include_versioned_docs=True)
    )
    assert len(everything) == len(routes)
