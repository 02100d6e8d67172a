"""Resolve layered options into per-purpose and per-route configuration.

Every function here is a pure default-merging step: it takes the partially
specified :class:`~llms_index.config.models.PluginOptions` and returns a fully
populated value, treating missing option groups as empty.

Examples
--------
>>> from llms_index.config import PluginOptions, get_llms_txt_include_config
>>> get_llms_txt_include_config(PluginOptions()).include_versioned_docs
False
>>> from llms_index.config import get_union_include_config
>>> get_union_include_config(PluginOptions()).include_versioned_docs
True
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc

from .._constants import (
    ATTACHMENTS_SECTION_ID,
    DEFAULT_CONTENT_SELECTORS,
    DEFAULT_EXCLUDE_ROUTES,
)
from ..matching import matches_pattern
from ..models import EffectiveConfig
from .models import (
    AttachmentFile,
    CopyPageContentOptions,
    IncludeFilterConfig,
    LlmsTxtConfig,
    LlmsTxtOptions,
    MarkdownConfig,
    MarkdownOptions,
    OptionalLink,
    PluginOptions,
    SectionDefinition,
    SectionRoute,
    UiConfig,
)

MARKDOWN_INCLUDE_DEFAULTS = IncludeFilterConfig(
    include_docs=True,
    include_versioned_docs=True,
    include_blog=False,
    include_pages=False,
    include_generated_index=True,
)
LLMS_TXT_INCLUDE_DEFAULTS = IncludeFilterConfig(
    include_docs=True,
    include_versioned_docs=False,
    include_blog=False,
    include_pages=False,
    include_generated_index=True,
)


@dc.dataclass(slots=True, frozen=True)
class AttachmentRequest:
    """An attachment tagged with the id of the section that owns it."""

    attachment: AttachmentFile
    section_id: str


@dc.dataclass(slots=True, frozen=True)
class SectionMatch:
    """The section a route belongs to and the route entry that matched it."""

    section: SectionDefinition
    entry: SectionRoute


def _pick(value: bool | None, default: bool) -> bool:
    return default if value is None else value


def _unique(items: cabc.Iterable[str]) -> tuple[str, ...]:
    """Return ``items`` without repeats, keeping first-seen order."""
    return tuple(dict.fromkeys(items))


def _include_config(
    overrides: MarkdownOptions | LlmsTxtOptions | None,
    defaults: IncludeFilterConfig,
) -> IncludeFilterConfig:
    if overrides is None:
        return dc.replace(defaults, exclude_routes=DEFAULT_EXCLUDE_ROUTES)
    return IncludeFilterConfig(
        include_docs=_pick(overrides.include_docs, defaults.include_docs),
        include_versioned_docs=_pick(
            overrides.include_versioned_docs, defaults.include_versioned_docs
        ),
        include_blog=_pick(overrides.include_blog, defaults.include_blog),
        include_pages=_pick(overrides.include_pages, defaults.include_pages),
        include_generated_index=_pick(
            overrides.include_generated_index, defaults.include_generated_index
        ),
        exclude_routes=_unique((*DEFAULT_EXCLUDE_ROUTES, *overrides.exclude_routes)),
    )


def get_markdown_include_config(options: PluginOptions) -> IncludeFilterConfig:
    """Return the filter deciding which routes get markdown files."""
    return _include_config(options.markdown, MARKDOWN_INCLUDE_DEFAULTS)


def get_llms_txt_include_config(options: PluginOptions) -> IncludeFilterConfig:
    """Return the filter deciding which routes appear in ``llms.txt``."""
    return _include_config(options.llms_txt, LLMS_TXT_INCLUDE_DEFAULTS)


def union_include_configs(
    first: IncludeFilterConfig, second: IncludeFilterConfig
) -> IncludeFilterConfig:
    """Combine two filters so the result keeps anything either keeps.

    Include flags are OR-ed. Only patterns present in both exclusion lists
    survive: a route one purpose excludes may still be wanted by the other,
    and each purpose applies its own patterns downstream.
    """
    shared = set(second.exclude_routes)
    return IncludeFilterConfig(
        include_docs=first.include_docs or second.include_docs,
        include_versioned_docs=(
            first.include_versioned_docs or second.include_versioned_docs
        ),
        include_blog=first.include_blog or second.include_blog,
        include_pages=first.include_pages or second.include_pages,
        include_generated_index=(
            first.include_generated_index or second.include_generated_index
        ),
        exclude_routes=tuple(
            pattern for pattern in _unique(first.exclude_routes) if pattern in shared
        ),
    )


def get_union_include_config(options: PluginOptions) -> IncludeFilterConfig:
    """Return the filter for a single pass serving both purposes."""
    return union_include_configs(
        get_markdown_include_config(options), get_llms_txt_include_config(options)
    )


def get_markdown_config(options: PluginOptions) -> MarkdownConfig:
    """Return markdown generation settings with defaults applied."""
    markdown = options.markdown or MarkdownOptions()
    return MarkdownConfig(
        enable_files=_pick(markdown.enable_files, True),
        relative_paths=_pick(markdown.relative_paths, True),
        include=get_markdown_include_config(options),
        content_selectors=tuple(
            markdown.content_selectors or DEFAULT_CONTENT_SELECTORS
        ),
        route_rules=tuple(markdown.route_rules),
    )


def get_llms_txt_config(options: PluginOptions) -> LlmsTxtConfig:
    """Return index settings with defaults applied."""
    llms_txt = options.llms_txt or LlmsTxtOptions()
    return LlmsTxtConfig(
        enable_llms_full_txt=_pick(llms_txt.enable_llms_full_txt, False),
        include=get_llms_txt_include_config(options),
        sections=tuple(llms_txt.sections),
        site_title=llms_txt.site_title or "",
        site_description=llms_txt.site_description or "",
        enable_descriptions=_pick(llms_txt.enable_descriptions, True),
        auto_section_depth=llms_txt.auto_section_depth or 1,
        auto_section_position=llms_txt.auto_section_position,
        optional_links=tuple(llms_txt.optional_links),
        attachments=tuple(llms_txt.attachments),
    )


def get_ui_config(options: PluginOptions) -> UiConfig:
    """Return UI settings; ``copy_page_content: true`` expands to defaults."""
    value = options.ui.copy_page_content if options.ui else None
    match value:
        case CopyPageContentOptions():
            copy_options: CopyPageContentOptions | None = value
        case True:
            copy_options = CopyPageContentOptions()
        case _:
            copy_options = None
    return UiConfig(copy_page_content=copy_options)


def resolve_section_for_route(
    path: str, sections: cabc.Sequence[SectionDefinition]
) -> SectionMatch | None:
    """Return the first section whose route globs match ``path``.

    Sections are tested depth-first in declaration order, a parent before its
    subsections, and the first matching glob wins. ``None`` means the route
    belongs to no declared section and is placed by path depth later.
    """
    for section in sections:
        for entry in section.routes:
            if matches_pattern(path, entry.route):
                return SectionMatch(section=section, entry=entry)
        nested = resolve_section_for_route(path, section.subsections)
        if nested is not None:
            return nested
    return None


def get_effective_config_for_route(
    path: str,
    options: PluginOptions,
    route_selectors: cabc.Sequence[str] | None = None,
) -> EffectiveConfig:
    """Resolve the content selectors and section for a single route.

    Precedence, highest first: the selectors on the matching section route
    entry, the first global route rule declaring selectors, the route's own
    selectors, and finally the markdown default list. Only the winning layer
    applies.
    """
    match_path = path if path.startswith("/") else f"/{path}"
    markdown_config = get_markdown_config(options)
    sections = options.llms_txt.sections if options.llms_txt else []
    section_match = resolve_section_for_route(match_path, sections)
    section_id = section_match.section.id if section_match else None

    if section_match and section_match.entry.content_selectors:
        return EffectiveConfig(
            content_selectors=section_match.entry.content_selectors,
            section_id=section_id,
            source="section",
        )
    for rule in markdown_config.route_rules:
        if rule.content_selectors and matches_pattern(match_path, rule.route):
            return EffectiveConfig(
                content_selectors=rule.content_selectors,
                section_id=section_id,
                source="route-rule",
            )
    if route_selectors:
        return EffectiveConfig(
            content_selectors=tuple(route_selectors),
            section_id=section_id,
            source="route",
        )
    return EffectiveConfig(
        content_selectors=markdown_config.content_selectors,
        section_id=section_id,
        source="default",
    )


def collect_all_attachments(options: PluginOptions) -> list[AttachmentRequest]:
    """Return section attachments (recursively) followed by global ones."""
    llms_txt = options.llms_txt or LlmsTxtOptions()
    collected: list[AttachmentRequest] = []

    def _collect(sections: cabc.Iterable[SectionDefinition]) -> None:
        for section in sections:
            collected.extend(
                AttachmentRequest(attachment, section.id)
                for attachment in section.attachments
            )
            _collect(section.subsections)

    _collect(llms_txt.sections)
    collected.extend(
        AttachmentRequest(attachment, ATTACHMENTS_SECTION_ID)
        for attachment in llms_txt.attachments
    )
    return collected


def collect_all_optional_links(options: PluginOptions) -> list[OptionalLink]:
    """Return global optional links followed by section-declared ones."""
    llms_txt = options.llms_txt or LlmsTxtOptions()
    links = list(llms_txt.optional_links)

    def _collect(sections: cabc.Iterable[SectionDefinition]) -> None:
        for section in sections:
            links.extend(section.optional_links)
            _collect(section.subsections)

    _collect(llms_txt.sections)
    return links


__all__ = [
    "LLMS_TXT_INCLUDE_DEFAULTS",
    "MARKDOWN_INCLUDE_DEFAULTS",
    "AttachmentRequest",
    "SectionMatch",
    "collect_all_attachments",
    "collect_all_optional_links",
    "get_effective_config_for_route",
    "get_llms_txt_config",
    "get_llms_txt_include_config",
    "get_markdown_config",
    "get_markdown_include_config",
    "get_ui_config",
    "get_union_include_config",
    "resolve_section_for_route",
    "union_include_configs",
]
