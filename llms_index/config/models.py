"""Typed dataclasses describing llms_index configuration structures.

Option classes mirror what a user writes: every field left as ``None`` means
"not set" so the resolver can apply purpose-specific defaults. Resolved
classes (``*Config``) are what the generators consume.
"""

from __future__ import annotations

import dataclasses as dc

from .._constants import DEFAULT_AI_PROMPT
from ..errors import LlmsConfigError

__all__ = [
    "AttachmentFile",
    "CopyPageContentOptions",
    "IncludeFilterConfig",
    "LlmsConfigError",
    "LlmsTxtConfig",
    "LlmsTxtOptions",
    "MarkdownConfig",
    "MarkdownOptions",
    "OptionalLink",
    "PluginOptions",
    "RouteRule",
    "SectionDefinition",
    "SectionRoute",
    "UiConfig",
    "UiOptions",
]


@dc.dataclass(slots=True, frozen=True)
class IncludeFilterConfig:
    """Which routes a single consumption purpose keeps."""

    include_docs: bool = True
    include_versioned_docs: bool = True
    include_blog: bool = False
    include_pages: bool = False
    include_generated_index: bool = True
    exclude_routes: tuple[str, ...] = ()


@dc.dataclass(slots=True, frozen=True)
class SectionRoute:
    """A route glob that assigns matching routes to a section."""

    route: str
    content_selectors: tuple[str, ...] | None = None


@dc.dataclass(slots=True, frozen=True)
class RouteRule:
    """Global per-route override applied outside section membership."""

    route: str
    content_selectors: tuple[str, ...] | None = None


@dc.dataclass(slots=True, frozen=True)
class OptionalLink:
    """External link listed under the ``Optional`` heading."""

    title: str
    url: str
    description: str | None = None


@dc.dataclass(slots=True, frozen=True)
class AttachmentFile:
    """A local file copied next to the index and listed as a document."""

    source: str
    title: str
    description: str | None = None
    include_in_full_txt: bool = True
    file_name: str | None = None


@dc.dataclass(slots=True, frozen=True)
class SectionDefinition:
    """A user-declared section; ``id`` is unique across the whole forest."""

    id: str
    name: str
    description: str | None = None
    position: float | None = None
    routes: tuple[SectionRoute, ...] = ()
    subsections: tuple[SectionDefinition, ...] = ()
    attachments: tuple[AttachmentFile, ...] = ()
    optional_links: tuple[OptionalLink, ...] = ()


@dc.dataclass(slots=True)
class MarkdownOptions:
    """User overrides for per-page markdown generation."""

    enable_files: bool | None = None
    relative_paths: bool | None = None
    include_docs: bool | None = None
    include_versioned_docs: bool | None = None
    include_blog: bool | None = None
    include_pages: bool | None = None
    include_generated_index: bool | None = None
    exclude_routes: list[str] = dc.field(default_factory=list)
    content_selectors: list[str] | None = None
    route_rules: list[RouteRule] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class LlmsTxtOptions:
    """User overrides for the ``llms.txt`` index and its full companion."""

    enable_llms_full_txt: bool | None = None
    include_docs: bool | None = None
    include_versioned_docs: bool | None = None
    include_blog: bool | None = None
    include_pages: bool | None = None
    include_generated_index: bool | None = None
    exclude_routes: list[str] = dc.field(default_factory=list)
    sections: list[SectionDefinition] = dc.field(default_factory=list)
    site_title: str | None = None
    site_description: str | None = None
    enable_descriptions: bool | None = None
    auto_section_depth: int | None = None
    auto_section_position: float | None = None
    optional_links: list[OptionalLink] = dc.field(default_factory=list)
    attachments: list[AttachmentFile] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class CopyPageContentOptions:
    """Copy-button display settings."""

    button_label: str = "Copy Page"
    display_docs: bool = True
    display_exclude_routes: list[str] = dc.field(default_factory=list)
    content_strategy: str = "prefer-markdown"
    view_markdown: bool = True
    chatgpt_prompt: str | None = DEFAULT_AI_PROMPT
    claude_prompt: str | None = DEFAULT_AI_PROMPT


@dc.dataclass(slots=True)
class UiOptions:
    """User interface feature toggles."""

    copy_page_content: bool | CopyPageContentOptions | None = None


@dc.dataclass(slots=True)
class PluginOptions:
    """Validated options; missing groups are treated as empty."""

    id: str = "llms-index"
    log_level: int = 1
    on_route_error: str = "warn"
    on_section_error: str = "warn"
    markdown: MarkdownOptions | None = None
    llms_txt: LlmsTxtOptions | None = None
    ui: UiOptions | None = None


@dc.dataclass(slots=True, frozen=True)
class MarkdownConfig:
    """Fully defaulted markdown generation settings."""

    enable_files: bool
    relative_paths: bool
    include: IncludeFilterConfig
    content_selectors: tuple[str, ...]
    route_rules: tuple[RouteRule, ...]


@dc.dataclass(slots=True, frozen=True)
class LlmsTxtConfig:
    """Fully defaulted index settings."""

    enable_llms_full_txt: bool
    include: IncludeFilterConfig
    sections: tuple[SectionDefinition, ...]
    site_title: str
    site_description: str
    enable_descriptions: bool
    auto_section_depth: int
    auto_section_position: float | None
    optional_links: tuple[OptionalLink, ...]
    attachments: tuple[AttachmentFile, ...]


@dc.dataclass(slots=True, frozen=True)
class UiConfig:
    """Fully defaulted UI settings; ``copy_page_content`` is ``None`` when off."""

    copy_page_content: CopyPageContentOptions | None
