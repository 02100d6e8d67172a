"""Load, validate, and resolve llms_index configuration.

This subpackage parses the project's ``llms-index.yaml`` file into typed
option dataclasses (:class:`PluginOptions` and friends), validates the section
forest, and exposes pure resolver functions that apply per-purpose defaults.
The primary entry point is :func:`load_plugin_options`; generators then call
:func:`get_llms_txt_config`, :func:`get_markdown_config`, and
:func:`get_effective_config_for_route` on the result.

Examples
--------
>>> from pathlib import Path
>>> from llms_index.config import load_plugin_options, get_llms_txt_config
>>> options = load_plugin_options(Path("llms-index.yaml"))  # doctest: +SKIP
>>> get_llms_txt_config(options).auto_section_depth  # doctest: +SKIP
1
"""

from .loader import build_plugin_options, load_plugin_options
from .models import (
    AttachmentFile,
    CopyPageContentOptions,
    IncludeFilterConfig,
    LlmsConfigError,
    LlmsTxtConfig,
    LlmsTxtOptions,
    MarkdownConfig,
    MarkdownOptions,
    OptionalLink,
    PluginOptions,
    RouteRule,
    SectionDefinition,
    SectionRoute,
    UiConfig,
    UiOptions,
)
from .resolver import (
    AttachmentRequest,
    SectionMatch,
    collect_all_attachments,
    collect_all_optional_links,
    get_effective_config_for_route,
    get_llms_txt_config,
    get_llms_txt_include_config,
    get_markdown_config,
    get_markdown_include_config,
    get_ui_config,
    get_union_include_config,
    resolve_section_for_route,
    union_include_configs,
)
from .validation import iter_sections, pattern_issues, validate_sections

__all__ = [
    "AttachmentFile",
    "AttachmentRequest",
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
    "SectionMatch",
    "SectionRoute",
    "UiConfig",
    "UiOptions",
    "build_plugin_options",
    "collect_all_attachments",
    "collect_all_optional_links",
    "get_effective_config_for_route",
    "get_llms_txt_config",
    "get_llms_txt_include_config",
    "get_markdown_config",
    "get_markdown_include_config",
    "get_ui_config",
    "get_union_include_config",
    "iter_sections",
    "pattern_issues",
    "load_plugin_options",
    "resolve_section_for_route",
    "union_include_configs",
    "validate_sections",
]
