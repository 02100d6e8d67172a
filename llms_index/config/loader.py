"""Load llms_index configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .._constants import PLUGIN_NAME, SEVERITIES
from ..errors import LlmsConfigError
from .helpers import (
    Issues,
    _check_keys,
    _read_bool,
    _read_choice,
    _read_mapping,
    _read_mapping_list,
    _read_number,
    _read_str,
    _read_str_list,
)
from .models import (
    AttachmentFile,
    CopyPageContentOptions,
    LlmsTxtOptions,
    MarkdownOptions,
    OptionalLink,
    PluginOptions,
    RouteRule,
    SectionDefinition,
    SectionRoute,
    UiOptions,
)
from .validation import pattern_issues, validate_sections

_TOP_LEVEL_KEYS = (
    "id",
    "log_level",
    "on_route_error",
    "on_section_error",
    "markdown",
    "llms_txt",
    "ui",
)
_INCLUDE_KEYS = (
    "include_docs",
    "include_versioned_docs",
    "include_blog",
    "include_pages",
    "include_generated_index",
)
_MARKDOWN_KEYS = (
    "enable_files",
    "relative_paths",
    *_INCLUDE_KEYS,
    "exclude_routes",
    "content_selectors",
    "route_rules",
)
_LLMS_TXT_KEYS = (
    "enable_llms_full_txt",
    *_INCLUDE_KEYS,
    "exclude_routes",
    "sections",
    "site_title",
    "site_description",
    "enable_descriptions",
    "auto_section_depth",
    "auto_section_position",
    "optional_links",
    "attachments",
)
_SECTION_KEYS = (
    "id",
    "name",
    "description",
    "position",
    "routes",
    "subsections",
    "attachments",
    "optional_links",
)
_COPY_KEYS = ("button_label", "display", "content_strategy", "actions")


def load_plugin_options(path: Path) -> PluginOptions:
    """Load the YAML configuration describing how the index is generated.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration (for example,
        ``llms-index.yaml``).

    Returns
    -------
    PluginOptions
        Validated options. Groups missing from the file stay ``None`` and
        are defaulted later by :mod:`llms_index.config.resolver`.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    LlmsConfigError
        If the document is not a mapping or any option is invalid.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from llms_index.config import load_plugin_options
    >>> options = load_plugin_options(Path("llms-index.yaml"))  # doctest: +SKIP
    >>> options.llms_txt.site_title  # doctest: +SKIP
    'My Site'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise LlmsConfigError(msg)
    return build_plugin_options(loaded)


def build_plugin_options(raw: typ.Mapping[str, typ.Any]) -> PluginOptions:
    """Validate a raw option mapping and build :class:`PluginOptions`.

    All shape problems are collected before raising, so a single error lists
    every invalid option. Section validation (id uniqueness, glob syntax)
    runs afterwards on the typed forest.
    """
    issues: Issues = []
    _check_keys(raw, _TOP_LEVEL_KEYS, "options", issues)

    markdown_raw = _read_mapping(raw, "markdown", "options", issues)
    llms_raw = _read_mapping(raw, "llms_txt", "options", issues)
    ui_raw = _read_mapping(raw, "ui", "options", issues)

    options = PluginOptions(
        id=_read_str(raw, "id", "options", issues) or PLUGIN_NAME,
        log_level=_read_choice(
            raw, "log_level", "options", issues, choices=(0, 1, 2, 3), default=1
        ),
        on_route_error=_read_choice(
            raw, "on_route_error", "options", issues, choices=SEVERITIES, default="warn"
        ),
        on_section_error=_read_choice(
            raw,
            "on_section_error",
            "options",
            issues,
            choices=SEVERITIES,
            default="warn",
        ),
        markdown=_build_markdown_options(markdown_raw, issues)
        if markdown_raw is not None
        else None,
        llms_txt=_build_llms_txt_options(llms_raw, issues)
        if llms_raw is not None
        else None,
        ui=_build_ui_options(ui_raw, issues) if ui_raw is not None else None,
    )
    groups = ((options.markdown, "markdown"), (options.llms_txt, "llms_txt"))
    for group, where in groups:
        if group is not None:
            issues.extend(
                pattern_issues(group.exclude_routes, f"{where}.exclude_routes")
            )
    copy_options = options.ui.copy_page_content if options.ui else None
    if isinstance(copy_options, CopyPageContentOptions):
        issues.extend(
            pattern_issues(
                copy_options.display_exclude_routes,
                "ui.copy_page_content.display.exclude_routes",
            )
        )
    if issues:
        msg = "Invalid llms-index configuration"
        raise LlmsConfigError(msg, issues)

    sections = options.llms_txt.sections if options.llms_txt else []
    route_rules = options.markdown.route_rules if options.markdown else []
    validate_sections(sections, route_rules)
    return options


def _selectors(
    payload: typ.Mapping[str, typ.Any], where: str, issues: Issues
) -> tuple[str, ...] | None:
    selectors = _read_str_list(payload, "content_selectors", where, issues)
    return tuple(selectors) if selectors is not None else None


def _build_route_rule(
    payload: typ.Mapping[str, typ.Any], where: str, issues: Issues
) -> RouteRule:
    _check_keys(payload, ("route", "content_selectors"), where, issues)
    return RouteRule(
        route=_read_str(payload, "route", where, issues, required=True) or "",
        content_selectors=_selectors(payload, where, issues),
    )


def _build_markdown_options(
    payload: typ.Mapping[str, typ.Any], issues: Issues
) -> MarkdownOptions:
    where = "markdown"
    _check_keys(payload, _MARKDOWN_KEYS, where, issues)
    selectors = _read_str_list(payload, "content_selectors", where, issues)
    if selectors is not None and not selectors:
        issues.append(f"{where}.content_selectors: must contain at least one item.")
    return MarkdownOptions(
        enable_files=_read_bool(payload, "enable_files", where, issues),
        relative_paths=_read_bool(payload, "relative_paths", where, issues),
        include_docs=_read_bool(payload, "include_docs", where, issues),
        include_versioned_docs=_read_bool(
            payload, "include_versioned_docs", where, issues
        ),
        include_blog=_read_bool(payload, "include_blog", where, issues),
        include_pages=_read_bool(payload, "include_pages", where, issues),
        include_generated_index=_read_bool(
            payload, "include_generated_index", where, issues
        ),
        exclude_routes=_read_str_list(payload, "exclude_routes", where, issues) or [],
        content_selectors=selectors,
        route_rules=[
            _build_route_rule(item, location, issues)
            for location, item in _read_mapping_list(
                payload, "route_rules", where, issues
            )
        ],
    )


def _build_attachment(
    payload: typ.Mapping[str, typ.Any], where: str, issues: Issues
) -> AttachmentFile:
    _check_keys(
        payload,
        ("source", "title", "description", "include_in_full_txt", "file_name"),
        where,
        issues,
    )
    include_full = _read_bool(payload, "include_in_full_txt", where, issues)
    return AttachmentFile(
        source=_read_str(payload, "source", where, issues, required=True) or "",
        title=_read_str(payload, "title", where, issues, required=True) or "",
        description=_read_str(payload, "description", where, issues),
        include_in_full_txt=True if include_full is None else include_full,
        file_name=_read_str(payload, "file_name", where, issues),
    )


def _build_optional_link(
    payload: typ.Mapping[str, typ.Any], where: str, issues: Issues
) -> OptionalLink:
    _check_keys(payload, ("title", "url", "description"), where, issues)
    url = _read_str(payload, "url", where, issues, required=True) or ""
    if url and not url.startswith(("http://", "https://")):
        issues.append(f"{where}.url: optional links must be external URLs.")
    return OptionalLink(
        title=_read_str(payload, "title", where, issues, required=True) or "",
        url=url,
        description=_read_str(payload, "description", where, issues),
    )


def _build_section(
    payload: typ.Mapping[str, typ.Any], where: str, issues: Issues
) -> SectionDefinition:
    _check_keys(payload, _SECTION_KEYS, where, issues)
    routes = tuple(
        SectionRoute(rule.route, rule.content_selectors)
        for rule in (
            _build_route_rule(item, location, issues)
            for location, item in _read_mapping_list(payload, "routes", where, issues)
        )
    )
    return SectionDefinition(
        id=_read_str(payload, "id", where, issues, required=True) or "",
        name=_read_str(payload, "name", where, issues, required=True) or "",
        description=_read_str(payload, "description", where, issues),
        position=_read_number(payload, "position", where, issues),
        routes=routes,
        subsections=tuple(
            _build_section(item, location, issues)
            for location, item in _read_mapping_list(
                payload, "subsections", where, issues
            )
        ),
        attachments=tuple(
            _build_attachment(item, location, issues)
            for location, item in _read_mapping_list(
                payload, "attachments", where, issues
            )
        ),
        optional_links=tuple(
            _build_optional_link(item, location, issues)
            for location, item in _read_mapping_list(
                payload, "optional_links", where, issues
            )
        ),
    )


def _build_llms_txt_options(
    payload: typ.Mapping[str, typ.Any], issues: Issues
) -> LlmsTxtOptions:
    where = "llms_txt"
    _check_keys(payload, _LLMS_TXT_KEYS, where, issues)
    depth = payload.get("auto_section_depth")
    if depth is not None:
        depth = _read_choice(
            payload,
            "auto_section_depth",
            where,
            issues,
            choices=(1, 2, 3, 4, 5, 6),
            default=None,
        )
    return LlmsTxtOptions(
        enable_llms_full_txt=_read_bool(payload, "enable_llms_full_txt", where, issues),
        include_docs=_read_bool(payload, "include_docs", where, issues),
        include_versioned_docs=_read_bool(
            payload, "include_versioned_docs", where, issues
        ),
        include_blog=_read_bool(payload, "include_blog", where, issues),
        include_pages=_read_bool(payload, "include_pages", where, issues),
        include_generated_index=_read_bool(
            payload, "include_generated_index", where, issues
        ),
        exclude_routes=_read_str_list(payload, "exclude_routes", where, issues) or [],
        sections=[
            _build_section(item, location, issues)
            for location, item in _read_mapping_list(payload, "sections", where, issues)
        ],
        site_title=_read_str(payload, "site_title", where, issues),
        site_description=_read_str(payload, "site_description", where, issues),
        enable_descriptions=_read_bool(payload, "enable_descriptions", where, issues),
        auto_section_depth=depth,
        auto_section_position=_read_number(
            payload, "auto_section_position", where, issues
        ),
        optional_links=[
            _build_optional_link(item, location, issues)
            for location, item in _read_mapping_list(
                payload, "optional_links", where, issues
            )
        ],
        attachments=[
            _build_attachment(item, location, issues)
            for location, item in _read_mapping_list(
                payload, "attachments", where, issues
            )
        ],
    )


def _ai_prompt(
    payload: typ.Mapping[str, typ.Any], key: str, where: str, issues: Issues
) -> str | None:
    """Return the prompt for an AI action; ``None`` disables the action."""
    default = CopyPageContentOptions().chatgpt_prompt
    match payload.get(key, True):
        case True:
            return default
        case False:
            return None
        case dict() as action:
            _check_keys(action, ("prompt",), f"{where}.{key}", issues)
            return _read_str(action, "prompt", f"{where}.{key}", issues) or default
        case other:
            issues.append(
                f"{where}.{key}: expected a boolean or mapping, got {other!r}."
            )
            return default


def _build_copy_options(
    payload: typ.Mapping[str, typ.Any], issues: Issues
) -> CopyPageContentOptions:
    where = "ui.copy_page_content"
    _check_keys(payload, _COPY_KEYS, where, issues)
    base = CopyPageContentOptions()
    display = _read_mapping(payload, "display", where, issues) or {}
    _check_keys(display, ("docs", "exclude_routes"), f"{where}.display", issues)
    actions = _read_mapping(payload, "actions", where, issues) or {}
    _check_keys(actions, ("view_markdown", "ai"), f"{where}.actions", issues)
    ai = _read_mapping(actions, "ai", f"{where}.actions", issues) or {}
    _check_keys(ai, ("chatgpt", "claude"), f"{where}.actions.ai", issues)
    docs_flag = _read_bool(display, "docs", f"{where}.display", issues)
    view_markdown = _read_bool(actions, "view_markdown", f"{where}.actions", issues)
    return CopyPageContentOptions(
        button_label=_read_str(payload, "button_label", where, issues)
        or base.button_label,
        display_docs=base.display_docs if docs_flag is None else docs_flag,
        display_exclude_routes=_read_str_list(
            display, "exclude_routes", f"{where}.display", issues
        )
        or [],
        content_strategy=_read_choice(
            payload,
            "content_strategy",
            where,
            issues,
            choices=("prefer-markdown", "html-only"),
            default=base.content_strategy,
        ),
        view_markdown=base.view_markdown if view_markdown is None else view_markdown,
        chatgpt_prompt=_ai_prompt(ai, "chatgpt", f"{where}.actions.ai", issues),
        claude_prompt=_ai_prompt(ai, "claude", f"{where}.actions.ai", issues),
    )


def _build_ui_options(payload: typ.Mapping[str, typ.Any], issues: Issues) -> UiOptions:
    _check_keys(payload, ("copy_page_content",), "ui", issues)
    match payload.get("copy_page_content"):
        case None:
            copy_page_content: bool | CopyPageContentOptions | None = None
        case bool() as flag:
            copy_page_content = flag
        case dict() as copy_raw:
            copy_page_content = _build_copy_options(copy_raw, issues)
        case other:
            issues.append(
                f"ui.copy_page_content: expected a boolean or mapping, got {other!r}."
            )
            copy_page_content = None
    return UiOptions(copy_page_content=copy_page_content)


__all__ = ["build_plugin_options", "load_plugin_options"]
