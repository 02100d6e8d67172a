"""Build the data files consumed by the copy-page-content button.

Two documents are written when the button is enabled: a per-route map telling
the button whether to show and how to find page content, and a single
settings document carrying the resolved label, display rules, content
strategy and action toggles.
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

import msgspec
import msgspec.json as msgspec_json

from ._constants import (
    DEFAULT_AI_PROMPT,
    DEFAULT_CONTENT_SELECTORS,
    DEFAULT_EXCLUDE_ROUTES,
)
from .classifier import is_docs_like
from .config import get_ui_config
from .matching import create_exclusion_matcher

if typ.TYPE_CHECKING:
    from .cache import CachedRouteInfo
    from .config import PluginOptions

logger = logging.getLogger(__name__)


class CopyContentEntry(msgspec.Struct, frozen=True, rename="camel"):
    """Button settings for a single route."""

    should_display: bool
    has_markdown: bool
    content_selectors: tuple[str, ...]


class AiActionSettings(msgspec.Struct, frozen=True, rename="camel"):
    """An "open in assistant" action; disabled actions keep the default prompt."""

    enabled: bool
    prompt: str


class CopyButtonSettings(msgspec.Struct, frozen=True, rename="camel"):
    """Site-wide copy-button settings resolved from ``ui.copy_page_content``."""

    button_label: str
    display_docs: bool
    display_exclude_routes: tuple[str, ...]
    content_strategy: str
    view_markdown: bool
    chatgpt: AiActionSettings
    claude: AiActionSettings


def _ai_action(prompt: str | None) -> AiActionSettings:
    if prompt is None:
        return AiActionSettings(enabled=False, prompt=DEFAULT_AI_PROMPT)
    return AiActionSettings(enabled=True, prompt=prompt)


def build_copy_button_settings(options: PluginOptions) -> CopyButtonSettings | None:
    """Return the resolved button settings, or ``None`` when the button is off."""
    copy_options = get_ui_config(options).copy_page_content
    if copy_options is None:
        return None
    return CopyButtonSettings(
        button_label=copy_options.button_label,
        display_docs=copy_options.display_docs,
        display_exclude_routes=tuple(copy_options.display_exclude_routes),
        content_strategy=copy_options.content_strategy,
        view_markdown=copy_options.view_markdown,
        chatgpt=_ai_action(copy_options.chatgpt_prompt),
        claude=_ai_action(copy_options.claude_prompt),
    )


def build_copy_content_data(
    cached_routes: cabc.Iterable[CachedRouteInfo], options: PluginOptions
) -> dict[str, CopyContentEntry]:
    """Map each processed route path to its copy-button settings.

    The button is hidden on routes matching the default exclusions or the
    configured ``display.exclude_routes`` patterns, and on docs routes when
    ``display.docs`` is off. Routes without their own selectors fall back to
    the default selector list so the HTML extraction path always has
    something to try.
    """
    copy_options = get_ui_config(options).copy_page_content
    extra = copy_options.display_exclude_routes if copy_options else []
    show_docs = copy_options.display_docs if copy_options else True
    is_excluded = create_exclusion_matcher([*DEFAULT_EXCLUDE_ROUTES, *extra])
    data = {
        route.path: CopyContentEntry(
            should_display=not is_excluded(route.path)
            and (show_docs or not is_docs_like(route.content_type)),
            has_markdown=bool(route.markdown_file),
            content_selectors=route.content_selectors or DEFAULT_CONTENT_SELECTORS,
        )
        for route in cached_routes
    }
    logger.debug("Copy content data contains %d routes", len(data))
    return data


def encode_copy_content_data(data: cabc.Mapping[str, CopyContentEntry]) -> bytes:
    """Serialize copy-button data to indented JSON."""
    return msgspec_json.format(msgspec_json.encode(dict(data)), indent=2)


def encode_copy_button_settings(settings: CopyButtonSettings) -> bytes:
    """Serialize the button settings to indented JSON."""
    return msgspec_json.format(msgspec_json.encode(settings), indent=2)


__all__ = [
    "AiActionSettings",
    "CopyButtonSettings",
    "CopyContentEntry",
    "build_copy_button_settings",
    "build_copy_content_data",
    "encode_copy_button_settings",
    "encode_copy_content_data",
]
