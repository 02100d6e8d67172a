"""Value objects shared by the classification, tree, and generation layers."""

from __future__ import annotations

import dataclasses as dc
import enum


class ContentType(enum.StrEnum):
    """Content category assigned to a route exactly once."""

    DOCS = "docs"
    BLOG = "blog"
    PAGES = "pages"
    UNKNOWN = "unknown"


@dc.dataclass(slots=True, frozen=True)
class Route:
    """A route emitted by the site generator's route catalogue.

    Attributes
    ----------
    path : str
        Route path, always starting with ``/``.
    plugin_name : str, optional
        Name of the content plugin that produced the route, when known.
    component : str, optional
        Theme component used to render the route.
    is_versioned : bool
        ``True`` when the route belongs to a non-latest docs version.
    is_generated_index : bool
        ``True`` for auto-generated category index pages.
    content_selectors : tuple[str, ...], optional
        Selector override declared on the route itself.
    """

    path: str
    plugin_name: str | None = None
    component: str | None = None
    is_versioned: bool = False
    is_generated_index: bool = False
    content_selectors: tuple[str, ...] | None = None


@dc.dataclass(slots=True)
class DocInfo:
    """A document placed in the tree: a real route or a synthetic attachment."""

    route_path: str
    title: str
    description: str | None = None
    markdown_file: str | None = None
    content: str | None = None
    section_id: str | None = None


@dc.dataclass(slots=True)
class TreeNode:
    """A heading-level grouping of documents in the rendered index."""

    name: str
    rel_path: str
    description: str | None = None
    index_doc: DocInfo | None = None
    docs: list[DocInfo] = dc.field(default_factory=list)
    sub_categories: list[TreeNode] = dc.field(default_factory=list)
    position: float | None = None
    section_id: str | None = None

    def is_empty(self) -> bool:
        """Return ``True`` when the node has nothing to render."""
        return self.index_doc is None and not self.docs and not self.sub_categories


@dc.dataclass(slots=True, frozen=True)
class EffectiveConfig:
    """Per-route configuration after precedence resolution."""

    content_selectors: tuple[str, ...]
    section_id: str | None = None
    source: str = "default"


@dc.dataclass(slots=True, frozen=True)
class ProcessedAttachment:
    """An attachment read from disk and ready to fold into the document list."""

    title: str
    section_id: str
    url: str
    content: str
    source_path: str
    description: str | None = None
    include_in_full_txt: bool = True


@dc.dataclass(slots=True, frozen=True)
class SiteInfo:
    """Site-level metadata supplied by the site generator."""

    url: str = ""
    base_url: str = "/"
    title: str | None = None

    @property
    def site_url(self) -> str:
        """Return the site URL joined with a non-root base URL."""
        if self.base_url and self.base_url != "/":
            return f"{self.url.rstrip('/')}/{self.base_url.strip('/')}"
        return self.url


@dc.dataclass(slots=True, frozen=True)
class OutputDocument:
    """A generated text document handed to the file-writing collaborator."""

    path: str
    content: str

    @property
    def byte_length(self) -> int:
        """Return the UTF-8 encoded size of ``content``."""
        return len(self.content.encode("utf-8"))


__all__ = [
    "ContentType",
    "DocInfo",
    "EffectiveConfig",
    "OutputDocument",
    "ProcessedAttachment",
    "Route",
    "SiteInfo",
    "TreeNode",
]
