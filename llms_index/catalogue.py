"""Decode the JSON route catalogue exported by the site generator.

The catalogue is a JSON array with one record per route. Keys are camelCase
and only ``path`` is required::

    [
      {"path": "/docs/intro", "plugin": "docusaurus-plugin-content-docs",
       "title": "Introduction", "markdownFile": "docs/intro.md",
       "content": "# Introduction\\n..."}
    ]

Each record yields the classification view (:class:`~llms_index.models.Route`)
and the document view (:class:`~llms_index.models.DocInfo`) consumed by the
tree builder.
"""

from __future__ import annotations

import typing as typ

import msgspec
import msgspec.json as msgspec_json

from .errors import LlmsConfigError
from .models import DocInfo, Route

if typ.TYPE_CHECKING:
    from pathlib import Path


class CatalogueEntry(msgspec.Struct, frozen=True, rename="camel"):
    """One route record as exported by the site generator."""

    path: str
    plugin: str | None = None
    component: str | None = None
    is_versioned: bool = False
    is_generated_index: bool = False
    content_selectors: tuple[str, ...] | None = None
    title: str | None = None
    description: str | None = None
    markdown_file: str | None = None
    content: str | None = None

    def to_route(self) -> Route:
        """Return the classification view of this record."""
        return Route(
            path=self.path,
            plugin_name=self.plugin,
            component=self.component,
            is_versioned=self.is_versioned,
            is_generated_index=self.is_generated_index,
            content_selectors=self.content_selectors,
        )

    def to_doc_info(self) -> DocInfo:
        """Return the document view; untitled routes use their last segment."""
        segments = [segment for segment in self.path.split("/") if segment]
        fallback = segments[-1] if segments else self.path
        return DocInfo(
            route_path=self.path,
            title=self.title or fallback,
            description=self.description,
            markdown_file=self.markdown_file,
            content=self.content,
        )


def decode_catalogue(payload: bytes | str) -> list[CatalogueEntry]:
    """Parse catalogue JSON.

    Raises
    ------
    LlmsConfigError
        If the payload is not a JSON array of route records.
    """
    try:
        return msgspec_json.decode(payload, type=list[CatalogueEntry])
    except (msgspec.DecodeError, msgspec.ValidationError) as exc:
        msg = "Invalid route catalogue"
        raise LlmsConfigError(msg, [str(exc)]) from exc


def load_catalogue(path: Path) -> list[CatalogueEntry]:
    """Read and parse the catalogue file at ``path``."""
    if not path.exists():
        msg = f"Route catalogue not found: {path}"
        raise FileNotFoundError(msg)
    return decode_catalogue(path.read_bytes())


__all__ = ["CatalogueEntry", "decode_catalogue", "load_catalogue"]
