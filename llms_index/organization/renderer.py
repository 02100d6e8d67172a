"""Serialize a section tree into llms.txt markdown."""

from __future__ import annotations

import dataclasses as dc

from .._constants import MAX_HEADING_LEVEL
from ..models import DocInfo, TreeNode
from ..urls import format_url, heading_slug


@dc.dataclass(slots=True, frozen=True)
class RenderOptions:
    """Link formatting and description switches for one rendering pass."""

    base_url: str = ""
    relative_paths: bool = True
    enable_files: bool = True
    enable_descriptions: bool = True


def heading_level(rel_path: str) -> int:
    """Return the heading level for a node at ``rel_path``.

    >>> heading_level("/a")
    2
    >>> heading_level("/a/b/c")
    4
    """
    segments = [segment for segment in rel_path.split("/") if segment]
    return min(len(segments) + 1, MAX_HEADING_LEVEL)


def are_similar_titles(first: str, second: str) -> bool:
    """Return ``True`` when both titles produce the same heading slug."""
    return heading_slug(first) == heading_slug(second)


def format_doc_link(doc: DocInfo, options: RenderOptions) -> str:
    """Return the list entry for ``doc`` including its trailing newline."""
    url = format_url(
        doc.route_path,
        enable_files=options.enable_files,
        relative_paths=options.relative_paths,
        markdown_file=doc.markdown_file,
        base_url=options.base_url,
    )
    suffix = (
        f": {doc.description}"
        if options.enable_descriptions and doc.description
        else ""
    )
    return f"- [{doc.title}]({url}){suffix}\n"


def _render_heading(node: TreeNode, options: RenderOptions) -> str:
    if node.index_doc is not None and are_similar_titles(
        node.name, node.index_doc.title
    ):
        return ""
    text = f"{'#' * heading_level(node.rel_path)} {node.name}\n\n"
    description = node.description or (
        node.index_doc.description if node.index_doc else None
    )
    if options.enable_descriptions and description:
        text += f"> {description}\n\n"
    return text


def render_tree_as_markdown(
    node: TreeNode,
    options: RenderOptions | None = None,
    *,
    is_root: bool = False,
) -> str:
    """Render ``node`` and its descendants depth-first.

    The heading is skipped for the root and whenever the index document's
    title matches the node name. The index document comes first, followed by
    the node's documents in discovery order and then each sub-category
    preceded by a blank line.
    """
    options = options or RenderOptions()
    parts: list[str] = []
    if not is_root and node.name:
        parts.append(_render_heading(node, options))
    if node.index_doc is not None and not is_root:
        parts.append(format_doc_link(node.index_doc, options))
    parts.extend(format_doc_link(doc, options) for doc in node.docs)
    for sub in node.sub_categories:
        parts.append("\n" + render_tree_as_markdown(sub, options))
    return "".join(parts)


def iter_tree_docs(node: TreeNode, *, is_root: bool = True) -> list[DocInfo]:
    """Return the documents of ``node`` in rendering order."""
    docs: list[DocInfo] = []
    if node.index_doc is not None and not is_root:
        docs.append(node.index_doc)
    docs.extend(node.docs)
    for sub in node.sub_categories:
        docs.extend(iter_tree_docs(sub, is_root=False))
    return docs


__all__ = [
    "RenderOptions",
    "are_similar_titles",
    "format_doc_link",
    "heading_level",
    "iter_tree_docs",
    "render_tree_as_markdown",
]
