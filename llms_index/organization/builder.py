"""Assemble the section tree that the index renderer walks.

Tree construction runs in two structurally separate phases:

1. **Declared placement.** Every document is tested against the section route
   globs (first match wins, depth-first, declaration order). Attachment
   documents carry their owning section id and skip the glob test.
2. **Path-depth fallback.** Documents no section claimed are grouped into
   auto-sections keyed by the leading segments of their parent path.

Sibling nodes are ordered by ``position`` ascending; nodes without a position
trail in discovery order. Nodes left without content are pruned.

Example
-------
>>> from llms_index.config import PluginOptions
>>> from llms_index.models import DocInfo
>>> from llms_index.organization import build_document_tree
>>> tree = build_document_tree([DocInfo("/docs/intro", "Intro")], PluginOptions())
>>> [node.name for node in tree.sub_categories]
['Docs']
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from .._constants import (
    ATTACHMENTS_SECTION_ID,
    ATTACHMENTS_SECTION_NAME,
    INDEX_ROUTE_PATH,
    ROOT_ROUTE_PATH,
)
from ..config import get_llms_txt_config, resolve_section_for_route
from ..matching import static_prefix
from ..models import DocInfo, TreeNode

if typ.TYPE_CHECKING:
    from ..config import PluginOptions, SectionDefinition
    from ..reporting import IssueReporter

logger = logging.getLogger(__name__)


def _normalize_path(path: str) -> str:
    return path.rstrip("/") or "/"


def is_root_path(path: str) -> bool:
    """Return whether ``path`` names the site root (``/`` or ``/index``)."""
    return _normalize_path(path) in (ROOT_ROUTE_PATH, INDEX_ROUTE_PATH)


def order_nodes(nodes: cabc.Iterable[TreeNode]) -> list[TreeNode]:
    """Sort by position ascending; unpositioned nodes keep their order last."""
    return sorted(
        nodes,
        key=lambda node: (node.position is None, node.position or 0),
    )


def _section_index_path(section: SectionDefinition) -> str | None:
    """Return the route whose document introduces ``section``, if derivable."""
    if not section.routes:
        return None
    return static_prefix(section.routes[0].route)


class _SectionIndex:
    """Lookup tables built from the declared section forest."""

    def __init__(self, sections: cabc.Sequence[SectionDefinition]) -> None:
        self.nodes: dict[str, TreeNode] = {}
        self.index_paths: dict[str, str] = {}
        self.roots = self._build(sections, "")

    def _build(
        self, sections: cabc.Sequence[SectionDefinition], parent_path: str
    ) -> list[TreeNode]:
        nodes: list[TreeNode] = []
        for section in sections:
            rel_path = f"{parent_path}/{section.id}"
            node = TreeNode(
                name=section.name,
                rel_path=rel_path,
                description=section.description,
                position=section.position,
                section_id=section.id,
            )
            node.sub_categories = self._build(section.subsections, rel_path)
            self.nodes[section.id] = node
            index_path = _section_index_path(section)
            if index_path and index_path != ROOT_ROUTE_PATH:
                self.index_paths[section.id] = index_path
            nodes.append(node)
        return order_nodes(nodes)


def _place(node: TreeNode, doc: DocInfo, index_path: str | None) -> None:
    if (
        index_path is not None
        and node.index_doc is None
        and _normalize_path(doc.route_path) == index_path
    ):
        node.index_doc = doc
    else:
        node.docs.append(doc)


def auto_section_key(route_path: str, depth: int) -> str | None:
    """Return the auto-section path for a route, or ``None`` for top-level routes.

    >>> auto_section_key("/docs/guides/setup", 1)
    '/docs'
    >>> auto_section_key("/docs/guides/setup", 2)
    '/docs/guides'
    >>> auto_section_key("/about", 1) is None
    True
    """
    segments = [segment for segment in route_path.split("/") if segment]
    parents = segments[:-1][:depth]
    if not parents:
        return None
    return "/" + "/".join(parents)


def auto_section_name(key: str) -> str:
    """Return a display name derived from the last segment of ``key``."""
    segment = key.rstrip("/").rsplit("/", 1)[-1]
    return segment.replace("-", " ").replace("_", " ").title()


def _build_auto_sections(
    docs: cabc.Sequence[DocInfo],
    root: TreeNode,
    *,
    depth: int,
    position: float | None,
) -> list[TreeNode]:
    keys = {auto_section_key(doc.route_path, depth) for doc in docs}
    keys.discard(None)
    auto_nodes: dict[str, TreeNode] = {}
    for doc in docs:
        path = _normalize_path(doc.route_path)
        key = path if path in keys else auto_section_key(path, depth)
        if key is None:
            root.docs.append(doc)
            continue
        node = auto_nodes.get(key)
        if node is None:
            node = TreeNode(
                name=auto_section_name(key), rel_path=key, position=position
            )
            auto_nodes[key] = node
        _place(node, doc, key)
    return list(auto_nodes.values())


def _prune(nodes: cabc.Iterable[TreeNode]) -> list[TreeNode]:
    kept: list[TreeNode] = []
    for node in nodes:
        node.sub_categories = _prune(node.sub_categories)
        if not node.is_empty():
            kept.append(node)
    return kept


def build_document_tree(
    docs: cabc.Sequence[DocInfo],
    options: PluginOptions,
    *,
    section_reporter: IssueReporter | None = None,
) -> TreeNode:
    """Build the hierarchical tree for ``docs``.

    Parameters
    ----------
    docs : Sequence[DocInfo]
        Filtered documents in discovery order, attachment documents included.
        The sequence is not modified.
    options : PluginOptions
        Options providing sections, auto-section depth, and position.
    section_reporter : IssueReporter, optional
        Receives one issue for every declared section left without content.

    Returns
    -------
    TreeNode
        Root node (``rel_path == "/"``). Root routes (``/`` and ``/index``)
        are left out because the index header links them directly.
    """
    config = get_llms_txt_config(options)
    sections = _SectionIndex(config.sections)
    root = TreeNode(name="", rel_path=ROOT_ROUTE_PATH)
    attachments_node: TreeNode | None = None
    unassigned: list[DocInfo] = []

    for doc in docs:
        if is_root_path(doc.route_path):
            continue
        section_id = doc.section_id
        if section_id is None:
            match = resolve_section_for_route(doc.route_path, config.sections)
            section_id = match.section.id if match else None
        if section_id is None:
            unassigned.append(doc)
            continue

        node = sections.nodes.get(section_id)
        if node is None and section_id == ATTACHMENTS_SECTION_ID:
            if attachments_node is None:
                attachments_node = TreeNode(
                    name=ATTACHMENTS_SECTION_NAME,
                    rel_path=f"/{ATTACHMENTS_SECTION_ID}",
                    section_id=ATTACHMENTS_SECTION_ID,
                )
            node = attachments_node
        if node is None:
            logger.debug("Unknown section '%s' for %s", section_id, doc.route_path)
            unassigned.append(doc)
            continue
        _place(node, doc, sections.index_paths.get(section_id))

    auto_nodes = _build_auto_sections(
        unassigned,
        root,
        depth=config.auto_section_depth,
        position=config.auto_section_position,
    )
    top_level = [*sections.roots, *auto_nodes]
    if attachments_node is not None:
        top_level.append(attachments_node)
    root.sub_categories = _prune(order_nodes(top_level))

    if section_reporter is not None:
        for section_id, node in sections.nodes.items():
            if node.is_empty():
                section_reporter.report(
                    f"Section '{section_id}' has no matching documents and was omitted."
                )
    return root


__all__ = [
    "auto_section_key",
    "auto_section_name",
    "build_document_tree",
    "order_nodes",
]
