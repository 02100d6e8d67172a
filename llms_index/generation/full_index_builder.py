"""Assemble ``llms-full.txt``: the index tree with every body inlined."""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from ..config import get_llms_txt_config
from ..organization import iter_tree_docs
from ..urls import format_url
from .index_builder import (
    build_render_options,
    build_unified_document_tree,
    find_root_doc,
    resolve_document_title,
)

if typ.TYPE_CHECKING:
    from ..config import PluginOptions
    from ..models import DocInfo, ProcessedAttachment, SiteInfo
    from ..organization import RenderOptions
    from ..reporting import IssueReporter

logger = logging.getLogger(__name__)

ENTRY_SEPARATOR = "\n\n---\n\n"


def _inline_content(doc: DocInfo) -> str | None:
    return doc.content


def _render_entry(
    doc: DocInfo, body: str, render_options: RenderOptions
) -> str:
    url = format_url(
        doc.route_path,
        enable_files=render_options.enable_files,
        relative_paths=render_options.relative_paths,
        markdown_file=doc.markdown_file,
        base_url=render_options.base_url,
    )
    text = f"## {doc.title}\n\n"
    if render_options.enable_descriptions and doc.description:
        text += f"> {doc.description}\n\n"
    text += f"Source: {url}\n\n{body.strip()}"
    return text


def build_llms_full_txt_content(
    docs: cabc.Sequence[DocInfo],
    options: PluginOptions,
    site: SiteInfo,
    attachments: cabc.Sequence[ProcessedAttachment] = (),
    *,
    content_loader: cabc.Callable[[DocInfo], str | None] | None = None,
    route_reporter: IssueReporter | None = None,
) -> str:
    """Render ``llms-full.txt`` from the unfiltered document set.

    Parameters
    ----------
    docs : Sequence[DocInfo]
        Every processed document (the union of both purposes), not only the
        ones indexed in ``llms.txt``.
    options : PluginOptions
        Validated options.
    site : SiteInfo
        Site metadata used for the title and link targets.
    attachments : Sequence[ProcessedAttachment], optional
        Attachments; those with ``include_in_full_txt`` disabled are skipped.
    content_loader : Callable[[DocInfo], str | None], optional
        Returns a document's markdown body. Defaults to ``DocInfo.content``.
    route_reporter : IssueReporter, optional
        Receives one issue per document whose body is unavailable.

    Returns
    -------
    str
        Title, optional description, then one entry per document in tree
        order, separated by horizontal rules.
    """
    loader = content_loader or _inline_content
    full_attachments = [item for item in attachments if item.include_in_full_txt]
    tree, _all_docs = build_unified_document_tree(docs, options, full_attachments)
    render_options = build_render_options(options, site)
    llms_config = get_llms_txt_config(options)
    root_doc = find_root_doc(docs)

    header = f"# {resolve_document_title(options, site, root_doc)}"
    if llms_config.enable_descriptions and llms_config.site_description:
        header += f"\n\n> {llms_config.site_description}"

    ordered = iter_tree_docs(tree)
    if root_doc is not None:
        ordered.insert(0, root_doc)

    entries: list[str] = []
    for doc in ordered:
        body = loader(doc)
        if not body or not body.strip():
            message = f"No content available for {doc.route_path}; skipped."
            if route_reporter is not None:
                route_reporter.report(message)
            else:
                logger.warning(message)
            continue
        entries.append(_render_entry(doc, body, render_options))

    logger.debug(
        "llms-full.txt contains %d of %d documents", len(entries), len(ordered)
    )
    return ENTRY_SEPARATOR.join([header, *entries]) + "\n"


__all__ = ["build_llms_full_txt_content"]
