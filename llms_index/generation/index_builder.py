"""Assemble the ``llms.txt`` index document from documents and options.

Typical usage:

>>> from llms_index.config import PluginOptions
>>> from llms_index.generation import build_llms_txt_content
>>> from llms_index.models import DocInfo, SiteInfo
>>> text = build_llms_txt_content(
...     [DocInfo("/docs/x", "X")], PluginOptions(), SiteInfo(title="Site")
... )
>>> print(text)
# Site
<BLANKLINE>
## Docs
<BLANKLINE>
- [X](/docs/x.md)
<BLANKLINE>
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from .._constants import (
    DEFAULT_SITE_TITLE,
    OPTIONAL_SECTION_NAME,
)
from ..attachments import attachments_to_docs
from ..config import (
    collect_all_optional_links,
    get_llms_txt_config,
    get_markdown_config,
)
from ..organization import (
    RenderOptions,
    build_document_tree,
    is_root_path,
    render_tree_as_markdown,
)
from ..organization.renderer import format_doc_link

if typ.TYPE_CHECKING:
    from ..config import PluginOptions
    from ..models import DocInfo, ProcessedAttachment, SiteInfo, TreeNode
    from ..reporting import IssueReporter


def find_root_doc(docs: cabc.Iterable[DocInfo]) -> DocInfo | None:
    """Return the site's root document (``/`` or ``/index``), if present."""
    return next((doc for doc in docs if is_root_path(doc.route_path)), None)


def build_render_options(options: PluginOptions, site: SiteInfo) -> RenderOptions:
    """Return link formatting settings derived from ``options`` and ``site``."""
    markdown_config = get_markdown_config(options)
    return RenderOptions(
        base_url=site.site_url,
        relative_paths=markdown_config.relative_paths,
        enable_files=markdown_config.enable_files,
        enable_descriptions=get_llms_txt_config(options).enable_descriptions,
    )


def resolve_document_title(
    options: PluginOptions, site: SiteInfo, root_doc: DocInfo | None
) -> str:
    """Return the configured title, falling back to site and root doc titles."""
    return (
        get_llms_txt_config(options).site_title
        or site.title
        or (root_doc.title if root_doc else None)
        or DEFAULT_SITE_TITLE
    )


def build_unified_document_tree(
    docs: cabc.Sequence[DocInfo],
    options: PluginOptions,
    attachments: cabc.Sequence[ProcessedAttachment] = (),
    *,
    section_reporter: IssueReporter | None = None,
) -> tuple[TreeNode, list[DocInfo]]:
    """Build the tree for ``docs`` plus attachment documents.

    Returns the tree and the combined document list; ``docs`` is left as is.
    Optional links never enter the tree.
    """
    all_docs = [*docs, *attachments_to_docs(attachments)]
    tree = build_document_tree(all_docs, options, section_reporter=section_reporter)
    return tree, all_docs


def build_llms_txt_content(
    docs: cabc.Sequence[DocInfo],
    options: PluginOptions,
    site: SiteInfo,
    attachments: cabc.Sequence[ProcessedAttachment] = (),
    *,
    section_reporter: IssueReporter | None = None,
) -> str:
    """Render the complete ``llms.txt`` document.

    Parameters
    ----------
    docs : Sequence[DocInfo]
        Documents already filtered for indexing.
    options : PluginOptions
        Validated options.
    site : SiteInfo
        Site URL, base URL, and title supplied by the site generator.
    attachments : Sequence[ProcessedAttachment], optional
        Attachments folded into their sections.
    section_reporter : IssueReporter, optional
        Receives issues for declared sections that ended up empty.

    Returns
    -------
    str
        Title line, optional description blockquote, root document link, the
        rendered section tree, and the ``Optional`` link section.
    """
    tree, _all_docs = build_unified_document_tree(
        docs, options, attachments, section_reporter=section_reporter
    )
    llms_config = get_llms_txt_config(options)
    render_options = build_render_options(options, site)
    root_doc = find_root_doc(docs)

    content = f"# {resolve_document_title(options, site, root_doc)}\n\n"
    if llms_config.enable_descriptions:
        description = llms_config.site_description or (
            root_doc.description if root_doc else None
        )
        if description:
            content += f"> {description}\n\n"
    if root_doc is not None:
        content += format_doc_link(root_doc, render_options) + "\n"

    content += render_tree_as_markdown(tree, render_options, is_root=True).lstrip(
        "\n"
    )

    links = collect_all_optional_links(options)
    if links:
        content += f"\n## {OPTIONAL_SECTION_NAME}\n\n"
        for link in links:
            suffix = (
                f": {link.description}"
                if llms_config.enable_descriptions and link.description
                else ""
            )
            content += f"- [{link.title}]({link.url}){suffix}\n"
    return content


__all__ = [
    "build_llms_txt_content",
    "build_render_options",
    "build_unified_document_tree",
    "find_root_doc",
    "resolve_document_title",
]
