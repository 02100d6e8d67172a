"""Build and render the hierarchical section tree behind llms.txt."""

from .builder import (
    auto_section_key,
    auto_section_name,
    build_document_tree,
    is_root_path,
    order_nodes,
)
from .renderer import (
    RenderOptions,
    are_similar_titles,
    format_doc_link,
    heading_level,
    iter_tree_docs,
    render_tree_as_markdown,
)

__all__ = [
    "RenderOptions",
    "are_similar_titles",
    "auto_section_key",
    "auto_section_name",
    "build_document_tree",
    "format_doc_link",
    "heading_level",
    "is_root_path",
    "iter_tree_docs",
    "order_nodes",
    "render_tree_as_markdown",
]
