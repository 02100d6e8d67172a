"""Assemble ``llms.txt`` and ``llms-full.txt`` from classified documents."""

from .full_index_builder import build_llms_full_txt_content
from .index_builder import (
    build_llms_txt_content,
    build_render_options,
    build_unified_document_tree,
    find_root_doc,
    resolve_document_title,
)
from .output import (
    LlmsIndexBuilder,
    filter_docs_for_indexing,
    generate_output_documents,
)

__all__ = [
    "LlmsIndexBuilder",
    "build_llms_full_txt_content",
    "build_llms_txt_content",
    "build_render_options",
    "build_unified_document_tree",
    "filter_docs_for_indexing",
    "find_root_doc",
    "generate_output_documents",
    "resolve_document_title",
]
