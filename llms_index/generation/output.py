"""Produce the output documents and drive a complete build.

:func:`generate_output_documents` is the pure step: it filters documents for
indexing and returns :class:`~llms_index.models.OutputDocument` values.
:class:`LlmsIndexBuilder` wraps it with the file-system collaborators
(attachment copying, cache and copy-button data) used by the command line.
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ

from .._constants import (
    CACHE_FILENAME,
    COPY_BUTTON_SETTINGS_FILENAME,
    COPY_CONTENT_FILENAME,
    LLMS_FULL_TXT_FILENAME,
    LLMS_TXT_FILENAME,
)
from ..attachments import AttachmentProcessor
from ..cache import build_cache, encode_cache, filter_cached_routes_for_indexing
from ..classifier import should_include_route
from ..config import (
    collect_all_attachments,
    get_llms_txt_config,
    get_llms_txt_include_config,
    get_union_include_config,
)
from ..copy_content import (
    build_copy_button_settings,
    build_copy_content_data,
    encode_copy_button_settings,
    encode_copy_content_data,
)
from ..matching import create_exclusion_matcher
from ..models import OutputDocument
from ..reporting import IssueReporter
from .full_index_builder import build_llms_full_txt_content
from .index_builder import build_llms_txt_content

if typ.TYPE_CHECKING:
    from pathlib import Path

    from ..cache import CacheSchema
    from ..catalogue import CatalogueEntry
    from ..config import PluginOptions
    from ..models import DocInfo, ProcessedAttachment, SiteInfo

logger = logging.getLogger(__name__)


def filter_docs_for_indexing(
    docs: cabc.Sequence[DocInfo], options: PluginOptions, cache: CacheSchema
) -> list[DocInfo]:
    """Return the documents that belong in ``llms.txt``.

    Cached classification facts decide type, version and generated-index
    membership. A document with no cache entry is kept unless an exclusion
    pattern matches it.
    """
    cached_paths = {route.path for route in cache.routes}
    kept_paths = {
        route.path for route in filter_cached_routes_for_indexing(cache.routes, options)
    }
    is_excluded = create_exclusion_matcher(
        get_llms_txt_include_config(options).exclude_routes
    )
    filtered = [
        doc
        for doc in docs
        if doc.route_path in kept_paths
        or (doc.route_path not in cached_paths and not is_excluded(doc.route_path))
    ]
    if len(filtered) < len(docs):
        logger.info(
            "Filtered for %s: %d/%d docs included",
            LLMS_TXT_FILENAME,
            len(filtered),
            len(docs),
        )
    return filtered


def generate_output_documents(
    docs: cabc.Sequence[DocInfo],
    options: PluginOptions,
    site: SiteInfo,
    attachments: cabc.Sequence[ProcessedAttachment] = (),
    *,
    cache: CacheSchema | None = None,
    route_reporter: IssueReporter | None = None,
    section_reporter: IssueReporter | None = None,
) -> list[OutputDocument]:
    """Render ``llms.txt`` and, when enabled, ``llms-full.txt``.

    Parameters
    ----------
    docs : Sequence[DocInfo]
        Every processed document (union of both purposes).
    options : PluginOptions
        Validated options.
    site : SiteInfo
        Site metadata.
    attachments : Sequence[ProcessedAttachment], optional
        Processed attachments.
    cache : CacheSchema, optional
        Route snapshot used to filter ``docs`` for the index. Without one (or
        with an empty one) every document is indexed.
    route_reporter, section_reporter : IssueReporter, optional
        Issue sinks for unreadable documents and empty declared sections.

    Returns
    -------
    list[OutputDocument]
        Documents in write order; empty when there is nothing to index.
    """
    if not docs:
        logger.info("No documents found for processing")
        return []

    indexed = (
        filter_docs_for_indexing(docs, options, cache)
        if cache is not None and cache.routes
        else list(docs)
    )
    outputs = [
        OutputDocument(
            path=LLMS_TXT_FILENAME,
            content=build_llms_txt_content(
                indexed, options, site, attachments, section_reporter=section_reporter
            ),
        )
    ]
    logger.info(
        "Generated %s with %d documents and %d attachments",
        LLMS_TXT_FILENAME,
        len(indexed),
        len(attachments),
    )
    if get_llms_txt_config(options).enable_llms_full_txt:
        outputs.append(
            OutputDocument(
                path=LLMS_FULL_TXT_FILENAME,
                content=build_llms_full_txt_content(
                    docs, options, site, attachments, route_reporter=route_reporter
                ),
            )
        )
        logger.info("Generated %s", LLMS_FULL_TXT_FILENAME)
    return outputs


class LlmsIndexBuilder:
    """Generate every llms-index artifact for one site build."""

    def __init__(
        self,
        options: PluginOptions,
        entries: cabc.Sequence[CatalogueEntry],
        *,
        site: SiteInfo,
        site_dir: Path,
        out_dir: Path,
    ) -> None:
        """Initialize the builder.

        Parameters
        ----------
        options : PluginOptions
            Validated options (see :func:`llms_index.config.load_plugin_options`).
        entries : Sequence[CatalogueEntry]
            Route catalogue exported by the site generator.
        site : SiteInfo
            Site URL, base URL and title.
        site_dir : Path
            Directory attachment sources are resolved against.
        out_dir : Path
            Build output directory receiving every artifact.
        """
        self.options = options
        self.entries = entries
        self.site = site
        self.site_dir = site_dir
        self.out_dir = out_dir
        self.route_reporter = IssueReporter("route", options.on_route_error)
        self.section_reporter = IssueReporter("section", options.on_section_error)

    @property
    def cache_path(self) -> Path:
        """Return where the route cache is written."""
        return self.out_dir / CACHE_FILENAME

    def build(self) -> tuple[list[OutputDocument], CacheSchema]:
        """Classify, filter, and render without writing index documents.

        Attachments are still copied when processed. Returns the rendered
        documents and the cache describing every processed route.
        """
        union = get_union_include_config(self.options)
        processed = [
            entry
            for entry in self.entries
            if should_include_route(entry.to_route(), union)
        ]
        logger.debug(
            "Processing %d of %d catalogued routes", len(processed), len(self.entries)
        )
        cache = build_cache(
            [entry.to_route() for entry in processed],
            self.options,
            {
                entry.path: entry.markdown_file
                for entry in processed
                if entry.markdown_file
            },
        )
        attachments = AttachmentProcessor(
            self.site_dir, out_dir=self.out_dir, reporter=self.route_reporter
        ).process(collect_all_attachments(self.options))
        documents = generate_output_documents(
            [entry.to_doc_info() for entry in processed],
            self.options,
            self.site,
            attachments,
            cache=cache,
            route_reporter=self.route_reporter,
            section_reporter=self.section_reporter,
        )
        return documents, cache

    def run(self) -> list[Path]:
        """Write the index documents, cache, and copy-button data.

        Returns
        -------
        list[Path]
            Paths written, in write order.

        Raises
        ------
        LlmsProcessingError
            When a reporter configured as ``throw`` collected issues. Files are
            written before the error is raised.
        """
        documents, cache = self.build()
        self.out_dir.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []
        for document in documents:
            target = self.out_dir / document.path
            target.write_text(document.content, encoding="utf-8")
            logger.debug("Wrote %s (%d bytes)", target, document.byte_length)
            written.append(target)

        self.cache_path.write_bytes(encode_cache(cache))
        written.append(self.cache_path)

        settings = build_copy_button_settings(self.options)
        if settings is not None:
            copy_path = self.out_dir / COPY_CONTENT_FILENAME
            data = build_copy_content_data(cache.routes, self.options)
            copy_path.write_bytes(encode_copy_content_data(data))
            settings_path = self.out_dir / COPY_BUTTON_SETTINGS_FILENAME
            settings_path.write_bytes(encode_copy_button_settings(settings))
            written.extend((copy_path, settings_path))

        for reporter in (self.route_reporter, self.section_reporter):
            reporter.summarize()
        for reporter in (self.route_reporter, self.section_reporter):
            reporter.raise_if_fatal()
        return written


__all__ = ["LlmsIndexBuilder", "filter_docs_for_indexing", "generate_output_documents"]
