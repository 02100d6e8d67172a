"""End-to-end tests for ``llms.txt`` and ``llms-full.txt`` assembly.

These tests drive the pure generation layer with in-memory documents and
options, checking the exact text produced for the header, the root document
link, the rendered section tree, optional links, and the inline bodies of the
full variant.
"""

from __future__ import annotations

import typing as typ

from llms_index.cache import CachedRouteInfo, CacheSchema
from llms_index.catalogue import CatalogueEntry
from llms_index.config import (
    LlmsTxtOptions,
    MarkdownOptions,
    OptionalLink,
    PluginOptions,
    SectionDefinition,
    SectionRoute,
)
from llms_index.generation import (
    LlmsIndexBuilder,
    build_llms_full_txt_content,
    build_llms_txt_content,
    filter_docs_for_indexing,
    generate_output_documents,
)
from llms_index.models import ContentType, DocInfo, ProcessedAttachment, SiteInfo
from llms_index.reporting import IssueReporter

if typ.TYPE_CHECKING:
    from pathlib import Path


def test_minimal_index_excludes_blog_by_default() -> None:
    """One docs route and one blog route yield a one-entry index."""
    docs = [DocInfo("/docs/x", "X"), DocInfo("/blog/y", "Y")]
    cache = CacheSchema(
        routes=[
            CachedRouteInfo("/docs/x", ContentType.DOCS),
            CachedRouteInfo("/blog/y", ContentType.BLOG),
        ]
    )
    indexed = filter_docs_for_indexing(docs, PluginOptions(), cache)
    content = build_llms_txt_content(indexed, PluginOptions(), SiteInfo(title="Site"))
    assert content == "# Site\n\n## Docs\n\n- [X](/docs/x.md)\n", (
        f"unexpected llms.txt {content!r}"
    )


def test_header_description_root_link_and_optional_links() -> None:
    """The header, root link and optional section surround the tree."""
    options = PluginOptions(
        llms_txt=LlmsTxtOptions(
            site_title="Example",
            site_description="Everything about Example.",
            optional_links=[
                OptionalLink("Forum", "https://forum.example.com", "Community help")
            ],
            sections=[
                SectionDefinition(
                    id="api",
                    name="API",
                    routes=(SectionRoute("/api/**"),),
                    optional_links=(OptionalLink("Status", "https://status.dev"),),
                )
            ],
        )
    )
    docs = [
        DocInfo("/", "Home", description="Landing page"),
        DocInfo("/api/auth", "Auth"),
    ]
    content = build_llms_txt_content(docs, options, SiteInfo(title="Ignored"))
    assert content == (
        "# Example\n\n"
        "> Everything about Example.\n\n"
        "- [Home](/index.md): Landing page\n\n"
        "## API\n\n"
        "- [Auth](/api/auth.md)\n"
        "\n## Optional\n\n"
        "- [Forum](https://forum.example.com): Community help\n"
        "- [Status](https://status.dev)\n"
    ), f"unexpected llms.txt {content!r}"


def test_title_falls_back_to_root_doc_then_default() -> None:
    """Without configured titles the root doc and then a default are used."""
    with_root = build_llms_txt_content(
        [DocInfo("/", "Home")], PluginOptions(), SiteInfo()
    )
    assert with_root.startswith("# Home\n\n")
    without = build_llms_txt_content(
        [DocInfo("/docs/a", "A")], PluginOptions(), SiteInfo()
    )
    assert without.startswith("# Documentation\n\n")


def test_absolute_links_with_base_url() -> None:
    """Disabling relative paths produces absolute links under the base URL."""
    options = PluginOptions(markdown=MarkdownOptions(relative_paths=False))
    site = SiteInfo(url="https://example.com", base_url="/project/", title="Site")
    content = build_llms_txt_content([DocInfo("/project/docs/a", "A")], options, site)
    assert "- [A](https://example.com/project/docs/a.md)" in content, content


def test_attachments_fold_into_sections() -> None:
    """Attachments appear in their section with their copied URL."""
    attachment = ProcessedAttachment(
        title="API Spec",
        section_id="attachments",
        url="/assets/llms-txt/attachments/openapi.md",
        content="openapi: 3.1.0",
        source_path="specs/openapi.yaml",
    )
    content = build_llms_txt_content(
        [DocInfo("/docs/a", "A")], PluginOptions(), SiteInfo(title="S"), [attachment]
    )
    assert content.endswith(
        "## Attachments\n\n- [API Spec](/assets/llms-txt/attachments/openapi.md)\n"
    ), f"unexpected llms.txt {content!r}"


def test_full_text_inlines_bodies_and_skips_missing_content() -> None:
    """Every body is inlined in tree order; empty bodies are reported."""
    options = PluginOptions(llms_txt=LlmsTxtOptions(enable_llms_full_txt=True))
    docs = [
        DocInfo("/", "Home", content="Welcome."),
        DocInfo("/docs/a", "A", description="About A", content="# A\n\nBody A."),
        DocInfo("/docs/b", "B"),
    ]
    skipped = ProcessedAttachment(
        title="Big",
        section_id="attachments",
        url="/assets/llms-txt/attachments/big.md",
        content="huge",
        source_path="big.md",
        include_in_full_txt=False,
    )
    reporter = IssueReporter("route")
    content = build_llms_full_txt_content(
        docs, options, SiteInfo(title="Site"), [skipped], route_reporter=reporter
    )
    assert content == (
        "# Site\n\n---\n\n"
        "## Home\n\nSource: /index.md\n\nWelcome.\n\n---\n\n"
        "## A\n\n> About A\n\nSource: /docs/a.md\n\n# A\n\nBody A.\n"
    ), f"unexpected llms-full.txt {content!r}"
    assert reporter.issues == ["No content available for /docs/b; skipped."]


def test_generate_output_documents() -> None:
    """Both documents are produced when the full variant is enabled."""
    options = PluginOptions(llms_txt=LlmsTxtOptions(enable_llms_full_txt=True))
    outputs = generate_output_documents(
        [DocInfo("/docs/a", "A", content="Body")], options, SiteInfo(title="S")
    )
    assert [doc.path for doc in outputs] == ["llms.txt", "llms-full.txt"]
    assert outputs[0].byte_length == len(outputs[0].content.encode("utf-8"))
    assert generate_output_documents([], options, SiteInfo()) == [], (
        "expected no outputs without documents"
    )


def test_uncached_docs_pass_unless_pattern_excluded() -> None:
    """Documents missing from the cache are judged only by patterns."""
    options = PluginOptions(llms_txt=LlmsTxtOptions(exclude_routes=["/drafts/**"]))
    cache = CacheSchema(routes=[CachedRouteInfo("/docs/a", ContentType.DOCS)])
    docs = [
        DocInfo("/docs/a", "A"),
        DocInfo("/extra/b", "B"),
        DocInfo("/drafts/c", "C"),
    ]
    kept = filter_docs_for_indexing(docs, options, cache)
    assert [doc.route_path for doc in kept] == ["/docs/a", "/extra/b"]


def test_optional_heading_is_followed_by_blank_line() -> None:
    """``## Optional`` is spaced like every other heading in the index."""
    options = PluginOptions(
        llms_txt=LlmsTxtOptions(optional_links=[OptionalLink("L", "https://l.dev")])
    )
    content = build_llms_txt_content(
        [DocInfo("/docs/a", "A")], options, SiteInfo(title="S")
    )
    assert content == (
        "# S\n\n## Docs\n\n- [A](/docs/a.md)\n\n## Optional\n\n- [L](https://l.dev)\n"
    ), f"unexpected llms.txt {content!r}"


def test_trailing_slash_index_route_is_the_root_doc() -> None:
    """A root document at ``/index/`` is linked under the header."""
    docs = [DocInfo("/index/", "Welcome"), DocInfo("/docs/a", "A")]
    content = build_llms_txt_content(docs, PluginOptions(), SiteInfo())
    assert content == (
        "# Welcome\n\n- [Welcome](/index.md)\n\n## Docs\n\n- [A](/docs/a.md)\n"
    ), f"unexpected llms.txt {content!r}"


def test_markdown_only_exclusion_keeps_route_in_index(tmp_path: Path) -> None:
    """Excluding a route from markdown files leaves it in ``llms.txt``."""
    docs_plugin = "docusaurus-plugin-content-docs"
    options = PluginOptions(
        markdown=MarkdownOptions(exclude_routes=["/docs/private/**"])
    )
    entries = [
        CatalogueEntry("/docs/a", plugin=docs_plugin, title="A"),
        CatalogueEntry("/docs/private/b", plugin=docs_plugin, title="B"),
    ]
    builder = LlmsIndexBuilder(
        options,
        entries,
        site=SiteInfo(title="Site"),
        site_dir=tmp_path,
        out_dir=tmp_path / "build",
    )
    documents, cache = builder.build()
    assert [route.path for route in cache.routes] == ["/docs/a", "/docs/private/b"]
    assert "- [B](/docs/private/b.md)" in documents[0].content, (
        f"expected private route indexed, got {documents[0].content!r}"
    )
