"""Tests for loading and validating ``llms-index.yaml``.

The loader parses YAML with ruamel.yaml, maps snake_case keys onto the option
dataclasses, and collects every shape problem before raising a single
:class:`~llms_index.errors.LlmsConfigError`. Section validation then checks id
syntax, glob syntax and id uniqueness across the whole nested forest.
"""

from __future__ import annotations

import typing as typ
from textwrap import dedent

import pytest

from llms_index.config import (
    CopyPageContentOptions,
    LlmsConfigError,
    SectionDefinition,
    build_plugin_options,
    load_plugin_options,
    validate_sections,
)

if typ.TYPE_CHECKING:
    from pathlib import Path


def _write(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "llms-index.yaml"
    path.write_text(dedent(body).strip() + "\n", encoding="utf-8")
    return path


def test_load_full_configuration(tmp_path: Path) -> None:
    """A representative file populates every option group."""
    path = _write(
        tmp_path,
        """
        log_level: 2
        on_section_error: throw
        markdown:
          include_blog: true
          exclude_routes: ["/docs/private/**"]
          route_rules:
            - route: /api/**
              content_selectors: [".api-content"]
        llms_txt:
          enable_llms_full_txt: true
          site_title: Example Docs
          auto_section_depth: 2
          sections:
            - id: guides
              name: Guides
              position: 1
              routes:
                - route: /guides/**
              subsections:
                - id: advanced
                  name: Advanced
                  routes:
                    - route: /guides/advanced/**
              optional_links:
                - title: Forum
                  url: https://forum.example.com
          attachments:
            - source: specs/openapi.yaml
              title: API Spec
        ui:
          copy_page_content:
            button_label: Copy
            display:
              exclude_routes: ["/blog/**"]
            actions:
              ai:
                claude: false
        """,
    )
    options = load_plugin_options(path)

    assert options.log_level == 2, f"expected log_level 2, got {options.log_level!r}"
    assert options.on_section_error == "throw"
    assert options.on_route_error == "warn", "expected default route severity"
    assert options.markdown is not None
    assert options.markdown.include_blog is True
    assert options.markdown.route_rules[0].content_selectors == (".api-content",)
    assert options.llms_txt is not None
    assert options.llms_txt.auto_section_depth == 2
    guides = options.llms_txt.sections[0]
    assert guides.subsections[0].id == "advanced", (
        f"expected nested subsection 'advanced', got {guides.subsections!r}"
    )
    assert guides.optional_links[0].url == "https://forum.example.com"
    assert options.llms_txt.attachments[0].include_in_full_txt is True
    assert options.ui is not None
    copy_options = options.ui.copy_page_content
    assert isinstance(copy_options, CopyPageContentOptions)
    assert copy_options.button_label == "Copy"
    assert copy_options.display_exclude_routes == ["/blog/**"]
    assert copy_options.claude_prompt is None, "expected claude action disabled"
    assert copy_options.chatgpt_prompt, "expected chatgpt action kept by default"


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    """An empty document is a valid configuration."""
    options = load_plugin_options(_write(tmp_path, ""))
    assert options.markdown is None and options.llms_txt is None, (
        "expected missing groups to stay unset"
    )


def test_missing_file_raises(tmp_path: Path) -> None:
    """A missing path is reported rather than silently defaulted."""
    with pytest.raises(FileNotFoundError):
        load_plugin_options(tmp_path / "missing.yaml")


def test_non_mapping_document_raises(tmp_path: Path) -> None:
    """The top-level YAML value must be a mapping."""
    with pytest.raises(LlmsConfigError, match="must be a mapping"):
        load_plugin_options(_write(tmp_path, "- a\n- b"))


def test_all_shape_errors_are_reported_together() -> None:
    """Every invalid option appears in a single error."""
    with pytest.raises(LlmsConfigError) as excinfo:
        build_plugin_options(
            {
                "log_level": 9,
                "surprise": True,
                "markdown": {"include_blog": "yes"},
                "llms_txt": {
                    "auto_section_depth": 7,
                    "optional_links": [{"title": "Local", "url": "/docs/local"}],
                },
            }
        )
    issues = excinfo.value.issues
    expected_fragments = [
        "options.log_level",
        "unknown option 'surprise'",
        "markdown.include_blog",
        "llms_txt.auto_section_depth",
        "optional links must be external URLs",
    ]
    for fragment in expected_fragments:
        assert any(fragment in issue for issue in issues), (
            f"expected an issue mentioning {fragment!r}, got {issues!r}"
        )


def test_malformed_exclude_pattern_is_a_config_error() -> None:
    """Exclusion globs are validated when options are built."""
    with pytest.raises(LlmsConfigError, match="llms_txt.exclude_routes"):
        build_plugin_options({"llms_txt": {"exclude_routes": ["docs/**"]}})


def test_duplicate_section_ids_list_every_duplicate() -> None:
    """Duplicates anywhere in the forest are fatal and all reported."""
    sections = [
        SectionDefinition(
            id="api",
            name="API",
            subsections=(SectionDefinition(id="guides", name="Nested"),),
        ),
        SectionDefinition(id="guides", name="Guides"),
        SectionDefinition(id="api", name="API again"),
    ]
    with pytest.raises(LlmsConfigError) as excinfo:
        validate_sections(sections)
    issues = excinfo.value.issues
    assert any("'api'" in issue for issue in issues), f"missing 'api' in {issues!r}"
    assert any("'guides'" in issue for issue in issues), (
        f"missing 'guides' in {issues!r}"
    )


def test_section_ids_must_be_kebab_case() -> None:
    """Section ids are restricted to lowercase letters, digits and hyphens."""
    with pytest.raises(LlmsConfigError, match="kebab-case"):
        build_plugin_options(
            {"llms_txt": {"sections": [{"id": "Bad_Id", "name": "Bad"}]}}
        )


@pytest.mark.parametrize(
    ("payload", "location"),
    [
        ({"llms_txt": {"auto_section_depth": 2.0}}, "llms_txt.auto_section_depth"),
        ({"log_level": 1.0}, "options.log_level"),
        ({"llms_txt": {"auto_section_depth": True}}, "llms_txt.auto_section_depth"),
    ],
)
def test_integer_choices_reject_other_numeric_types(
    payload: dict[str, typ.Any], location: str
) -> None:
    """Values equal to an allowed integer but of another type are rejected."""
    with pytest.raises(LlmsConfigError) as excinfo:
        build_plugin_options(payload)
    issues = excinfo.value.issues
    assert any(location in issue for issue in issues), (
        f"expected an issue mentioning {location!r}, got {issues!r}"
    )
