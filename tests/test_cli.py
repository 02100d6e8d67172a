"""Tests for the ``llms-index`` command functions.

The commands are exercised directly (as plain functions) against a temporary
site: a YAML configuration, a route catalogue and an attachment source. The
generated files are then inspected on disk.
"""

from __future__ import annotations

import logging
import typing as typ
from textwrap import dedent

import msgspec.json as msgspec_json
import pytest

from llms_index import cli
from llms_index.errors import LlmsProcessingError

if typ.TYPE_CHECKING:
    from pathlib import Path

    from pytest_mock import MockerFixture

CATALOGUE = [
    {"path": "/", "plugin": "docusaurus-plugin-content-docs", "title": "Home"},
    {
        "path": "/docs/intro",
        "plugin": "docusaurus-plugin-content-docs",
        "title": "Intro",
        "description": "Start here",
        "markdownFile": "docs/intro.md",
        "content": "Intro body.",
    },
    {
        "path": "/blog/news",
        "plugin": "docusaurus-plugin-content-blog",
        "title": "News",
    },
]


@pytest.fixture
def site(tmp_path: Path) -> dict[str, Path]:
    """Create a config, catalogue and attachment under ``tmp_path``."""
    config = tmp_path / "llms-index.yaml"
    config.write_text(
        dedent(
            """
            llms_txt:
              site_title: Example
              enable_llms_full_txt: true
              attachments:
                - source: notes.md
                  title: Release Notes
            ui:
              copy_page_content: true
            """
        ).strip()
        + "\n",
        encoding="utf-8",
    )
    (tmp_path / "notes.md").write_text("All the notes.", encoding="utf-8")
    routes = tmp_path / "routes.json"
    routes.write_bytes(msgspec_json.encode(CATALOGUE))
    return {"config": config, "routes": routes, "out": tmp_path / "build"}


def test_generate_writes_all_artifacts(
    site: dict[str, Path], capsys: pytest.CaptureFixture[str]
) -> None:
    """``generate`` writes the index, full text, cache and copy data."""
    cli.generate(routes=site["routes"], config=site["config"], out_dir=site["out"])
    out_dir = site["out"]

    llms_txt = (out_dir / "llms.txt").read_text(encoding="utf-8")
    assert llms_txt == (
        "# Example\n\n"
        "- [Home](/index.md)\n\n"
        "## Docs\n\n"
        "- [Intro](/docs/intro.md): Start here\n"
        "\n## Attachments\n\n"
        "- [Release Notes](/assets/llms-txt/attachments/notes.md)\n"
    ), f"unexpected llms.txt {llms_txt!r}"
    full = (out_dir / "llms-full.txt").read_text(encoding="utf-8")
    assert "Intro body." in full and "All the notes." in full
    assert (out_dir / "assets/llms-txt/attachments/notes.md").exists()

    cache = msgspec_json.decode((out_dir / ".llms-index-cache.json").read_bytes())
    assert [route["path"] for route in cache["routes"]] == ["/", "/docs/intro"], (
        f"expected the blog route left unprocessed, got {cache['routes']!r}"
    )
    copy_data = msgspec_json.decode(
        (out_dir / "llms-txt-copy-content.json").read_bytes()
    )
    assert copy_data["/docs/intro"]["hasMarkdown"] is True
    settings = msgspec_json.decode(
        (out_dir / "llms-txt-copy-button.json").read_bytes()
    )
    assert settings["buttonLabel"] == "Copy Page", f"unexpected settings {settings!r}"

    printed = capsys.readouterr().out
    assert "llms.txt" in printed and "llms-full.txt" in printed


def test_generate_raises_after_writing_when_errors_are_fatal(
    site: dict[str, Path],
) -> None:
    """``throw`` severity fails the command once the batch is done."""
    site["config"].write_text(
        dedent(
            """
            on_route_error: throw
            llms_txt:
              attachments:
                - source: missing.md
                  title: Missing
            """
        ).strip()
        + "\n",
        encoding="utf-8",
    )
    with pytest.raises(LlmsProcessingError, match="missing.md"):
        cli.generate(routes=site["routes"], config=site["config"], out_dir=site["out"])
    assert (site["out"] / "llms.txt").exists(), "expected outputs written first"


def test_check_cache_reports_drift(
    site: dict[str, Path], capsys: pytest.CaptureFixture[str]
) -> None:
    """``check-cache`` compares the cache with the current configuration."""
    cli.generate(routes=site["routes"], config=site["config"], out_dir=site["out"])
    capsys.readouterr()
    site["config"].write_text(
        "llms_txt:\n  exclude_routes: ['/docs/**']\n", encoding="utf-8"
    )
    cli.check_cache(
        config=site["config"], cache=site["out"] / ".llms-index-cache.json"
    )
    printed = capsys.readouterr().out
    assert "Configuration would exclude 1 route(s)" in printed, printed


def test_configure_logging_maps_levels(mocker: MockerFixture) -> None:
    """``log_level`` values map onto logging levels and are clamped."""
    mocker.patch.object(logging, "basicConfig")
    cli.configure_logging(3)
    assert logging.getLogger("llms_index").level == logging.DEBUG
    cli.configure_logging(9)
    assert logging.getLogger("llms_index").level == logging.DEBUG
    cli.configure_logging(0)
    assert logging.getLogger("llms_index").level == logging.ERROR
    logging.getLogger("llms_index").setLevel(logging.NOTSET)
