"""Tests for reading, naming and copying attachment files."""

from __future__ import annotations

import logging
import typing as typ

import pytest

from llms_index.attachments import AttachmentProcessor, attachments_to_docs
from llms_index.config import AttachmentFile, AttachmentRequest
from llms_index.reporting import IssueReporter

if typ.TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """Return a site directory with three files sharing the stem ``guide``."""
    root = tmp_path / "site"
    for folder in ("a", "b", "c"):
        (root / folder).mkdir(parents=True)
        (root / folder / "guide.md").write_text(f"guide {folder}", encoding="utf-8")
    return root


def _request(source: str, title: str, **kwargs: typ.Any) -> AttachmentRequest:
    return AttachmentRequest(AttachmentFile(source, title, **kwargs), "attachments")


def test_colliding_names_get_numbered_suffixes(
    site_dir: Path, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Three ``guide`` files become guide, guide-2 and guide-3."""
    out_dir = tmp_path / "build"
    processor = AttachmentProcessor(site_dir, out_dir=out_dir)
    with caplog.at_level(logging.WARNING, logger="llms_index.attachments"):
        processed = processor.process(
            [
                _request("a/guide.md", "Guide A"),
                _request("b/guide.md", "Guide B"),
                _request("c/guide.md", "Guide C"),
            ]
        )
    urls = [item.url for item in processed]
    assert urls == [
        "/assets/llms-txt/attachments/guide.md",
        "/assets/llms-txt/attachments/guide-2.md",
        "/assets/llms-txt/attachments/guide-3.md",
    ], f"unexpected attachment urls {urls!r}"
    collisions = [r for r in caplog.records if "collision" in r.getMessage()]
    assert len(collisions) == 2, (
        f"expected one warning per colliding attachment, got {len(collisions)}"
    )
    copied = out_dir / "assets" / "llms-txt" / "attachments" / "guide-3.md"
    assert copied.read_text(encoding="utf-8") == "guide c"


def test_missing_file_is_reported_and_skipped(site_dir: Path) -> None:
    """A missing source does not stop later attachments."""
    reporter = IssueReporter("route")
    processed = AttachmentProcessor(site_dir, reporter=reporter).process(
        [_request("nope.md", "Missing"), _request("a/guide.md", "Guide")]
    )
    assert [item.title for item in processed] == ["Guide"]
    assert reporter.issues == ["Attachment file not found: nope.md"]


def test_custom_file_name_and_synthetic_docs(site_dir: Path) -> None:
    """``file_name`` overrides the stem; docs are pinned to their section."""
    processed = AttachmentProcessor(site_dir).process(
        [
            AttachmentRequest(
                AttachmentFile("a/guide.md", "Setup  Guide", file_name="setup"),
                "api",
            )
        ]
    )
    assert processed[0].url.endswith("/setup.md")
    assert processed[0].content == "guide a"
    [doc] = attachments_to_docs(processed)
    assert doc.route_path == "/api/setup-guide", (
        f"unexpected synthetic route {doc.route_path!r}"
    )
    assert doc.section_id == "api"
    assert doc.markdown_file == "/assets/llms-txt/attachments/setup.md"
