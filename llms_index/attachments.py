"""Read attachment files and materialize them as index documents.

Each configured attachment is read once from the site directory, given a
collision-free ``.md`` file name, optionally copied into the build output, and
reported back as a :class:`~llms_index.models.ProcessedAttachment`. A missing
or unreadable file is reported and skipped so the remaining attachments still
make it into the index.

Example
-------
>>> from pathlib import Path
>>> from llms_index.attachments import AttachmentProcessor
>>> processor = AttachmentProcessor(Path("."))  # doctest: +SKIP
>>> processor.process([])  # doctest: +SKIP
[]
"""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ
from pathlib import Path

from ._constants import ATTACHMENTS_URL_PREFIX
from .models import DocInfo, ProcessedAttachment
from .urls import title_slug

if typ.TYPE_CHECKING:
    from .config import AttachmentRequest
    from .reporting import IssueReporter

logger = logging.getLogger(__name__)


def unique_file_name(base_name: str, used: set[str]) -> str:
    """Return ``{base_name}.md`` or the first free ``{base_name}-N.md``.

    The suffix is always computed from ``base_name`` so a third ``guide``
    becomes ``guide-3.md`` rather than ``guide-2-2.md``.

    >>> used = set()
    >>> [unique_file_name("guide", used) for _ in range(3)]
    ['guide.md', 'guide-2.md', 'guide-3.md']
    """
    candidate = f"{base_name}.md"
    suffix = 2
    while candidate in used:
        candidate = f"{base_name}-{suffix}.md"
        suffix += 1
    used.add(candidate)
    return candidate


class AttachmentProcessor:
    """Resolve, read, name, and optionally copy attachment files."""

    def __init__(
        self,
        site_dir: Path,
        *,
        out_dir: Path | None = None,
        reporter: IssueReporter | None = None,
    ) -> None:
        """Initialize the processor.

        Parameters
        ----------
        site_dir : Path
            Directory attachment ``source`` paths are relative to.
        out_dir : Path, optional
            Build output directory. When set, each attachment is copied to
            ``assets/llms-txt/attachments`` beneath it.
        reporter : IssueReporter, optional
            Receives one issue per attachment that could not be processed.
        """
        self.site_dir = site_dir
        self.out_dir = out_dir
        self.reporter = reporter

    @property
    def attachments_dir(self) -> Path | None:
        """Return the directory copies are written to, if copying is enabled."""
        if self.out_dir is None:
            return None
        return self.out_dir / ATTACHMENTS_URL_PREFIX.lstrip("/")

    def process(
        self, attachment_requests: cabc.Iterable[AttachmentRequest]
    ) -> list[ProcessedAttachment]:
        """Process every attachment request in order."""
        processed: list[ProcessedAttachment] = []
        used_names: set[str] = set()
        for request in attachment_requests:
            attachment = request.attachment
            source_path = (self.site_dir / attachment.source).resolve()
            try:
                content = source_path.read_text(encoding="utf-8")
            except FileNotFoundError:
                self._report(f"Attachment file not found: {attachment.source}")
                continue
            except (OSError, UnicodeDecodeError) as exc:
                self._report(f"Failed to read attachment {attachment.source}: {exc}")
                continue

            base_name = attachment.file_name or Path(attachment.source).stem
            file_name = unique_file_name(base_name, used_names)
            if file_name != f"{base_name}.md":
                logger.warning(
                    "Filename collision detected for '%s.md'. Using '%s' instead. "
                    "Consider setting a custom 'file_name' for attachment: %s",
                    base_name,
                    file_name,
                    attachment.title,
                )
            self._copy(file_name, content)
            processed.append(
                ProcessedAttachment(
                    title=attachment.title,
                    description=attachment.description,
                    section_id=request.section_id,
                    url=f"{ATTACHMENTS_URL_PREFIX}/{file_name}",
                    content=content,
                    source_path=attachment.source,
                    include_in_full_txt=attachment.include_in_full_txt,
                )
            )
        return processed

    def _copy(self, file_name: str, content: str) -> None:
        target_dir = self.attachments_dir
        if target_dir is None:
            return
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / file_name).write_text(content, encoding="utf-8")
        logger.debug("Copied attachment to %s", target_dir / file_name)

    def _report(self, message: str) -> None:
        if self.reporter is not None:
            self.reporter.report(message)
        else:
            logger.error(message)


def attachments_to_docs(
    attachments: cabc.Iterable[ProcessedAttachment],
) -> list[DocInfo]:
    """Convert processed attachments into synthetic documents.

    The synthetic route is ``/{section_id}/{slug(title)}`` and the document is
    pinned to its owning section.
    """
    return [
        DocInfo(
            route_path=f"/{attachment.section_id}/{title_slug(attachment.title)}",
            title=attachment.title,
            description=attachment.description,
            markdown_file=attachment.url,
            content=attachment.content,
            section_id=attachment.section_id,
        )
        for attachment in attachments
    ]


__all__ = ["AttachmentProcessor", "attachments_to_docs", "unique_file_name"]
