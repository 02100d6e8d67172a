"""Collect per-item issues and report them with a configured severity.

A failing route, attachment, or section must not abort the batch. Issues are
logged as they happen according to ``ignore``/``log``/``warn``/``throw`` and,
for ``throw``, raised together once the batch has finished.
"""

from __future__ import annotations

import dataclasses as dc
import logging

from .errors import LlmsProcessingError

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class IssueReporter:
    """Record issues of one kind (routes or sections) during a batch."""

    kind: str
    severity: str = "warn"
    issues: list[str] = dc.field(default_factory=list)

    def report(self, message: str) -> None:
        """Record ``message`` and log it according to the severity."""
        self.issues.append(message)
        match self.severity:
            case "ignore":
                return
            case "log":
                logger.info("%s issue: %s", self.kind, message)
            case "warn":
                logger.warning("%s issue: %s", self.kind, message)
            case _:
                logger.error("%s issue: %s", self.kind, message)

    def raise_if_fatal(self) -> None:
        """Raise once for every collected issue when severity is ``throw``."""
        if self.severity == "throw" and self.issues:
            msg = f"{len(self.issues)} {self.kind} issue(s) encountered"
            raise LlmsProcessingError(msg, self.issues)

    def summarize(self) -> None:
        """Log a one-line count of the collected issues."""
        if self.issues and self.severity != "ignore":
            logger.info("%d %s issue(s) reported", len(self.issues), self.kind)


__all__ = ["IssueReporter"]
