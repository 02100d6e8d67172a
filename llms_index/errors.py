"""Exception types raised by llms_index."""

from __future__ import annotations

import collections.abc as cabc


class LlmsConfigError(ValueError):
    """Raised when the configuration is invalid or internally inconsistent.

    Parameters
    ----------
    message : str
        Summary of the failure.
    issues : Iterable[str], optional
        Individual problems discovered during validation. Every issue is
        appended to the rendered message so operators see the full list.
    """

    def __init__(self, message: str, issues: cabc.Iterable[str] = ()) -> None:
        self.issues = tuple(issues)
        detail = "".join(f"\n  - {issue}" for issue in self.issues)
        super().__init__(f"{message}{detail}")


class LlmsProcessingError(RuntimeError):
    """Raised after a batch when per-item issues are configured as fatal."""

    def __init__(self, message: str, issues: cabc.Iterable[str] = ()) -> None:
        self.issues = tuple(issues)
        detail = "".join(f"\n  - {issue}" for issue in self.issues)
        super().__init__(f"{message}{detail}")


__all__ = ["LlmsConfigError", "LlmsProcessingError"]
