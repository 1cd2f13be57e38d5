"""Error taxonomy.

Per-file read failures and detector anomalies are *not* exceptions at this
level: the walker and runner recover from them locally.  Everything here
aborts the invocation and maps to ``ExitCode.ERROR``.
"""

from __future__ import annotations


class StubAuditError(RuntimeError):
    """Base class for fatal scanner errors."""


class InvocationError(StubAuditError):
    """Bad scan root, malformed option or unreadable configuration."""


class ScanAbortedError(StubAuditError):
    """The scan was stopped before every file was processed.

    Raised instead of returning partial results, which could otherwise be
    mistaken for a passing gate.
    """


class UnknownCategoryError(StubAuditError):
    """A match carried a category the classifier does not know."""

    def __init__(self, category: object) -> None:
        self.category = category
        super().__init__(f"unrecognized finding category: {category!r}")
