"""Exit-code policy — the gate contract consumed by hooks and CI.

Code  Meaning
----  -------
  0   Clean — no findings
  1   Warnings — at least one warning, no critical findings
  2   Critical — at least one critical finding
  3   Error — invocation error, aborted scan or internal failure

This module is a governed contract surface: automation depends on these
exact values.
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from stub_audit.model.scan_result import ScanSummary


class ExitCode(IntEnum):
    CLEAN = 0
    WARNINGS = 1
    CRITICAL = 2
    ERROR = 3


def exit_code_for_counts(critical_count: int, warning_count: int) -> ExitCode:
    """Map severity counts to a gate decision.

    Monotonic: a worse severity never produces a lower code.
    """
    if critical_count > 0:
        return ExitCode.CRITICAL
    if warning_count > 0:
        return ExitCode.WARNINGS
    return ExitCode.CLEAN


def exit_code_for_summary(summary: ScanSummary) -> ExitCode:
    """Exit code as a pure function of a ``ScanSummary``."""
    return exit_code_for_counts(summary.critical_count, summary.warning_count)
