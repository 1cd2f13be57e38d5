"""Exit-code contract — stable gate semantics.

Code  Meaning
----  -------
  0   Clean — no findings
  1   Warnings only
  2   At least one critical finding
  3   Error — never produced from counts
"""

from __future__ import annotations

import pytest

from stub_audit.model.scan_result import ScanSummary
from stub_audit.policy.exit_codes import ExitCode, exit_code_for_counts, exit_code_for_summary


def test_exit_code_values_are_stable():
    assert [int(c) for c in ExitCode] == [0, 1, 2, 3]
    assert ExitCode.CLEAN == 0
    assert ExitCode.WARNINGS == 1
    assert ExitCode.CRITICAL == 2
    assert ExitCode.ERROR == 3


@pytest.mark.parametrize(
    "critical, warning, expected",
    [
        (0, 0, ExitCode.CLEAN),
        (0, 1, ExitCode.WARNINGS),
        (0, 50, ExitCode.WARNINGS),
        (1, 0, ExitCode.CRITICAL),
        (1, 50, ExitCode.CRITICAL),
        (7, 0, ExitCode.CRITICAL),
    ],
)
def test_exit_code_for_counts(critical, warning, expected):
    assert exit_code_for_counts(critical, warning) == expected


def test_counts_never_produce_error():
    codes = {exit_code_for_counts(c, w) for c in range(3) for w in range(3)}
    assert ExitCode.ERROR not in codes


def test_monotonic_in_severity():
    """Adding a finding of any severity never lowers the exit code."""
    for c in range(3):
        for w in range(3):
            base = exit_code_for_counts(c, w)
            assert exit_code_for_counts(c + 1, w) >= base
            assert exit_code_for_counts(c, w + 1) >= base


def test_exit_code_for_summary_ignores_file_counts():
    summary = ScanSummary(total=1, critical_count=0, warning_count=1, files_scanned=10, files_skipped=4)
    assert exit_code_for_summary(summary) == ExitCode.WARNINGS
