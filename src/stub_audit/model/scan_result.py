"""ScanResult — the immutable, schema-aligned scan artifact."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from stub_audit import __version__
from stub_audit.model import Category
from stub_audit.model.finding import Finding
from stub_audit.policy.exit_codes import ExitCode, exit_code_for_summary

SCHEMA_VERSION = "scan_result_v1"


@dataclass(frozen=True, slots=True)
class ScanSummary:
    """Counts derived from the final finding set."""

    total: int = 0
    critical_count: int = 0
    warning_count: int = 0
    files_scanned: int = 0
    files_skipped: int = 0
    by_category: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "critical_count": self.critical_count,
            "warning_count": self.warning_count,
            "files_scanned": self.files_scanned,
            "files_skipped": self.files_skipped,
            "by_category": {c.value: self.by_category.get(c.value, 0) for c in Category},
        }


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Assembled scan result matching ``scan_result.schema.json``.

    Constructed by ``core.aggregate.build_result`` once findings are final.
    ``exit_code`` is derived from ``summary`` at construction and never
    changes afterwards.
    """

    findings: tuple[Finding, ...] = ()
    summary: ScanSummary = field(default_factory=ScanSummary)
    exit_code: ExitCode = field(init=False)

    def __post_init__(self) -> None:
        if self.summary.total != len(self.findings):
            raise ValueError(
                f"summary.total={self.summary.total} but {len(self.findings)} findings"
            )
        object.__setattr__(self, "exit_code", exit_code_for_summary(self.summary))

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Produce the structured record handed to the JSON reporter."""
        return {
            "schema_version": SCHEMA_VERSION,
            "tool_version": __version__,
            "exit_code": int(self.exit_code),
            "summary": self.summary.to_dict(),
            "findings": [f.to_dict() for f in self.findings],
        }
