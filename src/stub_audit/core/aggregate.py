"""Aggregator — the single merge point for all detector output.

Runs after every worker has finished:

1. classify each raw match (``policy.classifier``)
2. deduplicate by ``(file, line, category)``
3. optionally keep only critical findings
4. sort ascending by ``(file, line, category)``
5. tally the summary in one pass

The ordering is a contract: downstream tools diff output across runs.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from stub_audit.model import Category, Severity
from stub_audit.model.finding import Finding, RawMatch
from stub_audit.model.scan_result import ScanResult, ScanSummary
from stub_audit.policy.classifier import classify


def to_finding(rel_path: str, match: RawMatch) -> Finding:
    category, severity = classify(match.category)
    return Finding(
        file=rel_path,
        line=match.line,
        category=category,
        severity=severity,
        snippet=match.snippet,
    )


def merge_findings(
    matches: Iterable[tuple[str, RawMatch]],
    *,
    critical_only: bool = False,
) -> list[Finding]:
    """Classify, deduplicate, filter and sort ``(rel_path, match)`` pairs."""
    unique: dict[tuple[str, int, str], Finding] = {}
    for rel_path, match in matches:
        finding = to_finding(rel_path, match)
        # First match wins; snippets for the same line are identical anyway.
        unique.setdefault(finding.key, finding)

    findings = unique.values()
    if critical_only:
        findings = [f for f in findings if f.severity == Severity.CRITICAL]
    return sorted(findings, key=lambda f: f.key)


def summarize(
    findings: Iterable[Finding],
    *,
    files_scanned: int,
    files_skipped: int,
) -> ScanSummary:
    by_severity: Counter[Severity] = Counter()
    by_category: Counter[str] = Counter()
    total = 0
    for f in findings:
        total += 1
        by_severity[f.severity] += 1
        by_category[f.category.value] += 1
    return ScanSummary(
        total=total,
        critical_count=by_severity[Severity.CRITICAL],
        warning_count=by_severity[Severity.WARNING],
        files_scanned=files_scanned,
        files_skipped=files_skipped,
        by_category={c.value: by_category[c.value] for c in Category},
    )


def build_result(
    matches: Iterable[tuple[str, RawMatch]],
    *,
    files_scanned: int,
    files_skipped: int,
    critical_only: bool = False,
) -> ScanResult:
    """Assemble the final, immutable ``ScanResult``."""
    findings = merge_findings(matches, critical_only=critical_only)
    summary = summarize(
        findings,
        files_scanned=files_scanned,
        files_skipped=files_skipped,
    )
    return ScanResult(findings=tuple(findings), summary=summary)
