"""Human-readable reporter — findings grouped by category."""

from __future__ import annotations

from collections import defaultdict

from stub_audit.model import Category
from stub_audit.model.finding import Finding
from stub_audit.model.scan_result import ScanResult
from stub_audit.policy.classifier import SEVERITY_BY_CATEGORY
from stub_audit.policy.exit_codes import ExitCode

_CATEGORY_TITLES = {
    Category.NOT_IMPLEMENTED_ERROR: "Not implemented",
    Category.EMPTY_BODY: "Empty bodies",
    Category.PLACEHOLDER: "Placeholders",
    Category.TODO_MARKER: "TODO markers",
}

_BANNERS = {
    ExitCode.CLEAN: "PASS",
    ExitCode.WARNINGS: "WARN",
    ExitCode.CRITICAL: "FAIL",
}


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def render_text(result: ScanResult) -> str:
    """Render *result* for a terminal."""
    s = result.summary
    lines: list[str] = []

    scanned = f"Scanned {_plural(s.files_scanned, 'file')}"
    if s.files_skipped:
        scanned += f" ({s.files_skipped} skipped)"
    lines.append(scanned)
    lines.append("")

    grouped: dict[Category, list[Finding]] = defaultdict(list)
    for f in result.findings:
        grouped[f.category].append(f)

    for category in Category:
        items = grouped.get(category)
        if not items:
            continue
        severity = SEVERITY_BY_CATEGORY[category].value
        lines.append(f"{_CATEGORY_TITLES[category]} [{severity}] ({len(items)})")
        width = max(len(f"{f.file}:{f.line}") for f in items)
        for f in items:
            loc = f"{f.file}:{f.line}"
            lines.append(f"  {loc.ljust(width)}  {f.snippet}".rstrip())
        lines.append("")

    lines.append(f"Total: {_plural(s.total, 'finding')}")
    banner = _BANNERS.get(result.exit_code, "FAIL")
    if result.exit_code == ExitCode.CLEAN:
        lines.append(f"{banner}: no incomplete code found")
    else:
        lines.append(
            f"{banner}: {s.critical_count} critical, {_plural(s.warning_count, 'warning')}"
        )
    return "\n".join(lines) + "\n"
