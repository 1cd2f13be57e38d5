"""Reports — render a finished ``ScanResult`` for machines or people.

Both renderers work from the same immutable result and never re-scan.
"""

from __future__ import annotations

from typing import TextIO

from stub_audit.model import OutputFormat
from stub_audit.model.scan_result import ScanResult
from stub_audit.reports.json_report import render_json
from stub_audit.reports.text_report import render_text


def resolve_output_format(requested: OutputFormat | None, stream: TextIO) -> OutputFormat:
    """Explicit choice wins; otherwise text for a terminal and JSON for pipes."""
    if requested is not None:
        return requested
    isatty = getattr(stream, "isatty", None)
    try:
        interactive = bool(isatty and isatty())
    except ValueError:  # closed stream
        interactive = False
    return OutputFormat.TEXT if interactive else OutputFormat.JSON


def render(result: ScanResult, fmt: OutputFormat) -> str:
    """Render *result* in the requested format."""
    if fmt == OutputFormat.TEXT:
        return render_text(result)
    return render_json(result)


__all__ = ["render", "render_json", "render_text", "resolve_output_format"]
