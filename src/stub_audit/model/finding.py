"""Finding — one detected incompleteness marker."""

from __future__ import annotations

from dataclasses import dataclass, field

from . import Category, Severity


@dataclass(frozen=True, slots=True)
class RawMatch:
    """Unclassified detector output for one line of one file.

    The file is not known to detectors; the runner attaches it.
    """

    line: int
    category: Category
    snippet: str
    detector: str = ""


@dataclass(frozen=True, slots=True)
class Finding:
    """Immutable, classified finding.

    Identity is ``(file, line, category)``.  ``severity`` always follows
    from ``category`` and ``snippet`` is display-only, so neither takes part
    in equality or hashing.
    """

    file: str
    line: int
    category: Category
    severity: Severity = field(compare=False)
    snippet: str = field(default="", compare=False)

    @property
    def key(self) -> tuple[str, int, str]:
        """Identity and sort key."""
        return (self.file, self.line, self.category.value)

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "line": self.line,
            "category": self.category.value,
            "severity": self.severity.value,
            "snippet": self.snippet,
        }


def clean_snippet(text: str, limit: int = 200) -> str:
    """Trim a source line for display."""
    s = text.strip()
    return s if len(s) <= limit else s[: limit - 1] + "…"
