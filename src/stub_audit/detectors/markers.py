"""TODO-marker detector — flags known-incomplete work left in comments."""

from __future__ import annotations

import re

from stub_audit.detectors.text import scan_lines
from stub_audit.model import Category, Language
from stub_audit.model.finding import RawMatch

# Keyword is case-sensitive and must stand alone; the colon is optional.
MARKER_RE = re.compile(r"\b(?:TODO|FIXME|XXX|HACK)\b:?")


class TodoMarkerDetector:
    """Finds ``TODO``/``FIXME``/``XXX``/``HACK`` markers in any language."""

    id: str = "todo_marker"
    category: Category = Category.TODO_MARKER

    def detect(self, text: str, language: Language) -> list[RawMatch]:
        return scan_lines(text, (MARKER_RE,), category=self.category, detector=self.id)
