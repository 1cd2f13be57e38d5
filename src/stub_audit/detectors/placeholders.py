"""Placeholder detector — curated idioms for stand-in code.

Each language family has its own comment syntax; the generic fallback
accepts both.  All idioms are matched case-insensitively.
"""

from __future__ import annotations

import re

from stub_audit.detectors.text import scan_lines
from stub_audit.model import Category, Language
from stub_audit.model.finding import RawMatch

_WORDS = r"(?:todo|fixme|stub|placeholder|dummy)"

_HASH_COMMENT = (
    # # placeholder
    re.compile(r"#\s*placeholder\b", re.IGNORECASE),
    # return None  # TODO
    re.compile(rf"\breturn\b[^#\n]{{0,200}}#\s*{_WORDS}\b", re.IGNORECASE),
    # pass  # TODO / ...  # stub
    re.compile(rf"^\s*(?:pass|\.\.\.)\s*#\s*{_WORDS}\b", re.IGNORECASE),
    # # stub implementation
    re.compile(r"#\s*(?:stub|dummy|fake)\s+(?:implementation|impl)\b", re.IGNORECASE),
)

_SLASH_COMMENT = (
    # // placeholder, /* placeholder */
    re.compile(r"(?://|/\*)\s*placeholder\b", re.IGNORECASE),
    # return null // todo
    re.compile(rf"\breturn\b[^/\n]{{0,200}}(?://|/\*)\s*{_WORDS}\b", re.IGNORECASE),
    # // stub implementation
    re.compile(
        r"(?://|/\*)\s*(?:stub|dummy|fake)\s+(?:implementation|impl)\b", re.IGNORECASE
    ),
)

PATTERNS_BY_LANGUAGE = {
    Language.PYTHON: _HASH_COMMENT,
    Language.JAVASCRIPT: _SLASH_COMMENT,
    Language.GENERIC: _HASH_COMMENT + _SLASH_COMMENT,
}


class PlaceholderDetector:
    """Finds placeholder comments and placeholder returns."""

    id: str = "placeholder"
    category: Category = Category.PLACEHOLDER

    def detect(self, text: str, language: Language) -> list[RawMatch]:
        patterns = PATTERNS_BY_LANGUAGE.get(language, PATTERNS_BY_LANGUAGE[Language.GENERIC])
        return scan_lines(text, patterns, category=self.category, detector=self.id)
