"""Not-implemented detector — code that raises or throws instead of working."""

from __future__ import annotations

import re

from stub_audit.detectors.text import scan_lines
from stub_audit.model import Category, Language
from stub_audit.model.finding import RawMatch

_PYTHON = (
    # ``raise NotImplemented`` is a common slip for the error class.
    re.compile(r"\braise\s+NotImplemented(?:Error)?\b"),
)

_JAVASCRIPT = (
    # throw new Error("Not implemented yet")
    re.compile(
        r"""\bthrow\s+(?:new\s+)?[\w$.]*\s*\(\s*(['"`])[^'"`]*not\s*implemented""",
        re.IGNORECASE,
    ),
    # throw "not implemented"
    re.compile(r"""\bthrow\s+(['"`])[^'"`]*not\s*implemented""", re.IGNORECASE),
    # throw new NotImplementedError()
    re.compile(r"\bthrow\s+(?:new\s+)?NotImplemented\w*"),
)

_GENERIC = _PYTHON + _JAVASCRIPT + (
    re.compile(r"\b(?:unimplemented|todo)!\s*\("),
    re.compile(r"""\bpanic\s*\(\s*(['"`])[^'"`]*not\s*implemented""", re.IGNORECASE),
)

PATTERNS_BY_LANGUAGE = {
    Language.PYTHON: _PYTHON,
    Language.JAVASCRIPT: _JAVASCRIPT,
    Language.GENERIC: _GENERIC,
}


class NotImplementedDetector:
    """Finds raised ``NotImplementedError`` and thrown "not implemented" errors."""

    id: str = "not_implemented_error"
    category: Category = Category.NOT_IMPLEMENTED_ERROR

    def detect(self, text: str, language: Language) -> list[RawMatch]:
        patterns = PATTERNS_BY_LANGUAGE.get(language, _GENERIC)
        return scan_lines(text, patterns, category=self.category, detector=self.id)
