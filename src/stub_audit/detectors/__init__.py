"""Detectors produce raw matches from one file's text.

Every detector exposes ``id``, ``category`` and
``detect(text, language) -> list[RawMatch]``.  Detectors are stateless and
independent: the runner calls each one per file and isolates failures, so a
detector that cannot make sense of a file should simply return nothing.

Built-in detectors:
    - TodoMarkerDetector: TODO / FIXME / XXX / HACK markers
    - NotImplementedDetector: raised or thrown "not implemented" errors
    - EmptyBodyDetector: functions with an empty or no-op body
    - PlaceholderDetector: placeholder comments and returns
"""

from __future__ import annotations

from typing import Protocol

from stub_audit.detectors.empty_body import EmptyBodyDetector
from stub_audit.detectors.exceptions import NotImplementedDetector
from stub_audit.detectors.markers import TodoMarkerDetector
from stub_audit.detectors.placeholders import PlaceholderDetector
from stub_audit.model import Category, Language
from stub_audit.model.finding import RawMatch


class Detector(Protocol):
    """Scans one file's text for one category of marker."""

    id: str
    category: Category

    def detect(self, text: str, language: Language) -> list[RawMatch]:
        """Return zero or more matches for ``self.category``."""
        ...


DEFAULT_DETECTORS = (
    TodoMarkerDetector,
    NotImplementedDetector,
    EmptyBodyDetector,
    PlaceholderDetector,
)


def default_detectors() -> list[Detector]:
    """Fresh instances of the built-in detector set."""
    return [cls() for cls in DEFAULT_DETECTORS]


__all__ = [
    "Detector",
    "DEFAULT_DETECTORS",
    "default_detectors",
    "EmptyBodyDetector",
    "NotImplementedDetector",
    "PlaceholderDetector",
    "TodoMarkerDetector",
]
