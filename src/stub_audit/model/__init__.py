"""Enums shared across the walker, detectors and reporters."""

from __future__ import annotations

from enum import Enum


class Category(str, Enum):
    """Kinds of incompleteness marker.

    Declaration order is the display order used by the text reporter.
    """

    NOT_IMPLEMENTED_ERROR = "not_implemented_error"
    EMPTY_BODY = "empty_body"
    PLACEHOLDER = "placeholder"
    TODO_MARKER = "todo_marker"


class Severity(str, Enum):
    """Gate severity — derived from ``Category`` by ``policy.classifier``."""

    CRITICAL = "critical"
    WARNING = "warning"


class Language(str, Enum):
    """Detector language families."""

    PYTHON = "python"
    JAVASCRIPT = "javascript"  # also TypeScript, JSX and TSX
    GENERIC = "generic"


class OutputFormat(str, Enum):
    """Reporter modes."""

    JSON = "json"
    TEXT = "text"
