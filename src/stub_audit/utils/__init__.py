"""Shared utilities for stub_audit."""

from stub_audit.utils.json_norm import stable_json_dumps

__all__ = [
    "stable_json_dumps",
]
