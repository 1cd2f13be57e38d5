"""Structured reporter — one self-describing JSON record per scan."""

from __future__ import annotations

from stub_audit.contracts.load import validate_instance
from stub_audit.model.scan_result import ScanResult
from stub_audit.utils.json_norm import stable_json_dumps

SCHEMA_NAME = "scan_result.schema.json"


def render_json(result: ScanResult, *, indent: int | None = 2) -> str:
    """Render *result* as canonical JSON.

    The record is validated against the bundled schema first; a violation
    is an internal error and raises ``jsonschema.ValidationError``.
    """
    record = result.to_dict()
    validate_instance(record, SCHEMA_NAME)
    return stable_json_dumps(record, indent=indent)
