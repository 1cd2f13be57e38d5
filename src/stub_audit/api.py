"""
stub_audit.api
==============

Programmatic entrypoint for using stub_audit as a library.

Goals:
  - No argparse / CLI dependencies
  - Same pipeline and the same ``ScanResult`` the CLI reports
  - Deterministic output for identical trees

Non-goals:
  - Owning presentation; callers render results (see ``stub_audit.reports``)
  - Choosing an exit status; ``ScanResult.exit_code`` carries it

Usage::

    from stub_audit import scan_project

    result = scan_project(".", config={"critical_only": True})
    if result.exit_code:
        for f in result.findings:
            print(f.file, f.line, f.category.value)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from stub_audit.core.config import ScanConfig, resolve_config
from stub_audit.core.runner import run_scan
from stub_audit.detectors import Detector
from stub_audit.model.scan_result import ScanResult


def _to_path(p: str | Path) -> Path:
    return p if isinstance(p, Path) else Path(p)


def scan_project(
    root: str | Path,
    *,
    config: Optional[ScanConfig | Mapping[str, Any]] = None,
    detectors: Optional[Sequence[Detector]] = None,
) -> ScanResult:
    """Scan *root* and return the assembled result.

    Parameters
    ----------
    root:
        Directory to scan.
    config:
        Either a ready ``ScanConfig`` (used as-is, its ``root`` replaced by
        *root*) or a mapping of option overrides layered on top of the
        defaults, ``.stub-audit.yaml`` and ``STUB_AUDIT_*`` environment
        variables, exactly as the CLI does.
    detectors:
        Override the default detector set.  Each must conform to the
        ``Detector`` protocol (``id``, ``category``, ``detect()``).

    Returns
    -------
    ScanResult
        Final, sorted and de-duplicated findings plus the summary and
        exit code.

    Raises
    ------
    InvocationError
        If *root* is missing, not a directory or unreadable, or if the
        configuration is invalid.
    ScanAbortedError
        If the configured timeout elapsed before every file was processed.
    """
    root_p = _to_path(root)
    if isinstance(config, ScanConfig):
        cfg = config.with_overrides({"root": root_p})
    else:
        cfg = resolve_config(root_p, cli=config)
    return run_scan(cfg, detectors)
