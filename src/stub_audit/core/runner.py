"""Runner — fans files out to detectors and hands the results to the aggregator."""

from __future__ import annotations

import logging
import os
import time
from concurrent.futures import ALL_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from stub_audit.core.aggregate import build_result
from stub_audit.core.config import ScanConfig
from stub_audit.core.discover import SkippedFile, SourceFile, iter_candidate_files, read_source
from stub_audit.detectors import Detector, default_detectors
from stub_audit.detectors.text import iter_lines
from stub_audit.errors import InvocationError, ScanAbortedError
from stub_audit.model.finding import RawMatch
from stub_audit.model.scan_result import ScanResult

_logger = logging.getLogger(__name__)

# Lines carrying this marker never produce findings.
SUPPRESSION_MARKER = "stub-audit: ignore"


@dataclass(slots=True)
class FileOutcome:
    """Everything one worker learned about one file."""

    rel_path: str
    matches: list[RawMatch] = field(default_factory=list)
    skipped_reason: str | None = None


def check_root(root: Path) -> Path:
    """Resolve *root* and make sure it can be listed.

    Raises ``InvocationError`` for a missing, non-directory or unreadable
    root; these are invocation errors, not per-file skips.
    """
    if not root.exists():
        raise InvocationError(f"scan root does not exist: {root}")
    if not root.is_dir():
        raise InvocationError(f"scan root is not a directory: {root}")
    try:
        with os.scandir(root):
            pass
    except OSError as exc:
        raise InvocationError(f"cannot read scan root {root}: {exc.strerror or exc}") from exc
    return root.resolve()


def _suppressed_lines(text: str) -> frozenset[int]:
    if SUPPRESSION_MARKER not in text:
        return frozenset()
    return frozenset(
        i for i, line in iter_lines(text) if SUPPRESSION_MARKER in line
    )


def detect_file(source: SourceFile, detectors: Sequence[Detector]) -> list[RawMatch]:
    """Run every detector on one file.

    A detector that raises is logged and contributes nothing; the remaining
    detectors still run.
    """
    matches: list[RawMatch] = []
    for detector in detectors:
        detector_id = getattr(detector, "id", type(detector).__name__)
        try:
            matches.extend(detector.detect(source.text, source.language))
        except Exception:
            _logger.warning(
                "detector '%s' failed on %s; its matches for this file are dropped",
                detector_id,
                source.rel_path,
                exc_info=_logger.isEnabledFor(logging.DEBUG),
            )

    suppressed = _suppressed_lines(source.text)
    if suppressed:
        matches = [m for m in matches if m.line not in suppressed]
    return matches


def process_file(path: Path, cfg: ScanConfig, detectors: Sequence[Detector]) -> FileOutcome:
    """Read one file and run the detector set on it (worker task)."""
    outcome = read_source(path, cfg)
    if isinstance(outcome, SkippedFile):
        return FileOutcome(rel_path=outcome.rel_path, skipped_reason=outcome.reason)
    return FileOutcome(rel_path=outcome.rel_path, matches=detect_file(outcome, detectors))


def run_scan(
    cfg: ScanConfig,
    detectors: Sequence[Detector] | None = None,
) -> ScanResult:
    """Scan ``cfg.root`` and assemble a ``ScanResult``.

    This is the only entry point that wires walker → detectors → aggregator.
    Files are processed on a bounded thread pool; results are merged once,
    after every worker has finished.  If ``cfg.timeout`` elapses first the
    whole scan is abandoned with ``ScanAbortedError`` rather than returning
    partial findings.
    """
    root = check_root(cfg.root)
    if root != cfg.root:
        cfg = cfg.with_overrides({"root": root})
    active = list(detectors) if detectors is not None else default_detectors()

    started = time.monotonic()
    pool = ThreadPoolExecutor(max_workers=cfg.max_workers, thread_name_prefix="stub-audit")
    futures: list[Future[FileOutcome]] = []
    try:
        for path in iter_candidate_files(cfg):
            futures.append(pool.submit(process_file, path, cfg, active))

        remaining = None
        if cfg.timeout is not None:
            remaining = max(0.0, cfg.timeout - (time.monotonic() - started))
        # Join barrier.
        _, pending = wait(futures, timeout=remaining, return_when=ALL_COMPLETED)
        if pending:
            raise ScanAbortedError(
                f"scan exceeded {cfg.timeout:g}s with {len(pending)} of "
                f"{len(futures)} file(s) unfinished"
            )
        outcomes = [f.result() for f in futures]
    finally:
        pool.shutdown(wait=False, cancel_futures=True)

    files_scanned = 0
    files_skipped = 0
    pairs: list[tuple[str, RawMatch]] = []
    for outcome in outcomes:
        if outcome.skipped_reason is not None:
            files_skipped += 1
            _logger.warning("skipped unreadable file %s: %s", outcome.rel_path, outcome.skipped_reason)
            continue
        files_scanned += 1
        pairs.extend((outcome.rel_path, m) for m in outcome.matches)

    _logger.debug(
        "scanned %d file(s), skipped %d, %d raw match(es) in %.3fs",
        files_scanned,
        files_skipped,
        len(pairs),
        time.monotonic() - started,
    )
    return build_result(
        pairs,
        files_scanned=files_scanned,
        files_skipped=files_skipped,
        critical_only=cfg.critical_only,
    )
