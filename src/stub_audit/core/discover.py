"""File discovery — enumerate and read candidate source files.

Two stages so that reads can run on the worker pool:

* ``iter_candidate_files`` — lazy walk yielding paths that pass the ignore,
  include and extension rules.
* ``read_source`` — turn one path into a ``SourceFile`` or, when it cannot
  be read as text, a ``SkippedFile``.
"""

from __future__ import annotations

import fnmatch
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Union

from stub_audit.core.config import ScanConfig, language_for
from stub_audit.model import Language

_logger = logging.getLogger(__name__)

# Bytes inspected for NUL when sniffing binary content.
_BINARY_SNIFF_BYTES = 8192


@dataclass(frozen=True, slots=True)
class SourceFile:
    path: Path
    rel_path: str
    language: Language
    text: str


@dataclass(frozen=True, slots=True)
class SkippedFile:
    rel_path: str
    reason: str


ReadOutcome = Union[SourceFile, SkippedFile]


def relative_posix(path: Path, root: Path) -> str:
    """POSIX-style path of *path* relative to *root*."""
    return path.relative_to(root).as_posix()


def _matches_any(rel: str, patterns: tuple[str, ...]) -> bool:
    name = rel.rsplit("/", 1)[-1]
    return any(
        fnmatch.fnmatchcase(rel, pat) or fnmatch.fnmatchcase(name, pat)
        for pat in patterns
    )


def iter_candidate_files(cfg: ScanConfig) -> Iterator[Path]:
    """Yield files under *cfg.root* respecting all exclusion rules.

    Symlinks are never followed.  Walk errors below the root are logged and
    the affected directory is skipped.
    """
    root = cfg.root
    exts = frozenset(e.lower() for e in cfg.extensions)

    def _on_error(exc: OSError) -> None:
        _logger.warning("skipped unreadable directory %s: %s", exc.filename, exc.strerror)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error, followlinks=False):
        current = Path(dirpath)
        rel_dir = "" if current == root else relative_posix(current, root)

        # Prune in place so os.walk never descends into ignored directories.
        kept = []
        for d in sorted(dirnames):
            rel = f"{rel_dir}/{d}" if rel_dir else d
            if d in cfg.ignore_dirs or _matches_any(rel, cfg.ignore_patterns):
                continue
            if (current / d).is_symlink():
                continue
            kept.append(d)
        dirnames[:] = kept

        for name in sorted(filenames):
            p = current / name
            rel = f"{rel_dir}/{name}" if rel_dir else name
            if p.suffix.lower() not in exts:
                continue
            if cfg.include_patterns and not _matches_any(rel, cfg.include_patterns):
                continue
            if _matches_any(rel, cfg.ignore_patterns):
                continue
            if p.is_symlink():
                continue
            yield p


def read_source(path: Path, cfg: ScanConfig) -> ReadOutcome:
    """Read *path* as UTF-8 text.

    Never raises for per-file problems: permission errors, oversize files,
    binary content and undecodable bytes all become a ``SkippedFile``.
    """
    rel = relative_posix(path, cfg.root)
    try:
        size = path.stat().st_size
        if size > cfg.max_file_bytes:
            return SkippedFile(rel, f"larger than {cfg.max_file_bytes} bytes")
        data = path.read_bytes()
    except OSError as exc:
        return SkippedFile(rel, exc.strerror or type(exc).__name__)

    if b"\x00" in data[:_BINARY_SNIFF_BYTES]:
        return SkippedFile(rel, "binary content")
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return SkippedFile(rel, "not valid UTF-8 text")

    return SourceFile(path=path, rel_path=rel, language=language_for(path), text=text)
