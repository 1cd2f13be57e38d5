"""File discovery: ignore rules, symlinks, and unreadable content."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

from stub_audit.core.config import ScanConfig
from stub_audit.core.discover import (
    SkippedFile,
    SourceFile,
    iter_candidate_files,
    read_source,
)
from stub_audit.model import Language


def _touch(root: Path, rel: str, content: str | bytes = "x = 1\n") -> Path:
    p = root / rel
    p.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        p.write_bytes(content)
    else:
        p.write_text(content, encoding="utf-8")
    return p


def _rels(cfg: ScanConfig) -> list[str]:
    return [p.relative_to(cfg.root).as_posix() for p in iter_candidate_files(cfg)]


class TestCandidateFiles:

    def test_only_known_extensions_in_sorted_order(self, tmp_path: Path) -> None:
        for rel in ("b.py", "a.ts", "sub/c.jsx", "sub/d.tsx", "e.js", "notes.md", "Makefile"):
            _touch(tmp_path, rel)
        cfg = ScanConfig(root=tmp_path)
        assert _rels(cfg) == ["a.ts", "b.py", "e.js", "sub/c.jsx", "sub/d.tsx"]

    def test_default_ignored_directories_are_pruned(self, tmp_path: Path) -> None:
        _touch(tmp_path, "src/app.py")
        for d in ("node_modules/pkg", ".git", "dist", "build", ".venv/lib", "__pycache__"):
            _touch(tmp_path, f"{d}/x.py")
        cfg = ScanConfig(root=tmp_path)
        assert _rels(cfg) == ["src/app.py"]

    def test_extra_ignore_dirs_and_patterns(self, tmp_path: Path) -> None:
        _touch(tmp_path, "app.py")
        _touch(tmp_path, "generated/api.py")
        _touch(tmp_path, "app_test.py")
        _touch(tmp_path, "pkg/schema_pb2.py")
        cfg = ScanConfig(
            root=tmp_path,
            ignore_dirs=ScanConfig().ignore_dirs | {"generated"},
            ignore_patterns=("*_test.py", "pkg/*_pb2.py"),
        )
        assert _rels(cfg) == ["app.py"]

    def test_include_patterns_restrict_the_walk(self, tmp_path: Path) -> None:
        _touch(tmp_path, "src/a.py")
        _touch(tmp_path, "scripts/b.py")
        cfg = ScanConfig(root=tmp_path, include_patterns=("src/*",))
        assert _rels(cfg) == ["src/a.py"]

    def test_extensions_are_configurable(self, tmp_path: Path) -> None:
        _touch(tmp_path, "main.go")
        _touch(tmp_path, "app.py")
        cfg = ScanConfig(root=tmp_path, extensions=(".go",))
        assert _rels(cfg) == ["main.go"]

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_symlinks_are_not_followed(self, tmp_path: Path) -> None:
        outside = tmp_path / "outside"
        _touch(outside, "secret.py")
        root = tmp_path / "root"
        _touch(root, "real.py")
        os.symlink(outside, root / "linked_dir")
        os.symlink(outside / "secret.py", root / "linked.py")
        cfg = ScanConfig(root=root)
        assert _rels(cfg) == ["real.py"]


class TestReadSource:

    def test_reads_utf8_and_assigns_language(self, tmp_path: Path) -> None:
        p = _touch(tmp_path, "web/app.tsx", "const x = 1;\n")
        out = read_source(p, ScanConfig(root=tmp_path))
        assert isinstance(out, SourceFile)
        assert out.rel_path == "web/app.tsx"
        assert out.language == Language.JAVASCRIPT
        assert out.text == "const x = 1;\n"

    def test_utf8_bom_is_stripped(self, tmp_path: Path) -> None:
        p = _touch(tmp_path, "bom.py", "\ufeff# TODO\n".encode("utf-8"))
        out = read_source(p, ScanConfig(root=tmp_path))
        assert isinstance(out, SourceFile)
        assert out.text == "# TODO\n"

    def test_unknown_extension_uses_generic_language(self, tmp_path: Path) -> None:
        p = _touch(tmp_path, "main.go", "package main\n")
        out = read_source(p, ScanConfig(root=tmp_path, extensions=(".go",)))
        assert isinstance(out, SourceFile)
        assert out.language == Language.GENERIC

    def test_binary_file_is_skipped(self, tmp_path: Path) -> None:
        p = _touch(tmp_path, "blob.py", b"\x00\x01\x02TODO")
        out = read_source(p, ScanConfig(root=tmp_path))
        assert isinstance(out, SkippedFile)
        assert out.reason == "binary content"

    def test_undecodable_file_is_skipped(self, tmp_path: Path) -> None:
        p = _touch(tmp_path, "latin.py", "# caf\xe9 TODO\n".encode("latin-1"))
        out = read_source(p, ScanConfig(root=tmp_path))
        assert isinstance(out, SkippedFile)
        assert out.rel_path == "latin.py"

    def test_oversize_file_is_skipped(self, tmp_path: Path) -> None:
        p = _touch(tmp_path, "big.py", "x = 1\n" * 100)
        out = read_source(p, ScanConfig(root=tmp_path, max_file_bytes=10))
        assert isinstance(out, SkippedFile)
        assert "larger than" in out.reason

    def test_missing_file_is_skipped_not_raised(self, tmp_path: Path) -> None:
        out = read_source(tmp_path / "gone.py", ScanConfig(root=tmp_path))
        assert isinstance(out, SkippedFile)


def test_one_read_outcome_per_candidate(tmp_path: Path) -> None:
    _touch(tmp_path, "a.py")
    _touch(tmp_path, "b.py", b"\xff\xfe\xfa")
    cfg = ScanConfig(root=tmp_path)
    outcomes = [read_source(p, cfg) for p in iter_candidate_files(cfg)]
    assert [type(o) for o in outcomes] == [SourceFile, SkippedFile]
