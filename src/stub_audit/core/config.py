"""Scan configuration.

One ``ScanConfig`` is assembled per invocation and passed explicitly to the
walker, runner and reporter.  Sources, lowest precedence first:

1. built-in defaults
2. a YAML file (``--config`` or ``.stub-audit.yaml`` at the scan root)
3. environment (``STUB_AUDIT_WORKERS``, ``STUB_AUDIT_TIMEOUT``)
4. command-line flags
"""

from __future__ import annotations

import math
import os
import threading
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from stub_audit.errors import InvocationError
from stub_audit.model import Language, OutputFormat

CONFIG_FILENAME = ".stub-audit.yaml"

# Directory basenames never descended into.
DEFAULT_IGNORE_DIRS: frozenset[str] = frozenset(
    {
        # version control
        ".git",
        ".hg",
        ".svn",
        # dependencies / vendored code
        "node_modules",
        "bower_components",
        "vendor",
        ".venv",
        "venv",
        "site-packages",
        # build output
        "dist",
        "build",
        "out",
        "coverage",
        ".next",
        # tool caches
        "__pycache__",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
        ".tox",
    }
)

LANGUAGE_BY_EXTENSION: dict[str, Language] = {
    ".py": Language.PYTHON,
    ".ts": Language.JAVASCRIPT,
    ".tsx": Language.JAVASCRIPT,
    ".js": Language.JAVASCRIPT,
    ".jsx": Language.JAVASCRIPT,
}

DEFAULT_EXTENSIONS: tuple[str, ...] = tuple(LANGUAGE_BY_EXTENSION)

ENV_WORKERS = "STUB_AUDIT_WORKERS"
ENV_TIMEOUT = "STUB_AUDIT_TIMEOUT"


def language_for(path: Path) -> Language:
    """Detector language for *path*; unknown extensions fall back to generic."""
    return LANGUAGE_BY_EXTENSION.get(path.suffix.lower(), Language.GENERIC)


def default_workers() -> int:
    return min(32, (os.cpu_count() or 1) + 4)


@dataclass(frozen=True)
class ScanConfig:
    """Immutable scan configuration."""

    root: Path = field(default_factory=lambda: Path("."))
    critical_only: bool = False
    output_format: OutputFormat | None = None  # None = auto-detect
    ignore_patterns: tuple[str, ...] = ()
    include_patterns: tuple[str, ...] = ()
    ignore_dirs: frozenset[str] = DEFAULT_IGNORE_DIRS
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    max_workers: int = field(default_factory=default_workers)
    timeout: float | None = None  # seconds for the whole scan
    max_file_bytes: int = 2_000_000  # 2 MB safety limit

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            raise InvocationError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.timeout is not None and not (
            math.isfinite(self.timeout) and 0 < self.timeout <= threading.TIMEOUT_MAX
        ):
            raise InvocationError(
                f"timeout must be a finite number of seconds > 0, got {self.timeout}"
            )
        if self.max_file_bytes < 1:
            raise InvocationError(
                f"max_file_bytes must be >= 1, got {self.max_file_bytes}"
            )
        bad = [e for e in self.extensions if not e.startswith(".")]
        if bad:
            raise InvocationError(f"extensions must start with '.': {', '.join(bad)}")

    def with_overrides(self, overrides: Mapping[str, Any]) -> ScanConfig:
        """Return a copy with *overrides* applied (``None`` values ignored)."""
        return replace(self, **_coerce(overrides))

    # ── loaders ─────────────────────────────────────────────────────

    @classmethod
    def from_yaml(cls, path: Path, *, root: Path | None = None) -> ScanConfig:
        """Load configuration from a YAML file."""
        return cls(root=root or Path(".")).with_overrides(load_yaml_overrides(path))


_LIST_KEYS = {"ignore_patterns", "include_patterns", "extensions"}
_FILE_KEYS = {f.name for f in fields(ScanConfig)} - {"root"}


def _coerce(overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Normalize raw option values to ``ScanConfig`` field types."""
    out: dict[str, Any] = {}
    for key, value in overrides.items():
        if value is None:
            continue
        try:
            if key == "extensions":
                out[key] = tuple(e.lower() for e in _as_str_tuple(key, value))
            elif key in _LIST_KEYS:
                out[key] = _as_str_tuple(key, value)
            elif key == "ignore_dirs":
                out[key] = frozenset(_as_str_tuple(key, value))
            elif key == "output_format":
                out[key] = OutputFormat(value)
            elif key == "critical_only":
                if not isinstance(value, bool):
                    raise InvocationError("critical_only must be true or false")
                out[key] = value
            elif key in {"max_workers", "max_file_bytes"}:
                out[key] = int(value)
            elif key == "timeout":
                seconds = float(value)
                out[key] = seconds if seconds != 0 else None  # 0 = no limit
            elif key == "root":
                out[key] = Path(value)
            else:
                raise InvocationError(f"unknown configuration key: {key!r}")
        except (TypeError, ValueError) as exc:
            raise InvocationError(f"invalid value for {key}: {value!r} ({exc})") from exc
    return out


def _as_str_tuple(key: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple, set, frozenset)) and all(
        isinstance(v, str) for v in value
    ):
        return tuple(value)
    raise InvocationError(f"{key} must be a string or a list of strings")


def load_yaml_overrides(path: Path) -> dict[str, Any]:
    """Read a YAML config file into a raw overrides mapping."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as exc:
        raise InvocationError(f"cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise InvocationError(f"malformed config file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise InvocationError(f"config file {path} must contain a mapping")
    unknown = sorted(set(data) - _FILE_KEYS)
    if unknown:
        raise InvocationError(
            f"unknown key(s) in {path}: {', '.join(map(str, unknown))}"
        )
    return dict(data)


def env_overrides(env: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Raw overrides from ``STUB_AUDIT_*`` environment variables."""
    if env is None:
        env = os.environ
    out: dict[str, Any] = {}
    workers = env.get(ENV_WORKERS, "").strip()
    if workers:
        out["max_workers"] = workers
    timeout = env.get(ENV_TIMEOUT, "").strip()
    if timeout:
        out["timeout"] = timeout
    return out


def resolve_config(
    root: Path,
    *,
    config_file: Path | None = None,
    env: Mapping[str, str] | None = None,
    cli: Mapping[str, Any] | None = None,
) -> ScanConfig:
    """Layer defaults, config file, environment and CLI values."""
    if config_file is None:
        candidate = root / CONFIG_FILENAME
        if candidate.is_file():
            config_file = candidate
    if config_file is not None:
        cfg = ScanConfig.from_yaml(config_file, root=root)
    else:
        cfg = ScanConfig(root=root)

    cfg = cfg.with_overrides(env_overrides(env))

    if cli:
        cli = dict(cli)
        # Repeatable flags extend rather than replace.
        for key in ("ignore_patterns", "include_patterns", "extensions"):
            extra = cli.pop(key, None)
            if extra:
                cli[key] = tuple(getattr(cfg, key)) + tuple(extra)
        extra_dirs = cli.pop("ignore_dirs", None)
        if extra_dirs:
            cli["ignore_dirs"] = cfg.ignore_dirs | frozenset(extra_dirs)
        cfg = cfg.with_overrides(cli)
    return cfg
