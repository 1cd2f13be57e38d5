"""CLI entry-point for stub_audit.

Usage:
    python -m stub_audit [ROOT]
    python -m stub_audit [ROOT] --critical-only
    python -m stub_audit [ROOT] --output json|text
    python -m stub_audit [ROOT] --include GLOB --exclude GLOB --ignore-dir NAME --ext .EXT
    python -m stub_audit [ROOT] --config FILE --workers N --timeout SECONDS [-v]

stdout carries the report, stderr carries diagnostics, and the exit code
carries the gate decision (see ``stub_audit.policy.exit_codes``).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import jsonschema

from stub_audit import __version__
from stub_audit.core.config import resolve_config
from stub_audit.core.runner import run_scan
from stub_audit.errors import InvocationError, ScanAbortedError, UnknownCategoryError
from stub_audit.model import OutputFormat
from stub_audit.policy.exit_codes import ExitCode
from stub_audit.reports import render, resolve_output_format

_logger = logging.getLogger("stub_audit")


class _ArgumentParser(argparse.ArgumentParser):
    """argparse exits 2 on bad usage; 2 is a gate result here, so use 3."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        print(f"error: {message}", file=sys.stderr)
        raise SystemExit(int(ExitCode.ERROR))


def _build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(
        prog="stub-audit",
        description="Find incomplete code: TODO markers, not-implemented "
        "errors, empty function bodies and placeholders.",
    )
    p.add_argument(
        "root",
        nargs="?",
        default=".",
        type=Path,
        help="Directory to scan (default: current directory).",
    )
    p.add_argument(
        "--critical-only",
        dest="critical_only",
        action="store_true",
        default=None,
        help="Report only critical findings; warnings no longer affect the exit code.",
    )
    p.add_argument(
        "--output",
        dest="output_format",
        choices=[f.value for f in OutputFormat],
        default=None,
        help="Report format (default: text on a terminal, json otherwise).",
    )
    p.add_argument(
        "--include",
        dest="include_patterns",
        action="append",
        metavar="GLOB",
        help="Only scan files matching GLOB (repeatable).",
    )
    p.add_argument(
        "--exclude",
        dest="ignore_patterns",
        action="append",
        metavar="GLOB",
        help="Skip files matching GLOB (repeatable).",
    )
    p.add_argument(
        "--ignore-dir",
        dest="ignore_dirs",
        action="append",
        metavar="NAME",
        help="Never descend into directories named NAME (repeatable).",
    )
    p.add_argument(
        "--ext",
        dest="extensions",
        action="append",
        metavar=".EXT",
        help="Also scan files with this extension (repeatable).",
    )
    p.add_argument(
        "--config",
        dest="config_file",
        type=Path,
        default=None,
        metavar="FILE",
        help="YAML configuration file (default: <root>/.stub-audit.yaml if present).",
    )
    p.add_argument(
        "--workers",
        dest="max_workers",
        type=int,
        default=None,
        metavar="N",
        help="Number of worker threads.",
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Abort the scan (exit 3) if it takes longer than this.",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Verbose diagnostics on stderr.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        force=True,
    )


def main(argv: list[str] | None = None) -> int:
    """Entry-point — returns an exit code (0 clean, 1 warnings, 2 critical, 3 error)."""
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    cli: dict[str, Any] = {
        "critical_only": args.critical_only,
        "output_format": args.output_format,
        "include_patterns": args.include_patterns,
        "ignore_patterns": args.ignore_patterns,
        "ignore_dirs": args.ignore_dirs,
        "extensions": args.extensions,
        "max_workers": args.max_workers,
        "timeout": args.timeout,
    }

    try:
        cfg = resolve_config(args.root, config_file=args.config_file, cli=cli)
        result = run_scan(cfg)
        fmt = resolve_output_format(cfg.output_format, sys.stdout)
        report = render(result, fmt)
    except (InvocationError, ScanAbortedError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return ExitCode.ERROR
    except (UnknownCategoryError, jsonschema.ValidationError) as exc:
        print(f"internal error: {exc}", file=sys.stderr)
        return ExitCode.ERROR
    except KeyboardInterrupt:
        print("error: interrupted", file=sys.stderr)
        return ExitCode.ERROR
    except Exception as exc:
        # Anything else is a bug; it must still exit 3, never 1.
        _logger.debug("unexpected failure", exc_info=True)
        print(f"internal error: {type(exc).__name__}: {exc}", file=sys.stderr)
        return ExitCode.ERROR

    sys.stdout.write(report)
    sys.stdout.flush()
    _logger.debug("exit code %d", result.exit_code)
    return int(result.exit_code)


if __name__ == "__main__":
    raise SystemExit(main())
