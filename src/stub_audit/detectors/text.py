"""Text helpers shared by the detectors."""

from __future__ import annotations

import bisect
import re
from typing import Iterator, Pattern, Sequence

from stub_audit.model import Category
from stub_audit.model.finding import RawMatch, clean_snippet


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, dropping a trailing ``\\r`` from each line.

    ``str.splitlines`` also breaks on form feeds, ``\\x85`` and the Unicode
    line separators, which would shift line numbers away from
    :class:`LineIndex` and from what editors show.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def iter_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(lineno, line)`` pairs, 1-based."""
    for i, line in enumerate(split_lines(text), 1):
        yield i, line


def scan_lines(
    text: str,
    patterns: Sequence[Pattern[str]],
    *,
    category: Category,
    detector: str,
) -> list[RawMatch]:
    """One match per line where any of *patterns* hits."""
    matches: list[RawMatch] = []
    for lineno, line in iter_lines(text):
        if any(p.search(line) for p in patterns):
            matches.append(
                RawMatch(
                    line=lineno,
                    category=category,
                    snippet=clean_snippet(line),
                    detector=detector,
                )
            )
    return matches


class LineIndex:
    """Map character offsets in a text back to 1-based line numbers."""

    def __init__(self, text: str) -> None:
        self._starts = [0] + [m.end() for m in re.finditer(r"\n", text)]
        self._lines = split_lines(text)

    def line_of(self, offset: int) -> int:
        return bisect.bisect_right(self._starts, offset)

    def text_of(self, lineno: int) -> str:
        if 1 <= lineno <= len(self._lines):
            return self._lines[lineno - 1]
        return ""


def mask_c_like(text: str) -> str:
    """Blank out comments and string literals, keeping offsets and newlines.

    Handles ``//`` and ``/* */`` comments plus single, double and template
    quoted strings.  Template ``${}`` substitutions and regex literals are
    not understood; the result is a heuristic view good enough for brace
    matching.
    """
    out = list(text)
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        nxt = text[i + 1] if i + 1 < n else ""
        if ch == "/" and nxt == "/":
            j = text.find("\n", i)
            j = n if j == -1 else j
            _blank(out, i, j)
            i = j
        elif ch == "/" and nxt == "*":
            j = text.find("*/", i + 2)
            j = n if j == -1 else j + 2
            _blank(out, i, j)
            i = j
        elif ch in "\"'`":
            j = i + 1
            while j < n and text[j] != ch:
                if text[j] == "\\":
                    j += 1
                elif text[j] == "\n" and ch != "`":
                    break  # unterminated literal ends at the line
                j += 1
            j = min(j + 1, n)
            # keep the quotes so the literal still reads as a value
            _blank(out, i + 1, j - 1)
            i = j
        else:
            i += 1
    return "".join(out)


def _blank(chars: list[str], start: int, end: int) -> None:
    for k in range(start, end):
        if chars[k] != "\n":
            chars[k] = " "


def next_solid(masked: str, start: int) -> int:
    """Offset of the first non-whitespace character at or after *start*, or -1."""
    for k in range(start, len(masked)):
        if not masked[k].isspace():
            return k
    return -1


def match_paren(masked: str, open_at: int) -> int:
    """Offset of the ``)`` closing the ``(`` at *open_at*, or -1."""
    depth = 0
    for k in range(open_at, len(masked)):
        c = masked[k]
        if c == "(":
            depth += 1
        elif c == ")":
            depth -= 1
            if depth == 0:
                return k
    return -1
