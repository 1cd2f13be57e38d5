"""Empty-body detector — functions that were declared but never written.

Works on raw text with light structural awareness so that half-edited,
syntactically invalid files still scan:

* **Python** — indentation tracking.  After a ``def`` header (which may span
  lines), blank lines, comments and one docstring are ignored; the body is
  empty when what remains is a lone ``pass``/``...`` or nothing before the
  next line at or above the header's indentation.  Functions decorated with
  ``@overload`` or ``@abstractmethod`` are intentional stubs and exempt.
* **JavaScript/TypeScript** — header matching over a copy of the text with
  comments and string literals blanked out.  Function declarations and
  expressions, class/object methods and named arrow functions whose brace
  body holds nothing but whitespace, comments or ``;`` are empty.
* **Generic** — the same header matching for ``func``/``fn``/``function``
  style headers.

Findings are reported at the header line.  False positives and negatives on
unusual layouts are an accepted trade-off.
"""

from __future__ import annotations

import re
from typing import Pattern, Sequence

from stub_audit.detectors.text import (
    LineIndex,
    mask_c_like,
    match_paren,
    next_solid,
    split_lines,
)
from stub_audit.model import Category, Language
from stub_audit.model.finding import RawMatch, clean_snippet

# ═══════════════════════════════════════════════════════════════════════
#  Python
# ═══════════════════════════════════════════════════════════════════════

_PY_DEF_RE = re.compile(r"^(?P<indent>[ \t]*)(?:async[ \t]+)?def[ \t]+\w+")
_PY_STUB_DECORATOR_RE = re.compile(
    r"^\s*@(?:[\w.]+\.)?(?:overload|abstractmethod|abstractproperty)\b"
)
_PY_DOCSTRING_RE = re.compile(r"""^[rRuUbBfF]{0,2}('''|\"\"\"|'|")""")
_PY_NOOP = frozenset({"pass", "..."})

# Headers longer than this are assumed to be a mis-parse.
_MAX_HEADER_LINES = 50


def _indent_of(line: str) -> int:
    expanded = line.expandtabs(8)
    return len(expanded) - len(expanded.lstrip())


def _strip_py_comment(line: str) -> str:
    """Drop a trailing ``#`` comment, respecting simple string literals."""
    quote = ""
    i = 0
    while i < len(line):
        c = line[i]
        if quote:
            if c == "\\":
                i += 1
            elif c == quote:
                quote = ""
        elif c in "'\"":
            quote = c
        elif c == "#":
            return line[:i]
        i += 1
    return line


def _is_code(line: str) -> bool:
    s = line.strip()
    return bool(s) and not s.startswith("#")


def _next_code_line(lines: Sequence[str], start: int) -> int | None:
    for k in range(start, len(lines)):
        if _is_code(lines[k]):
            return k
    return None


def _find_header_colon(lines: Sequence[str], start: int) -> tuple[int, int] | None:
    """Locate the ``:`` that ends a ``def`` header beginning at *start*."""
    depth = 0
    for j in range(start, min(start + _MAX_HEADER_LINES, len(lines))):
        line = lines[j]
        quote = ""
        i = 0
        while i < len(line):
            c = line[i]
            if quote:
                if c == "\\":
                    i += 1
                elif c == quote:
                    quote = ""
            elif c in "'\"":
                quote = c
            elif c == "#":
                break
            elif c in "([{":
                depth += 1
            elif c in ")]}":
                depth -= 1
            elif c == ":" and depth <= 0:
                return j, i
            i += 1
    return None


def _docstring_end(lines: Sequence[str], k: int) -> int | None:
    """Index of the first line after a docstring opening on line *k*.

    Returns ``None`` when line *k* is not a bare string statement.
    """
    stripped = lines[k].strip()
    m = _PY_DOCSTRING_RE.match(stripped)
    if not m:
        return None
    quote = m.group(1)
    rest = stripped[m.end():]

    if len(quote) == 3:
        close = rest.find(quote)
        if close != -1:
            tail = rest[close + 3:]
            return k + 1 if not _strip_py_comment(tail).strip() else None
        for j in range(k + 1, len(lines)):
            pos = lines[j].find(quote)
            if pos != -1:
                tail = lines[j][pos + 3:]
                return j + 1 if not _strip_py_comment(tail).strip() else None
        return len(lines)

    code = _strip_py_comment(stripped).strip()
    if len(code) >= 2 and code.endswith(quote) and code.count(quote) == 2:
        return k + 1
    return None


def _has_stub_decorator(lines: Sequence[str], def_idx: int) -> bool:
    k = def_idx - 1
    while k >= 0:
        s = lines[k].strip()
        if not s or s.startswith("#"):
            k -= 1
            continue
        if not s.startswith("@"):
            return False
        if _PY_STUB_DECORATOR_RE.match(s):
            return True
        k -= 1
    return False


def _python_body_is_empty(lines: Sequence[str], def_idx: int, header_indent: int) -> bool:
    found = _find_header_colon(lines, def_idx)
    if found is None:
        return False
    end_line, colon = found

    inline = _strip_py_comment(lines[end_line][colon + 1:]).strip()
    if inline:
        # def f(): pass
        return inline.rstrip(";").strip() in _PY_NOOP

    k = _next_code_line(lines, end_line + 1)
    if k is None or _indent_of(lines[k]) <= header_indent:
        return True
    body_indent = _indent_of(lines[k])

    after_doc = _docstring_end(lines, k)
    if after_doc is not None:
        k = _next_code_line(lines, after_doc)
        if k is None or _indent_of(lines[k]) < body_indent:
            return True

    stmt = _strip_py_comment(lines[k]).strip().rstrip(";").strip()
    if stmt not in _PY_NOOP:
        return False
    following = _next_code_line(lines, k + 1)
    return following is None or _indent_of(lines[following]) < body_indent


def _detect_python(text: str) -> list[int]:
    lines = split_lines(text)
    hits: list[int] = []
    for idx, line in enumerate(lines):
        m = _PY_DEF_RE.match(line)
        if not m:
            continue
        if _has_stub_decorator(lines, idx):
            continue
        if _python_body_is_empty(lines, idx, _indent_of(m.group("indent"))):
            hits.append(idx + 1)
    return hits


# ═══════════════════════════════════════════════════════════════════════
#  Brace-delimited languages
# ═══════════════════════════════════════════════════════════════════════

_JS_MODIFIERS = r"(?:(?:public|private|protected|static|async|override|readonly|abstract|get|set|export|default)[ \t]+)*"

# Headers ending at the ``(`` that opens the parameter list.
_JS_PAREN_HEADERS: tuple[Pattern[str], ...] = (
    # function foo(   /   function* gen(   /   function (
    re.compile(r"\bfunction\b\s*\*?\s*[\w$]*\s*(?:<[^>(\n]*>)?\s*\("),
    # class or object-literal method:   async foo(   /   get bar(
    re.compile(
        rf"^[ \t]*{_JS_MODIFIERS}\*?[ \t]*(?P<name>#?[\w$]+)[ \t]*(?:<[^>(\n]*>)?[ \t]*\(",
        re.MULTILINE,
    ),
)

# Named arrow functions, ending at the body ``{``.  The name must start a
# word and type annotations are capped so long minified lines scan in
# linear time.
_JS_ARROW = re.compile(
    r"(?<![\w$])[\w$]+\s*(?::[^=\n]{0,200})?=\s*(?:async\s+)?(?:\([^()]*\)|[\w$]+)"
    r"\s*(?::\s*[^=\n]{0,200})?=>\s*\{"
)

# Words that look like ``name(`` at line start but are not declarations.
_JS_NOT_METHODS = frozenset(
    {
        "if", "for", "while", "switch", "catch", "with", "return", "function",
        "typeof", "new", "await", "yield", "else", "do", "try", "super",
        "import", "require", "constructor", "delete", "void", "throw", "case",
    }
)

_GENERIC_PAREN_HEADERS: tuple[Pattern[str], ...] = (
    # func (r *Recv) Name(   /   fn name<T>(   /   function name(
    re.compile(
        r"\b(?:func|fn|function|fun|sub|proc)\b\s*(?:\([^)\n]*\)\s*)?[\w$.]*\s*(?:<[^>(\n]*>)?\s*\("
    ),
)

# Between ``)`` and the body brace.  JS/TS allows only whitespace and an
# optional ``: ReturnType`` so that ASI-style calls followed by a block on
# the next line are not taken for declarations.  Generic headers keep the
# brace on the header line but allow free-form return types (``-> T``).
_JS_AFTER_PARAMS = re.compile(r"\s*(?::[^{;=\n]*)?\{")
_GENERIC_AFTER_PARAMS = re.compile(r"[^{;=\n]*?\{")


def _brace_body_is_empty(masked: str, open_brace: int) -> bool:
    # Only ``{}`` or ``{;}`` around whitespace; no need to find the real close.
    k = next_solid(masked, open_brace + 1)
    if k != -1 and masked[k] == ";":
        k = next_solid(masked, k + 1)
    return k != -1 and masked[k] == "}"


def _detect_braced(
    text: str,
    paren_headers: Sequence[Pattern[str]],
    after_params: Pattern[str],
    *,
    arrow: Pattern[str] | None = None,
) -> list[int]:
    masked = mask_c_like(text)
    index = LineIndex(text)
    hits: set[int] = set()

    for pattern in paren_headers:
        for m in pattern.finditer(masked):
            name = m.groupdict().get("name")
            if name is not None and name in _JS_NOT_METHODS:
                continue
            close = match_paren(masked, m.end() - 1)
            if close == -1:
                continue
            after = after_params.match(masked, close + 1)
            if not after:
                continue
            if _brace_body_is_empty(masked, after.end() - 1):
                hits.add(index.line_of(m.start("name") if name is not None else m.start()))

    if arrow is not None:
        for m in arrow.finditer(masked):
            if _brace_body_is_empty(masked, m.end() - 1):
                hits.add(index.line_of(m.start()))

    return sorted(hits)


# ═══════════════════════════════════════════════════════════════════════
#  Detector
# ═══════════════════════════════════════════════════════════════════════


class EmptyBodyDetector:
    """Finds functions and methods whose body is empty or a lone no-op."""

    id: str = "empty_body"
    category: Category = Category.EMPTY_BODY

    def detect(self, text: str, language: Language) -> list[RawMatch]:
        if language == Language.PYTHON:
            lines = _detect_python(text)
        elif language == Language.JAVASCRIPT:
            lines = _detect_braced(
                text, _JS_PAREN_HEADERS, _JS_AFTER_PARAMS, arrow=_JS_ARROW
            )
        else:
            lines = _detect_braced(text, _GENERIC_PAREN_HEADERS, _GENERIC_AFTER_PARAMS)

        index = LineIndex(text)
        return [
            RawMatch(
                line=lineno,
                category=self.category,
                snippet=clean_snippet(index.text_of(lineno)),
                detector=self.id,
            )
            for lineno in lines
        ]
