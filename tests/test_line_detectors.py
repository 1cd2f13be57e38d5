"""
Line Detector Tests
===================
TODO markers, not-implemented errors and placeholder idioms.

Each of these detectors reports at most one match per line and never
looks beyond a single line.
"""

from __future__ import annotations

import textwrap
import time

import pytest

from stub_audit.detectors import (
    NotImplementedDetector,
    PlaceholderDetector,
    TodoMarkerDetector,
    default_detectors,
)
from stub_audit.model import Category, Language


def _lines(detector, src: str, language: Language = Language.PYTHON) -> list[int]:
    return [m.line for m in detector.detect(textwrap.dedent(src), language)]


# ============================================================================
# todo_marker
# ============================================================================

class TestTodoMarker:

    @pytest.mark.parametrize(
        "line",
        [
            "# TODO: fix this",
            "# TODO fix this",
            "// FIXME: off by one",
            "/* XXX */",
            "x = 1  # HACK: works around upstream bug",
        ],
    )
    def test_markers_detected(self, line):
        matches = TodoMarkerDetector().detect(line + "\n", Language.GENERIC)
        assert len(matches) == 1
        assert matches[0].line == 1
        assert matches[0].category == Category.TODO_MARKER
        assert matches[0].snippet == line.strip()

    @pytest.mark.parametrize(
        "line",
        [
            "# todo: lowercase is prose",
            "TODOS = []",
            "autodoc = True",
            "XXXL = 'size'",
        ],
    )
    def test_non_markers_ignored(self, line):
        assert TodoMarkerDetector().detect(line + "\n", Language.PYTHON) == []

    def test_one_match_per_line(self):
        """Two markers on one line still produce a single match."""
        assert _lines(TodoMarkerDetector(), "# TODO: FIXME both\n") == [1]

    def test_line_numbers_are_one_based(self):
        src = """\
            a = 1

            # TODO: later
        """
        assert _lines(TodoMarkerDetector(), src) == [3]


# ============================================================================
# not_implemented_error
# ============================================================================

class TestNotImplemented:

    def test_python_raise(self):
        src = """\
            def f():
                raise NotImplementedError
            def g():
                raise NotImplementedError("later")
            def h():
                raise NotImplemented
        """
        assert _lines(NotImplementedDetector(), src) == [2, 4, 6]

    def test_python_mentions_without_raise_ignored(self):
        src = """\
            try:
                f()
            except NotImplementedError:
                pass
            return NotImplemented
        """
        assert _lines(NotImplementedDetector(), src) == []

    @pytest.mark.parametrize(
        "line",
        [
            'throw new Error("Not implemented");',
            "throw new Error('not implemented yet');",
            'throw Error("TODO: not implemented")',
            'throw "not implemented";',
            "throw new NotImplementedError();",
        ],
    )
    def test_javascript_throw(self, line):
        assert _lines(NotImplementedDetector(), line + "\n", Language.JAVASCRIPT) == [1]

    def test_javascript_other_throws_ignored(self):
        src = 'throw new Error("invalid state");\n'
        assert _lines(NotImplementedDetector(), src, Language.JAVASCRIPT) == []

    def test_generic_language_accepts_other_idioms(self):
        src = """\
            fn parse() -> u8 { unimplemented!() }
            fn load() { todo!("later") }
            panic("not implemented")
        """
        assert _lines(NotImplementedDetector(), src, Language.GENERIC) == [1, 2, 3]


# ============================================================================
# placeholder
# ============================================================================

class TestPlaceholder:

    @pytest.mark.parametrize(
        "line",
        [
            "value = 0  # placeholder",
            "return None  # TODO",
            "return {}  # stub",
            "pass  # todo",
            "...  # placeholder",
            "# stub implementation",
            "# Dummy impl until the API exists",
        ],
    )
    def test_python_idioms(self, line):
        assert _lines(PlaceholderDetector(), line + "\n") == [1]

    @pytest.mark.parametrize(
        "line",
        [
            "return null; // TODO",
            "return []; /* placeholder */",
            "// placeholder",
            "// fake implementation",
        ],
    )
    def test_javascript_idioms(self, line):
        assert _lines(PlaceholderDetector(), line + "\n", Language.JAVASCRIPT) == [1]

    def test_comment_syntax_follows_language(self):
        """``//`` comments are not Python comments and vice versa."""
        assert _lines(PlaceholderDetector(), "// placeholder\n", Language.PYTHON) == []
        assert _lines(PlaceholderDetector(), "# placeholder\n", Language.JAVASCRIPT) == []

    def test_generic_accepts_both_comment_styles(self):
        src = "# placeholder\n// placeholder\n"
        assert _lines(PlaceholderDetector(), src, Language.GENERIC) == [1, 2]

    def test_ordinary_returns_ignored(self):
        src = """\
            def f(x):
                return x + 1  # add one
        """
        assert _lines(PlaceholderDetector(), src) == []

    def test_many_returns_on_one_line_scan_quickly(self):
        src = "function g(x){return x+1;}" * 20_000 + "\n"
        start = time.monotonic()
        assert _lines(PlaceholderDetector(), src, Language.JAVASCRIPT) == []
        assert _lines(PlaceholderDetector(), src, Language.PYTHON) == []
        assert time.monotonic() - start < 5.0


def test_default_detector_set_covers_every_category():
    detectors = default_detectors()
    assert {d.category for d in detectors} == set(Category)
    assert len({d.id for d in detectors}) == len(detectors)
