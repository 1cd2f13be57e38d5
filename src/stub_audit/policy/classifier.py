"""Category → severity classification.

The table is total over ``Category`` and constant.  ``--critical-only``
filters *after* classification; nothing here is configurable per run.
"""

from __future__ import annotations

from types import MappingProxyType

from stub_audit.errors import UnknownCategoryError
from stub_audit.model import Category, Severity

SEVERITY_BY_CATEGORY = MappingProxyType(
    {
        Category.NOT_IMPLEMENTED_ERROR: Severity.CRITICAL,
        Category.EMPTY_BODY: Severity.CRITICAL,
        Category.PLACEHOLDER: Severity.CRITICAL,
        Category.TODO_MARKER: Severity.WARNING,
    }
)


def normalize_category(value: Category | str) -> Category:
    """Coerce *value* to a ``Category``.

    Raises ``UnknownCategoryError`` rather than guessing.
    """
    if isinstance(value, Category):
        return value
    try:
        return Category(value)
    except ValueError:
        raise UnknownCategoryError(value) from None


def classify(category: Category | str) -> tuple[Category, Severity]:
    """Return the ``(Category, Severity)`` pair for a raw match category."""
    cat = normalize_category(category)
    try:
        return cat, SEVERITY_BY_CATEGORY[cat]
    except KeyError:
        # Enum grew without a table entry.
        raise UnknownCategoryError(cat) from None
