"""Value constraints — one function per constraint kind.

Every constraint has the signature::

    def constraint(value: Any, ctx: FieldContext, sink: ErrorSink) -> bool:
        '''Return True on success; on failure push one message and return False.'''

A failing constraint pushes ``ctx.rule.message`` when the rule overrides it,
or its own default message. The defaults below are matched verbatim by
existing front ends, spelling included, so they must not be reworded.

File uploads take a separate path, see ``formcheck.validation.files``.
"""

import logging
import math
import re
from collections.abc import Callable
from typing import Any

from formcheck.validation.context import FieldContext
from formcheck.validation.sink import ErrorSink

logger = logging.getLogger("formcheck.validation")

# Type alias for a constraint function
type Constraint = Callable[[Any, FieldContext, ErrorSink], bool]

GENERIC_ERROR = "Validation on this field failed."


def _text(value: Any) -> str:
    """Render a submitted value as the string the patterns run against."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _fail(ctx: FieldContext, sink: ErrorSink, default: str) -> bool:
    sink.push(ctx.message if ctx.message is not None else default)
    return False


def _bounds_message(
    ctx: FieldContext,
    number: float,
    between: str,
    minimum: str,
    maximum: str,
) -> str | None:
    """Apply the min/max/both logic shared by length and unsigned checks.

    Returns the default message of the violated bound, or None when in range.
    """
    lo, hi = ctx.rule.min, ctx.rule.max
    if lo is not None and hi is not None:
        if number < lo or number > hi:
            return between % (lo, hi)
    elif lo is not None:
        if number < lo:
            return minimum % lo
    elif hi is not None:
        if number > hi:
            return maximum % hi
    return None


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------

REQUIRED_ERROR = "Value can not be blank."


def required(value: Any, ctx: FieldContext, sink: ErrorSink) -> bool:
    """Value must be non-blank. A list of values (checkbox group) is always present."""
    if isinstance(value, list | tuple | set | frozenset):
        return True
    if not _text(value).strip():
        return _fail(ctx, sink, REQUIRED_ERROR)
    return True


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------

LENGTH_BETWEEN = "Value should contain between %d and %d characters."
LENGTH_MIN = "Value should contatain minimum %d characters."
LENGTH_MAX = "Value should contatain maximum %d characters."


def length(value: Any, ctx: FieldContext, sink: ErrorSink) -> bool:
    """Character count must respect ``min`` and/or ``max``."""
    error = _bounds_message(ctx, len(_text(value)), LENGTH_BETWEEN, LENGTH_MIN, LENGTH_MAX)
    if error is not None:
        return _fail(ctx, sink, error)
    return True


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

EMAIL_PATTERN = re.compile(
    r'^(\b[\w\.%\-&]+\b|"[^"]+")@\b[\w\-&]+\b(\.\b[\w\-&]+\b)*\.[A-Za-z]{2,4}$',
    re.ASCII,
)
EMAIL_ERROR = "Value is not a valid email address."

URL_PATTERN = re.compile(
    r"^(https?://|)"
    r"(\b[\w\-&]+\b(\.\b[\w\-&]+\b)*\.[A-Za-z]{2,4}|\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})"
    r"(:\d+|)(/[^?]*|)(\?.*|)$",
    re.ASCII | re.IGNORECASE,
)
URL_ERROR = "Value is not a valid URL address."

ALNUM_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]+$")
ALNUM_ERROR = "You can only use letters, numbers and _ with a letter first."


def email(value: Any, ctx: FieldContext, sink: ErrorSink) -> bool:
    """Value must look like an email address."""
    if not EMAIL_PATTERN.match(_text(value)):
        return _fail(ctx, sink, EMAIL_ERROR)
    return True


def url(value: Any, ctx: FieldContext, sink: ErrorSink) -> bool:
    """Value must look like a URL; scheme, port, path and query are optional."""
    if not URL_PATTERN.match(_text(value)):
        return _fail(ctx, sink, URL_ERROR)
    return True


def alnum(value: Any, ctx: FieldContext, sink: ErrorSink) -> bool:
    """Letters, digits and underscore with a letter first; at least two characters."""
    if not ALNUM_PATTERN.match(_text(value)):
        return _fail(ctx, sink, ALNUM_ERROR)
    return True


def regexp(value: Any, ctx: FieldContext, sink: ErrorSink) -> bool:
    """Value must contain a match for the rule's ``rule`` pattern."""
    pattern = ctx.rule.rule
    if pattern is None or not pattern.search(_text(value)):
        return _fail(ctx, sink, GENERIC_ERROR)
    return True


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

# Numeric strings as form submissions write them: " 12", "+3.5", ".5", "1e3"
_NUMERIC_RE = re.compile(r"\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*", re.ASCII)

UNSIGNED_ERROR = "Value must be an unsigned number."
UNSIGNED_BETWEEN = "Value must be between %d and %d."
UNSIGNED_MIN = "Value must be minimum %d."
UNSIGNED_MAX = "Value must be maximum %d."


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return None if math.isnan(value) else float(value)
    if isinstance(value, str) and _NUMERIC_RE.fullmatch(value):
        return float(value)
    return None


def unsigned(value: Any, ctx: FieldContext, sink: ErrorSink) -> bool:
    """Value must be a number >= 0, then respect ``min`` and/or ``max``."""
    number = _as_number(value)
    if number is None or number < 0:
        return _fail(ctx, sink, UNSIGNED_ERROR)

    error = _bounds_message(ctx, number, UNSIGNED_BETWEEN, UNSIGNED_MIN, UNSIGNED_MAX)
    if error is not None:
        return _fail(ctx, sink, error)
    return True


# ---------------------------------------------------------------------------
# Cross-field
# ---------------------------------------------------------------------------


def custom(value: Any, ctx: FieldContext, sink: ErrorSink) -> bool:
    """Run the caller's predicate with ``(value, ctx)``.

    The failure message is the predicate's own, then the rule's, then the
    generic default. Exceptions raised by the predicate propagate.
    """
    predicate = ctx.rule.custom
    if predicate is None:
        return _fail(ctx, sink, GENERIC_ERROR)
    if predicate.method(value, ctx):
        return True
    if predicate.message is not None:
        sink.push(predicate.message)
        return False
    return _fail(ctx, sink, GENERIC_ERROR)


CONFIRM_ERROR = "Confirmation failed."

_CONFIRM_SUFFIXES = ("_confirmation", "_confirm")


def confirm_target(field_name: str) -> str:
    """Name of the field *field_name* confirms: ``password_confirm`` -> ``password``."""
    for suffix in _CONFIRM_SUFFIXES:
        if field_name.endswith(suffix):
            return field_name.removesuffix(suffix)
    return field_name


def confirm(value: Any, ctx: FieldContext, sink: ErrorSink) -> bool:
    """Value must equal the sibling field it confirms.

    Numeric strings are compared by value, so ``"1.0"`` confirms ``"1"``.

    A sibling that was not submitted fails the check without a message, so
    the field ends up with an empty error set.
    """
    target = ctx.rule.confirm or confirm_target(ctx.field)
    other = ctx.sibling(target)
    if other is None:
        logger.warning(
            "Field %r confirms %r, which is missing from the submitted data",
            ctx.field,
            target,
        )
        return False
    if not _loosely_equal(value, other):
        return _fail(ctx, sink, CONFIRM_ERROR)
    return True


def _loosely_equal(value: Any, other: Any) -> bool:
    """Numeric values compare as numbers ("1.0" == "1"), anything else as text."""
    a, b = _as_number(value), _as_number(other)
    if a is not None and b is not None:
        return a == b
    return _text(value) == _text(other)
