"""Rule dispatch — turn a combined ``Check`` mask into constraint calls.

Kinds run in the fixed order of ``CONSTRAINTS``. Every applicable kind runs
whatever the earlier ones returned, so one field can collect several
messages in a single pass. ``Check.FILE`` switches to the upload constraint
alone.
"""

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from formcheck.validation import rules
from formcheck.validation.config import FieldRule
from formcheck.validation.context import FieldContext
from formcheck.validation.files import file as file_constraint
from formcheck.validation.kinds import Check
from formcheck.validation.rules import Constraint
from formcheck.validation.sink import ErrorSink

type RuleLike = FieldRule | Mapping[str, Any] | int

CONSTRAINTS: tuple[tuple[Check, Constraint], ...] = (
    (Check.REQUIRED, rules.required),
    (Check.LENGTH, rules.length),
    (Check.EMAIL, rules.email),
    (Check.URL, rules.url),
    (Check.ALNUM, rules.alnum),
    (Check.UNSIGNED, rules.unsigned),
    (Check.REGEXP, rules.regexp),
    (Check.CUSTOM, rules.custom),
    (Check.CONFIRM, rules.confirm),
)


def evaluate(
    value: Any,
    rule: RuleLike,
    sink: ErrorSink,
    ctx: FieldContext | None = None,
) -> bool:
    """Run every constraint *rule* selects against *value*.

    Args:
        value: The submitted value (or upload metadata for file rules).
        rule: A ``FieldRule``, its mapping form, or a bare ``Check`` mask.
        sink: Receives the failure messages.
        ctx: Field name and sibling data; defaults to an anonymous field
            with no siblings.

    Returns:
        True if every applicable constraint passed.
    """
    field_rule = FieldRule.coerce(rule)
    if ctx is None:
        ctx = FieldContext(rule=field_rule)
    elif ctx.rule is not field_rule:
        ctx = replace(ctx, rule=field_rule)

    if field_rule.has(Check.FILE):
        return file_constraint(value, ctx, sink)

    passed = True
    for kind, constraint in CONSTRAINTS:
        if field_rule.has(kind) and not constraint(value, ctx, sink):
            passed = False
    return passed


def evaluate_one(value: Any, rule: RuleLike) -> bool:
    """Check a single ad-hoc value outside a ``Validator``.

    Usage::

        evaluate_one(request_args["username"], CH_REQUIRED | CH_ALNUM)
        evaluate_one(name, {"check": CH_LENGTH, "min": 4})
    """
    return evaluate(value, rule, ErrorSink())


def errors_for(value: Any, rule: RuleLike) -> list[str]:
    """Like ``evaluate_one`` but return the failure messages instead."""
    sink = ErrorSink()
    evaluate(value, rule, sink)
    return sink.drain()
