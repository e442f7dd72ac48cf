"""Form validation — bit-flag rules, per-field error sets.

Usage::

    from formcheck.validation import CH_EMAIL, CH_LENGTH, CH_REQUIRED, Validator

    validator = Validator({
        "fields": {
            "title": {"check": CH_REQUIRED | CH_LENGTH, "max": 200},
            "email": CH_REQUIRED | CH_EMAIL,
        },
    })
    if not validator.check(form):
        errors = validator.get_errors()

Or in one call::

    result = validate(form, {"email": CH_REQUIRED | CH_EMAIL})
    if not result:
        ...
"""

from collections.abc import Mapping
from typing import Any

from formcheck.validation.config import CustomRule, FieldRule, ValidatorConfig
from formcheck.validation.context import FieldContext
from formcheck.validation.dispatch import errors_for, evaluate, evaluate_one
from formcheck.validation.files import UploadError, UploadInfo
from formcheck.validation.kinds import (
    CH_ALNUM,
    CH_CONFIRM,
    CH_CUSTOM,
    CH_EMAIL,
    CH_FILE,
    CH_LENGTH,
    CH_REGEXP,
    CH_REQUIRED,
    CH_UNSIGNED,
    CH_URL,
    Check,
)
from formcheck.validation.result import ValidationResult
from formcheck.validation.sink import ErrorSink
from formcheck.validation.validator import Validator

__all__ = [
    "CH_ALNUM",
    "CH_CONFIRM",
    "CH_CUSTOM",
    "CH_EMAIL",
    "CH_FILE",
    "CH_LENGTH",
    "CH_REGEXP",
    "CH_REQUIRED",
    "CH_UNSIGNED",
    "CH_URL",
    "Check",
    "CustomRule",
    "ErrorSink",
    "FieldContext",
    "FieldRule",
    "UploadError",
    "UploadInfo",
    "ValidationResult",
    "Validator",
    "ValidatorConfig",
    "errors_for",
    "evaluate",
    "evaluate_one",
    "validate",
]


def validate(
    data: Mapping[str, Any],
    config: ValidatorConfig | Mapping[str, Any],
    *,
    files: Mapping[str, Any] | None = None,
) -> ValidationResult:
    """Validate data against a config in one call.

    Args:
        data: Any mapping of field names to submitted values — ``form_input()``
            output, query parameters, or a plain ``dict``.
        config: A ``ValidatorConfig``, a ``{"fields": ..., "group": ...}``
            record, or a bare field map.
        files: Upload metadata kept apart from *data*, if any.

    Returns:
        A ``ValidationResult`` with ``.data`` (the submitted values) and
        ``.errors`` (field → tuple of error messages, empty when valid).

    Raises:
        ConfigurationError: If *config* is malformed.

    Example::

        result = validate(form, {
            "username": {"check": CH_REQUIRED | CH_LENGTH, "min": 4},
        })
        if not result:
            # result.errors == {"username": ("Value should contatain minimum 4 characters.",)}
            ...
    """
    validator = Validator(config)
    validator.check(data, files)
    return validator.result
