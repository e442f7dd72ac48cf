"""formcheck exception hierarchy.

Shared across config parsing, the validator, and the form adapter so every
module raises and catches the same types. Per-field validation failures are
never raised: they are collected into the validator's error sets.
"""


class FormcheckError(Exception):
    """Base for all formcheck-specific errors."""


class ConfigurationError(FormcheckError):
    """Raised when a validator configuration is invalid.

    Raised eagerly when a ``Validator`` or ``ValidatorConfig`` is built,
    never deferred to ``check()``.
    """
