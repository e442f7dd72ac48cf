"""formcheck — declarative validation for submitted form data.

Rules are bit flags combined per field, with optional parameters::

    from formcheck import CH_ALNUM, CH_CONFIRM, CH_LENGTH, CH_REQUIRED, Validator

    validator = Validator({
        "username": {"check": CH_REQUIRED | CH_ALNUM | CH_LENGTH, "min": 4, "max": 8},
        "password": CH_REQUIRED,
        "password_confirm": CH_CONFIRM,
    })

    if not validator.check(form):
        errors = validator.get_errors()

Framework-parsed fields and uploads::

    from formcheck.forms import form_input
    validator.check(form_input(request.form, request.files))
"""

__version__ = "0.1.0"
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
    "ConfigurationError",
    "CustomRule",
    "FieldRule",
    "FormcheckError",
    "UploadInfo",
    "ValidationResult",
    "Validator",
    "ValidatorConfig",
    "evaluate_one",
    "validate",
]

_ERRORS = frozenset({"ConfigurationError", "FormcheckError"})


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import formcheck`` fast while providing a clean top-level API.
    """
    if name in _ERRORS:
        from formcheck import errors as _errors

        return getattr(_errors, name)

    if name in __all__:
        from formcheck import validation as _validation

        return getattr(_validation, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
