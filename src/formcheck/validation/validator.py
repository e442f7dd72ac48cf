"""Validator — runs a validator config over a whole submission.

Usage::

    validator = Validator({
        "fields": {
            "username": {"check": CH_REQUIRED | CH_ALNUM | CH_LENGTH, "min": 4, "max": 8},
            "password": CH_REQUIRED,
            "password_confirm": CH_CONFIRM,
        },
    })

    if not validator.check(form):
        print(validator.error("username", "<br>"))

The config is parsed when the validator is built and reused by every
``check()``. Each call starts from scratch: the error sets and data from a
previous call are replaced, never merged.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from formcheck.validation.config import FieldRule, ValidatorConfig
from formcheck.validation.context import FieldContext
from formcheck.validation.dispatch import evaluate
from formcheck.validation.files import group_uploads
from formcheck.validation.result import ValidationResult
from formcheck.validation.sink import ErrorSink

logger = logging.getLogger("formcheck.validation")

_EMPTY: Mapping[str, Any] = MappingProxyType({})


class Validator:
    """Validate flat maps of submitted values against per-field rules.

    Not safe to share across threads for querying: ``check()`` itself keeps
    its working state local, but the error sets it publishes belong to the
    instance and are replaced by the next call.
    """

    __slots__ = ("_config", "_data", "_errors")

    def __init__(self, config: ValidatorConfig | Mapping[str, Any]) -> None:
        """Parse *config* immediately.

        Raises:
            ConfigurationError: If *config* is malformed.
        """
        self._config = ValidatorConfig.parse(config)
        self._data: Mapping[str, Any] = _EMPTY
        self._errors: dict[str, list[str]] = {}

    @property
    def config(self) -> ValidatorConfig:
        return self._config

    @property
    def fields(self) -> Mapping[str, FieldRule]:
        return self._config.fields

    @property
    def group(self) -> str | None:
        return self._config.group

    # -- Checking --

    def check(
        self,
        data: Mapping[str, Any],
        files: Mapping[str, Any] | None = None,
    ) -> bool:
        """Validate *data* and return True if every configured field passed.

        Args:
            data: Submitted values. With a ``group`` configured, the values
                are read from ``data[group]``.
            files: Upload metadata kept apart from *data*, keyed the same
                way (under ``files[group]`` when grouped). When omitted,
                file fields read their metadata from *data*.

        Returns:
            True if no field collected an error message.
        """
        group = self._config.group
        submitted = self._resolve(data)
        uploads = None
        if files is not None:
            uploads = group_uploads(files.get(group)) if group is not None else files

        # Configured fields that were not submitted are checked as empty.
        values = dict(submitted)
        for name in self._config.fields:
            values.setdefault(name, "")

        sink = ErrorSink()
        errors: dict[str, list[str]] = {}
        for name, value in values.items():
            rule = self._config.fields.get(name)
            if rule is None:
                continue
            sink.clear()
            ctx = FieldContext(rule=rule, field=name, group=group, data=submitted, files=uploads)
            if not evaluate(value, rule, sink, ctx):
                logger.debug("Field %r failed validation: %s", name, sink.drain())
            errors[name] = sink.drain()

        self._data = submitted
        self._errors = errors
        return not self.has_errors()

    def _resolve(self, data: Mapping[str, Any]) -> Mapping[str, Any]:
        group = self._config.group
        if group is None:
            return data
        grouped = data.get(group)
        if not isinstance(grouped, Mapping):
            logger.debug("Group %r missing from submitted data", group)
            return _EMPTY
        return grouped

    # -- Results --

    def has_errors(self) -> bool:
        """True if any field collected an error message in the last check."""
        return any(self._errors.values())

    def get_errors(self) -> dict[str, list[str]]:
        """Every configured field's error set from the last check."""
        return {name: list(messages) for name, messages in self._errors.items()}

    def error(self, field: str, delimiter: str | None = None) -> str | list[str]:
        """Messages for *field*, joined with *delimiter* when one is given.

        Raises:
            KeyError: If *field* was not part of the last check.
        """
        messages = self._errors[field]
        if delimiter is not None:
            return delimiter.join(messages)
        return list(messages)

    def has_error(self, field: str) -> bool:
        """True if *field* collected at least one message."""
        return bool(self._errors.get(field))

    def get_data(self, field: str | None = None) -> Any:
        """The submitted data from the last check, or a single field's value."""
        if field is None:
            return self._data
        return self._data.get(field)

    @property
    def result(self) -> ValidationResult:
        """Immutable snapshot of the last check."""
        return ValidationResult(data=self._data, errors=self._errors)

    def __repr__(self) -> str:
        names = ", ".join(self._config.fields)
        return f"Validator(fields=[{names}], group={self._config.group!r})"
