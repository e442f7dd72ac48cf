"""Validator configuration — field rules and the validator config record.

Configuration is built once and never mutated. Plain mappings are accepted
everywhere and parsed eagerly, so a malformed rule fails at construction
instead of in the middle of a ``check()``::

    config = ValidatorConfig.parse({
        "fields": {
            "username": {"check": CH_REQUIRED | CH_ALNUM | CH_LENGTH, "min": 4, "max": 8},
            "email": CH_REQUIRED | CH_EMAIL,
        },
        "group": "signup",
    })

A bare field map is accepted as well::

    ValidatorConfig.parse({"email": CH_REQUIRED | CH_EMAIL})
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from formcheck.errors import ConfigurationError
from formcheck.validation.kinds import ALL_CHECKS, Check

if TYPE_CHECKING:
    from formcheck.validation.context import FieldContext

# Predicate signature for Check.CUSTOM rules
type Predicate = Callable[[Any, FieldContext], bool]

# Keys a rule mapping may carry. "field" is the documented alias of "confirm".
_RULE_KEYS = frozenset(
    {"check", "min", "max", "message", "rule", "extension", "type", "custom", "confirm", "field"}
)

_CONFIG_KEYS = frozenset({"fields", "group"})


@dataclass(frozen=True, slots=True)
class CustomRule:
    """A custom predicate with its own failure message.

    ``message`` takes precedence over the field rule's ``message``.
    """

    method: Predicate
    message: str | None = None


@dataclass(frozen=True, slots=True)
class FieldRule:
    """Validation rule for a single field.

    ``check`` is the combined ``Check`` bitmask; every other attribute is a
    parameter read only by the kinds that need it.
    """

    check: Check
    min: int | float | None = None
    max: int | float | None = None
    message: str | None = None
    rule: re.Pattern[str] | None = None
    extension: str | None = None
    mime_types: str | None = None
    custom: CustomRule | None = None
    confirm: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "check", _coerce_check(self.check))
        object.__setattr__(self, "min", _coerce_bound("min", self.min))
        object.__setattr__(self, "max", _coerce_bound("max", self.max))
        object.__setattr__(self, "rule", _coerce_pattern(self.rule))
        object.__setattr__(self, "custom", _coerce_custom(self.custom))

        if self.min is not None and self.max is not None and self.min > self.max:
            msg = f"min ({self.min}) cannot be greater than max ({self.max})"
            raise ConfigurationError(msg)
        if self.has(Check.REGEXP) and self.rule is None:
            msg = "Check.REGEXP requires a 'rule' pattern"
            raise ConfigurationError(msg)
        if self.has(Check.CUSTOM) and self.custom is None:
            msg = "Check.CUSTOM requires a 'custom' predicate"
            raise ConfigurationError(msg)

    def has(self, kind: Check) -> bool:
        """True if *kind* is set on this rule."""
        return bool(self.check & kind)

    @classmethod
    def coerce(cls, raw: Any) -> FieldRule:
        """Normalize a bare bitmask, a rule mapping, or a ``FieldRule``."""
        if isinstance(raw, FieldRule):
            return raw
        if isinstance(raw, Mapping):
            return cls.from_mapping(raw)
        return cls(check=raw)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> FieldRule:
        """Build a rule from its mapping form.

        Raises:
            ConfigurationError: If ``check`` is missing, a key is unknown, or
                a parameter has the wrong shape.
        """
        unknown = set(raw) - _RULE_KEYS
        if unknown:
            names = ", ".join(sorted(unknown))
            msg = f"Unknown rule parameter(s): {names}"
            raise ConfigurationError(msg)
        if "check" not in raw:
            msg = "Validation rule must contain element 'check'."
            raise ConfigurationError(msg)

        return cls(
            check=raw["check"],
            min=raw.get("min"),
            max=raw.get("max"),
            message=raw.get("message"),
            rule=raw.get("rule"),
            extension=raw.get("extension"),
            mime_types=raw.get("type"),
            custom=raw.get("custom"),
            confirm=raw.get("confirm", raw.get("field")),
        )


@dataclass(frozen=True, slots=True)
class ValidatorConfig:
    """Immutable validator configuration.

    ``fields`` maps field names to rules. When ``group`` is set, the values
    to validate live under that key of the submitted data (sub-forms,
    checkbox groups).
    """

    fields: Mapping[str, FieldRule] = field(default_factory=dict)
    group: str | None = None

    def __post_init__(self) -> None:
        rules = {name: FieldRule.coerce(rule) for name, rule in self.fields.items()}
        object.__setattr__(self, "fields", MappingProxyType(rules))

    @classmethod
    def parse(cls, raw: ValidatorConfig | Mapping[str, Any]) -> ValidatorConfig:
        """Build a config from a record ``{"fields": ..., "group": ...}`` or a bare field map.

        Raises:
            ConfigurationError: If the structure is not recognised.
        """
        if isinstance(raw, ValidatorConfig):
            return raw
        if not isinstance(raw, Mapping):
            msg = "Validation configuration must be a mapping."
            raise ConfigurationError(msg)

        if "fields" in raw:
            unknown = set(raw) - _CONFIG_KEYS
            if unknown:
                names = ", ".join(sorted(unknown))
                msg = f"Unknown configuration key(s): {names}"
                raise ConfigurationError(msg)
            fields = raw["fields"]
            if not isinstance(fields, Mapping):
                msg = "Configuration element 'fields' must be a mapping."
                raise ConfigurationError(msg)
            group = raw.get("group")
            if group is not None and not isinstance(group, str):
                msg = "Configuration element 'group' must be a string."
                raise ConfigurationError(msg)
            return cls(fields=fields, group=group)

        # A string value can never be a rule: this is a record missing "fields".
        if any(isinstance(value, str) for value in raw.values()):
            msg = "Validation configuration must contain element 'fields'."
            raise ConfigurationError(msg)
        return cls(fields=raw)


# ---------------------------------------------------------------------------
# Parameter coercion
# ---------------------------------------------------------------------------


def _coerce_check(raw: Any) -> Check:
    if isinstance(raw, bool) or not isinstance(raw, int):
        msg = f"Rule 'check' must be a Check bitmask, got {type(raw).__name__}"
        raise ConfigurationError(msg)
    if raw & ~int(ALL_CHECKS):
        msg = f"Rule 'check' contains unknown bits: {raw!r}"
        raise ConfigurationError(msg)
    return Check(raw)


def _coerce_bound(name: str, raw: Any) -> int | float | None:
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, int | float):
        msg = f"Rule parameter '{name}' must be a number, got {type(raw).__name__}"
        raise ConfigurationError(msg)
    return raw


def _coerce_pattern(raw: Any) -> re.Pattern[str] | None:
    if raw is None or isinstance(raw, re.Pattern):
        return raw
    try:
        return re.compile(raw)
    except (re.error, TypeError) as exc:
        msg = f"Rule parameter 'rule' is not a valid pattern: {exc}"
        raise ConfigurationError(msg) from exc


def _coerce_custom(raw: Any) -> CustomRule | None:
    """Accept a callable, a ``CustomRule``, ``{"method", "message"}``, or ``(target, "name")``."""
    if raw is None or isinstance(raw, CustomRule):
        return raw
    if isinstance(raw, Mapping):
        method = raw.get("method", raw.get("custom"))
        return CustomRule(method=_resolve_callable(method), message=raw.get("message"))
    return CustomRule(method=_resolve_callable(raw))


def _resolve_callable(raw: Any) -> Predicate:
    if isinstance(raw, tuple) and len(raw) == 2 and isinstance(raw[1], str):
        target, name = raw
        raw = getattr(target, name, None)
    if not callable(raw):
        msg = f"Rule parameter 'custom' must be callable, got {type(raw).__name__}"
        raise ConfigurationError(msg)
    return raw
