"""Validation result — immutable snapshot of one ``check()`` pass."""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating submitted data against a validator config.

    ``errors`` holds an entry for every configured field; a field whose
    tuple is empty passed. The result is falsy when any field failed::

        result = validate(form, config)
        if not result:
            return render_form(form, errors=result.errors)

    ``data`` is the submitted input the pass ran against (after group
    resolution). Both mappings are read-only copies, so later changes to
    the input or to the validator do not show through.
    """

    data: Mapping[str, Any]
    errors: Mapping[str, tuple[str, ...]]

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))
        errors = {name: tuple(messages) for name, messages in self.errors.items()}
        object.__setattr__(self, "errors", MappingProxyType(errors))

    @property
    def is_valid(self) -> bool:
        """True if no field collected an error message."""
        return not any(self.errors.values())

    @property
    def failed(self) -> list[str]:
        """Names of the fields that collected at least one message."""
        return [name for name, messages in self.errors.items() if messages]

    def __bool__(self) -> bool:
        """Falsy when invalid — enables ``if not result:`` pattern."""
        return self.is_valid
