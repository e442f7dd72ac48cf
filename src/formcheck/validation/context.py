"""Per-field evaluation context.

Built fresh for every field on every ``check()`` so constraints and custom
predicates can see sibling values without the stored rule ever being
modified.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field as dc_field
from types import MappingProxyType
from typing import Any

from formcheck.validation.config import FieldRule

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class FieldContext:
    """What a constraint knows besides the value under test.

    ``data`` is the submitted input (after group resolution) exactly as it
    arrived, so a sibling that was never submitted is absent from it.
    ``files`` holds upload metadata when it was passed separately from
    ``data``; otherwise it is ``None`` and file fields carry their metadata
    as their value.
    """

    rule: FieldRule
    field: str = ""
    group: str | None = None
    data: Mapping[str, Any] = dc_field(default_factory=lambda: _EMPTY)
    files: Mapping[str, Any] | None = None

    @property
    def message(self) -> str | None:
        """The rule-level message override, if any."""
        return self.rule.message

    def sibling(self, name: str, default: Any = None) -> Any:
        """Return another submitted field's value, or *default*."""
        return self.data.get(name, default)
