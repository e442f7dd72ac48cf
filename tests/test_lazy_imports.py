"""Tests for formcheck.__init__ — lazy import registry covers all public names."""

import pytest

import formcheck


@pytest.mark.parametrize("name", formcheck.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(formcheck, name)
    assert obj is not None, f"formcheck.{name} resolved to None"


def test_top_level_matches_submodules() -> None:
    from formcheck.errors import ConfigurationError
    from formcheck.validation import Validator

    assert formcheck.Validator is Validator
    assert formcheck.ConfigurationError is ConfigurationError


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        formcheck.__getattr__("ThisDoesNotExist")
