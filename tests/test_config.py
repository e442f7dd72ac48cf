"""Tests for formcheck.validation.config — FieldRule and ValidatorConfig parsing."""

import re

import pytest

from formcheck.errors import ConfigurationError
from formcheck.validation import (
    CH_ALNUM,
    CH_CONFIRM,
    CH_CUSTOM,
    CH_FILE,
    CH_LENGTH,
    CH_REGEXP,
    CH_REQUIRED,
    Check,
    CustomRule,
    FieldRule,
    ValidatorConfig,
)


def always(value: object, ctx: object) -> bool:
    return True


class TestCheckFlags:
    def test_values(self) -> None:
        assert [int(kind) for kind in Check] == [1, 2, 4, 8, 16, 32, 64, 128, 256, 512]

    def test_aliases(self) -> None:
        assert CH_REQUIRED is Check.REQUIRED
        assert CH_CONFIRM == 512

    def test_combine(self) -> None:
        mask = CH_REQUIRED | CH_ALNUM
        assert mask & Check.REQUIRED
        assert mask & Check.ALNUM
        assert not mask & Check.EMAIL


class TestFieldRule:
    def test_coerce_bare_int(self) -> None:
        rule = FieldRule.coerce(CH_REQUIRED | CH_LENGTH)
        assert rule.check == Check.REQUIRED | Check.LENGTH
        assert rule.min is None
        assert rule.message is None

    def test_coerce_plain_int(self) -> None:
        rule = FieldRule.coerce(3)
        assert rule.check == Check.REQUIRED | Check.LENGTH
        assert isinstance(rule.check, Check)

    def test_coerce_passthrough(self) -> None:
        rule = FieldRule(check=CH_REQUIRED)
        assert FieldRule.coerce(rule) is rule

    def test_from_mapping(self) -> None:
        rule = FieldRule.coerce(
            {"check": CH_LENGTH, "min": 4, "max": 8, "message": "Bad length."}
        )
        assert rule.min == 4
        assert rule.max == 8
        assert rule.message == "Bad length."

    def test_missing_check(self) -> None:
        with pytest.raises(ConfigurationError, match="must contain element 'check'"):
            FieldRule.coerce({"min": 4})

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown rule parameter"):
            FieldRule.coerce({"check": CH_LENGTH, "minimum": 4})

    @pytest.mark.parametrize("check", ["1", 1.5, None, True])
    def test_check_must_be_int(self, check: object) -> None:
        with pytest.raises(ConfigurationError, match="must be a Check bitmask"):
            FieldRule.coerce({"check": check})

    def test_unknown_bits(self) -> None:
        with pytest.raises(ConfigurationError, match="unknown bits"):
            FieldRule.coerce(1024)

    def test_min_greater_than_max(self) -> None:
        with pytest.raises(ConfigurationError, match="cannot be greater"):
            FieldRule(check=CH_LENGTH, min=9, max=3)

    def test_bound_must_be_number(self) -> None:
        with pytest.raises(ConfigurationError, match="'max' must be a number"):
            FieldRule.coerce({"check": CH_LENGTH, "max": "8"})

    def test_rule_compiled(self) -> None:
        rule = FieldRule.coerce({"check": CH_REGEXP, "rule": r"^\d+$"})
        assert isinstance(rule.rule, re.Pattern)

    def test_rule_precompiled_kept(self) -> None:
        pattern = re.compile(r"x")
        assert FieldRule(check=CH_REGEXP, rule=pattern).rule is pattern

    def test_invalid_pattern(self) -> None:
        with pytest.raises(ConfigurationError, match="not a valid pattern"):
            FieldRule.coerce({"check": CH_REGEXP, "rule": "("})

    def test_regexp_requires_rule(self) -> None:
        with pytest.raises(ConfigurationError, match="requires a 'rule'"):
            FieldRule.coerce(CH_REGEXP)

    def test_custom_requires_predicate(self) -> None:
        with pytest.raises(ConfigurationError, match="requires a 'custom'"):
            FieldRule.coerce(CH_CUSTOM)

    def test_custom_callable(self) -> None:
        rule = FieldRule.coerce({"check": CH_CUSTOM, "custom": always})
        assert rule.custom == CustomRule(method=always)

    def test_custom_mapping(self) -> None:
        rule = FieldRule.coerce(
            {"check": CH_CUSTOM, "custom": {"method": always, "message": "Taken."}}
        )
        assert rule.custom == CustomRule(method=always, message="Taken.")

    def test_custom_mapping_with_custom_key(self) -> None:
        rule = FieldRule.coerce(
            {"check": CH_CUSTOM, "custom": {"custom": always, "message": "Taken."}}
        )
        assert rule.custom is not None
        assert rule.custom.method is always

    def test_custom_not_callable(self) -> None:
        with pytest.raises(ConfigurationError, match="must be callable"):
            FieldRule.coerce({"check": CH_CUSTOM, "custom": "is_unique"})

    def test_custom_pair_missing_method(self) -> None:
        with pytest.raises(ConfigurationError, match="must be callable"):
            FieldRule.coerce({"check": CH_CUSTOM, "custom": (object(), "nope")})

    def test_field_alias_for_confirm(self) -> None:
        rule = FieldRule.coerce({"check": CH_CONFIRM, "field": "password"})
        assert rule.confirm == "password"

    def test_type_maps_to_mime_types(self) -> None:
        rule = FieldRule.coerce({"check": CH_FILE, "type": "image/png, image/jpeg"})
        assert rule.mime_types == "image/png, image/jpeg"

    def test_frozen(self) -> None:
        rule = FieldRule(check=CH_REQUIRED)
        with pytest.raises(AttributeError):
            rule.message = "x"  # type: ignore[misc]

    def test_has(self) -> None:
        rule = FieldRule(check=CH_REQUIRED | CH_ALNUM)
        assert rule.has(Check.ALNUM)
        assert not rule.has(Check.URL)


class TestValidatorConfig:
    def test_bare_field_map(self) -> None:
        cfg = ValidatorConfig.parse({"name": CH_REQUIRED, "nick": CH_ALNUM})
        assert set(cfg.fields) == {"name", "nick"}
        assert cfg.group is None
        assert cfg.fields["name"] == FieldRule(check=CH_REQUIRED)

    def test_single_field_map(self) -> None:
        cfg = ValidatorConfig.parse({"name": CH_REQUIRED})
        assert list(cfg.fields) == ["name"]

    def test_record_form(self) -> None:
        cfg = ValidatorConfig.parse({"fields": {"agree": CH_REQUIRED}, "group": "terms"})
        assert list(cfg.fields) == ["agree"]
        assert cfg.group == "terms"

    def test_record_missing_fields(self) -> None:
        with pytest.raises(ConfigurationError, match="must contain element 'fields'"):
            ValidatorConfig.parse({"group": "terms", "agree": CH_REQUIRED})

    def test_record_unknown_key(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown configuration key"):
            ValidatorConfig.parse({"fields": {}, "groups": "x"})

    def test_fields_must_be_mapping(self) -> None:
        with pytest.raises(ConfigurationError, match="'fields' must be a mapping"):
            ValidatorConfig.parse({"fields": ["name"]})

    def test_group_must_be_string(self) -> None:
        with pytest.raises(ConfigurationError, match="'group' must be a string"):
            ValidatorConfig.parse({"fields": {}, "group": 3})

    def test_not_a_mapping(self) -> None:
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            ValidatorConfig.parse([("name", CH_REQUIRED)])  # type: ignore[arg-type]

    def test_parse_passthrough(self) -> None:
        cfg = ValidatorConfig(fields={"name": CH_REQUIRED})
        assert ValidatorConfig.parse(cfg) is cfg

    def test_fields_read_only(self) -> None:
        cfg = ValidatorConfig.parse({"name": CH_REQUIRED})
        with pytest.raises(TypeError):
            cfg.fields["other"] = FieldRule(check=CH_REQUIRED)  # type: ignore[index]

    def test_source_mapping_not_shared(self) -> None:
        raw = {"name": CH_REQUIRED}
        cfg = ValidatorConfig.parse(raw)
        raw["other"] = CH_ALNUM
        assert list(cfg.fields) == ["name"]
