# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for Rule, ValidatorConfig and the error hierarchy."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from fieldrules import (
    ConfigurationError,
    FieldAccessError,
    FieldRulesError,
    PredicateError,
    RegistrationError,
    ReportError,
    Rule,
    UnknownFieldError,
    UnknownPredicateError,
    ValidatorConfig,
)
from fieldrules.models import split_expression


class TestRule:
    """Tests for the Rule model."""

    def test_rule_is_frozen(self):
        """Test rules cannot be mutated after construction."""
        rule = Rule(field="Name", expression="alpha", message="letters")
        with pytest.raises(PydanticValidationError):
            rule.expression = "required"

    def test_rule_is_hashable(self):
        """Test frozen rules can be used in sets."""
        rule = Rule(field="Name", expression="alpha", message="letters")
        assert len({rule, Rule(field="Name", expression="alpha", message="letters")}) == 1

    def test_field_required(self):
        """Test an empty field identifier is rejected."""
        with pytest.raises(PydanticValidationError):
            Rule(field="", expression="alpha", message="letters")

    def test_predicate_names(self):
        """Test expression splitting drops blanks and whitespace."""
        rule = Rule(field="Age", expression="required, numeric,,is-even ", message="m")
        assert rule.predicate_names() == ("required", "numeric", "is-even")
        assert Rule(field="Age", message="m").predicate_names() == ()

    def test_split_expression_custom_separator(self):
        """Test split_expression honors the separator."""
        assert split_expression("a|b|", "|") == ("a", "b")
        assert split_expression("a,b", "|") == ("a,b",)


class TestValidatorConfig:
    """Tests for ValidatorConfig."""

    def test_defaults(self):
        """Test default configuration values."""
        config = ValidatorConfig()
        assert config.separator == ","
        assert config.tag_key == "json"
        assert config.short_circuit is True
        assert config.strict_fields is False
        assert config.register_builtins is True

    def test_empty_separator_rejected(self):
        """Test an empty separator is invalid."""
        with pytest.raises(PydanticValidationError):
            ValidatorConfig(separator="")

    def test_config_is_frozen(self):
        """Test config cannot be mutated."""
        config = ValidatorConfig()
        with pytest.raises(PydanticValidationError):
            config.strict_fields = True


class TestErrors:
    """Tests for the exception hierarchy."""

    def test_default_message(self):
        """Test default message is used when none provided."""
        assert FieldRulesError().message == "fieldrules error"
        assert UnknownPredicateError().message == "unknown predicate"

    def test_details_and_to_dict(self):
        """Test details are stored and serialized."""
        err = RegistrationError("bad", details={"name": ""})
        assert err.to_dict() == {
            "error": "RegistrationError",
            "message": "bad",
            "retryable": False,
            "details": {"name": ""},
        }

    def test_cause_chaining(self):
        """Test cause is preserved as __cause__."""
        original = ValueError("original")
        err = FieldRulesError("wrapped", cause=original)
        assert err.__cause__ is original

    def test_configuration_errors_not_retryable(self):
        """Test configuration errors default to not retryable."""
        for cls in (
            RegistrationError,
            UnknownPredicateError,
            UnknownFieldError,
            FieldAccessError,
            PredicateError,
        ):
            err = cls()
            assert isinstance(err, ConfigurationError)
            assert isinstance(err, FieldRulesError)
            assert err.retryable is False

    def test_report_error_is_not_configuration_error(self):
        """Test ReportError sits outside the configuration branch."""
        assert not issubclass(ReportError, ConfigurationError)
        assert issubclass(ReportError, FieldRulesError)
