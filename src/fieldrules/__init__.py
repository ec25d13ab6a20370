# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Declarative rule-based validation for structured records.

Core of the validation pipeline:
    Rule list + record → resolve field → run predicates → ErrorReport

Features:
- PredicateRegistry: Maps tag names → predicate functions (per Validator)
- Built-in predicates: required, alpha, alphanum, numeric, email, ...
- FieldResolver: Field values and serialization names (pydantic, dataclasses)
- ErrorReport: Ordered field/message pairs with message overrides

Usage:
    from dataclasses import dataclass, field
    from fieldrules import Rule, Validator

    @dataclass
    class User:
        Name: str = field(metadata={"json": "name"})
        Email: str = field(metadata={"json": "email,omitempty"})

    validator = Validator()
    report = validator.validate(
        User(Name="John123", Email="john@example.com"),
        [Rule(field="Name", expression="required,alpha", message="Name must contain only letters")],
    )
    # → validation errors: [name: Name must contain only letters]
"""

from .config import ValidatorConfig
from .errors import (
    ConfigurationError,
    FieldAccessError,
    FieldRulesError,
    PredicateError,
    RegistrationError,
    ReportError,
    UnknownFieldError,
    UnknownPredicateError,
)
from .models import Rule, ValidationError
from .predicates import BUILTIN_PREDICATES, Predicate
from .registry import PredicateRegistry, create_default_registry
from .report import ErrorReport
from .resolver import MISSING, FieldAccessor, FieldResolver
from .validator import Validator

__all__ = (
    "BUILTIN_PREDICATES",
    "MISSING",
    "ConfigurationError",
    "ErrorReport",
    "FieldAccessError",
    "FieldAccessor",
    "FieldResolver",
    "FieldRulesError",
    "Predicate",
    "PredicateError",
    "PredicateRegistry",
    "RegistrationError",
    "ReportError",
    "Rule",
    "UnknownFieldError",
    "UnknownPredicateError",
    "ValidationError",
    "Validator",
    "ValidatorConfig",
    "create_default_registry",
)
