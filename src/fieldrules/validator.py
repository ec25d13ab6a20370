# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Validator engine - applies declarative rules to a record.

Flow:
    rules + record → FieldResolver (value) → PredicateRegistry (predicates)
    → failing rules → FieldResolver (external name) → ErrorReport

Features:
- Instance-scoped predicate registry, preloaded with built-ins
- Rules naming unknown fields are skipped (or rejected with strict_fields)
- Error fields use the record's serialization names when declared
- Configuration problems raise; field failures are returned as data
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .config import ValidatorConfig
from .errors import FieldRulesError, PredicateError, UnknownFieldError
from .models import Rule, ValidationError, split_expression
from .predicates import Predicate
from .registry import PredicateRegistry, create_default_registry
from .report import ErrorReport
from .resolver import MISSING, FieldResolver

__all__ = ("Validator",)

logger = logging.getLogger(__name__)


class Validator:
    """Rule evaluation engine.

    Usage:
        validator = Validator()
        validator.register("is-even", lambda v: v.isdigit() and int(v) % 2 == 0)

        rules = [
            Rule(field="Name", expression="required,alpha", message="Letters only"),
            Rule(field="Age", expression="required,numeric,is-even", message="Even age only"),
        ]
        report = validator.validate(user, rules)
        # → ErrorReport([ValidationError(field="age", message="Even age only")])
    """

    def __init__(
        self,
        registry: PredicateRegistry | None = None,
        config: ValidatorConfig | None = None,
    ):
        """Initialize validator.

        Args:
            registry: Predicate registry (a fresh one is created if None)
            config: Validator settings (defaults if None)
        """
        self.config = config or ValidatorConfig()
        if registry is None:
            if self.config.register_builtins:
                registry = create_default_registry()
            else:
                registry = PredicateRegistry()
        self.registry = registry
        self.resolver = FieldResolver(tag_key=self.config.tag_key)

    def register(self, tag: str, predicate: Predicate) -> None:
        """Register a custom predicate under `tag`, replacing any previous one.

        Raises:
            RegistrationError: If tag is empty or predicate is not callable
        """
        self.registry.register(tag, predicate)

    def _compile(self, expression: str) -> list[tuple[str, Predicate]]:
        """Resolve every predicate of an expression before running any."""
        return [
            (name, self.registry.get(name))
            for name in split_expression(expression, self.config.separator)
        ]

    def _evaluate(self, predicates: list[tuple[str, Predicate]], value: Any) -> bool:
        passed = True
        for name, predicate in predicates:
            try:
                ok = bool(predicate(value))
            except FieldRulesError:
                raise
            except Exception as e:
                raise PredicateError(
                    f"Predicate '{name}' raised {type(e).__name__}: {e}",
                    details={"predicate": name},
                ) from e
            if not ok:
                passed = False
                if self.config.short_circuit:
                    break
        return passed

    def validate_var(self, value: Any, expression: str) -> bool:
        """Check a bare value against an expression.

        Raises:
            UnknownPredicateError: If the expression names an unregistered predicate
        """
        return self._evaluate(self._compile(expression), value)

    def validate(self, record: Any, rules: Iterable[Rule]) -> ErrorReport:
        """Validate `record` against `rules` in order.

        Args:
            record: pydantic model, dataclass, plain object or mapping
            rules: Ordered rules to apply

        Returns:
            ErrorReport with one entry per failing rule, in rule order.
            Empty when the record satisfies every rule.

        Raises:
            UnknownPredicateError: If any rule names an unregistered predicate
            PredicateError: If a predicate raises
            UnknownFieldError: If strict_fields is set and a rule names an unknown field
        """
        report = ErrorReport()

        for rule in rules:
            value = self.resolver.resolve_value(record, rule.field)
            if value is MISSING:
                if self.config.strict_fields:
                    raise UnknownFieldError(
                        f"Field '{rule.field}' not found on {type(record).__name__}",
                        details={"field": rule.field, "record_type": type(record).__name__},
                    )
                logger.debug(f"Skipping rule for unknown field '{rule.field}'")
                continue

            predicates = self._compile(rule.expression)
            if self._evaluate(predicates, value):
                continue

            field_name = self.resolver.resolve_external_name(record, rule.field) or rule.field
            report.append(ValidationError(field=field_name, message=rule.message))

        if report:
            logger.debug(f"{type(record).__name__} failed {len(report)} rule(s): {report.fields()}")
        return report

    validate_struct = validate

    def check(self, record: Any, rules: Iterable[Rule]) -> ErrorReport:
        """Validate and raise ReportError if any rule failed.

        Returns:
            The (empty) report when the record is valid
        """
        report = self.validate(record, rules)
        report.raise_for_errors()
        return report

    def __repr__(self) -> str:
        return f"Validator(predicates={self.registry.list_names()})"
