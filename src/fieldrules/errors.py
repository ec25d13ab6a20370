# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Exception hierarchy for fieldrules.

Only configuration problems are raised during validation. Per-field failures
are collected as data in an ErrorReport and never raised by the engine.

Hierarchy:
    FieldRulesError
    ├── ConfigurationError
    │   ├── RegistrationError
    │   ├── UnknownPredicateError
    │   ├── UnknownFieldError
    │   ├── FieldAccessError
    │   └── PredicateError
    └── ReportError
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .report import ErrorReport

__all__ = (
    "ConfigurationError",
    "FieldAccessError",
    "FieldRulesError",
    "PredicateError",
    "RegistrationError",
    "ReportError",
    "UnknownFieldError",
    "UnknownPredicateError",
)


class FieldRulesError(Exception):
    """Base error with structured details and retry hint."""

    default_message: str = "fieldrules error"
    default_retryable: bool = True

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        retryable: bool | None = None,
        cause: BaseException | None = None,
    ):
        self.message = message or self.default_message
        self.details = details or {}
        self.retryable = self.default_retryable if retryable is None else retryable
        super().__init__(self.message)
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Serialize error for logs and API payloads."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }


class ConfigurationError(FieldRulesError):
    """Rule set or registry is misconfigured. Fatal to the call."""

    default_message = "invalid validator configuration"
    default_retryable = False


class RegistrationError(ConfigurationError):
    """Predicate could not be registered (empty name, missing callable)."""

    default_message = "invalid predicate registration"


class UnknownPredicateError(ConfigurationError):
    """Expression references a predicate name that was never registered."""

    default_message = "unknown predicate"


class UnknownFieldError(ConfigurationError):
    """Rule names a field the record does not have (strict_fields only)."""

    default_message = "unknown field"


class FieldAccessError(ConfigurationError):
    """Reading a declared field raised (e.g. a failing property or computed field)."""

    default_message = "field access failed"


class PredicateError(ConfigurationError):
    """Predicate raised instead of returning a bool."""

    default_message = "predicate raised an exception"


class ReportError(FieldRulesError):
    """Raised on demand when a report contains validation errors."""

    default_message = "validation failed"
    default_retryable = False

    def __init__(self, report: ErrorReport, message: str | None = None):
        self.report = report
        super().__init__(
            message or report.describe(),
            details={"errors": report.to_list()},
        )
