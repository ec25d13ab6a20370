# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Models for rule-based field validation.

Rule is the declarative input (field, expression, message).
ValidationError is one entry of the ErrorReport the Validator produces.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

__all__ = (
    "Rule",
    "ValidationError",
    "split_expression",
)


def split_expression(expression: str, separator: str = ",") -> tuple[str, ...]:
    """Split an expression into predicate names, dropping blanks."""
    return tuple(name for part in expression.split(separator) if (name := part.strip()))


class Rule(BaseModel):
    """Single validation directive.

    Immutable, so one rule list can be shared across validation calls
    and threads.

    Usage:
        rules = [
            Rule(field="Name", expression="required,alpha", message="Letters only"),
            Rule(field="Age", tag="required,numeric", message="Age must be numeric"),
        ]
    """

    model_config = ConfigDict(frozen=True)

    field: str = Field(
        ...,
        min_length=1,
        description="Internal field identifier on the record (not the serialization name)",
    )
    expression: str = Field(
        default="",
        validation_alias=AliasChoices("expression", "tag"),
        description="Predicate names joined by the separator, all must pass",
    )
    message: str = Field(
        ...,
        description="Message reported verbatim when the rule fails",
    )

    def predicate_names(self, separator: str = ",") -> tuple[str, ...]:
        return split_expression(self.expression, separator)


class ValidationError(BaseModel):
    """One field-level failure.

    `field` is the external (serialization) name when the record declares
    one, otherwise the internal identifier. Not an exception: failures are
    data collected in an ErrorReport.
    """

    field: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "message": self.message}

    def __str__(self) -> str:
        return self.message
