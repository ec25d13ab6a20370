# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

__all__ = ("ValidatorConfig",)


class ValidatorConfig(BaseModel):
    """Configuration for Validator and FieldResolver."""

    model_config = ConfigDict(frozen=True)

    # Expression parsing
    separator: str = Field(
        default=",",
        min_length=1,
        description="Joins predicate names in a rule expression",
    )

    # External names
    tag_key: str = Field(
        default="json",
        min_length=1,
        description="Dataclass field metadata key holding the serialization tag",
    )

    # Evaluation
    short_circuit: bool = True
    strict_fields: bool = Field(
        default=False,
        description="Raise UnknownFieldError instead of skipping rules on unknown fields",
    )
    register_builtins: bool = True
