# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures for fieldrules tests."""

from dataclasses import dataclass, field

import pytest

from fieldrules import Rule, Validator


@dataclass
class User:
    Name: str = field(default="", metadata={"json": "name"})
    Email: str = field(default="", metadata={"json": "email"})
    Age: str = field(default="", metadata={"json": "age"})


def is_even(value) -> bool:
    """Non-empty digit string (or int) holding an even number."""
    if isinstance(value, str):
        if not value.isdigit():
            return False
        value = int(value)
    return isinstance(value, int) and not isinstance(value, bool) and value % 2 == 0


@pytest.fixture
def validator():
    """Fresh Validator with the is-even predicate registered."""
    v = Validator()
    v.register("is-even", is_even)
    return v


@pytest.fixture
def user_rules():
    """Rules for the User record."""
    return [
        Rule(field="Name", expression="required,alpha", message="Name must contain only letters"),
        Rule(
            field="Email",
            expression="required,email",
            message="Email must be a valid email address",
        ),
        Rule(
            field="Age",
            expression="required,numeric,is-even",
            message="Age must be an even integer",
        ),
    ]


@pytest.fixture
def valid_user():
    return User(Name="JohnDoe", Email="john.doe@example.com", Age="30")


@pytest.fixture
def invalid_user():
    return User(Name="John123", Email="invalid-email", Age="31")


@pytest.fixture
def user_cls():
    """User dataclass with json-tagged fields."""
    return User
