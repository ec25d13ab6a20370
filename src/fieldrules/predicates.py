# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Built-in predicate library.

Every predicate is pure and total: it takes one field value and returns a
bool for any input, including None. String predicates return False for
non-string values.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sized
from typing import Any
from urllib.parse import urlparse

__all__ = (
    "BUILTIN_PREDICATES",
    "Predicate",
    "is_alpha",
    "is_alphanum",
    "is_ascii",
    "is_boolean",
    "is_email",
    "is_lowercase",
    "is_number",
    "is_numeric",
    "is_uppercase",
    "is_url",
    "required",
)

Predicate = Callable[[Any], bool]

_ALPHA = re.compile(r"^[a-zA-Z]+$")
_ALPHANUM = re.compile(r"^[a-zA-Z0-9]+$")
_NUMERIC = re.compile(r"^[-+]?[0-9]+(?:\.[0-9]+)?$")
_NUMBER = re.compile(r"^[0-9]+$")
_EMAIL = re.compile(
    r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)+$"
)
_BOOL_STRINGS = frozenset(
    {"1", "t", "T", "TRUE", "true", "True", "0", "f", "F", "FALSE", "false", "False"}
)


def _matches(pattern: re.Pattern[str], value: Any) -> bool:
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def required(value: Any) -> bool:
    """Present and non-empty. Numbers and bools always count as present."""
    if value is None:
        return False
    if isinstance(value, str | bytes):
        return len(value) > 0
    if isinstance(value, Sized):
        return len(value) > 0
    return True


def is_alpha(value: Any) -> bool:
    return _matches(_ALPHA, value)


def is_alphanum(value: Any) -> bool:
    return _matches(_ALPHANUM, value)


def is_numeric(value: Any) -> bool:
    """Signed integer or decimal, as a string or a real number."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int | float):
        return value == value  # NaN
    return _matches(_NUMERIC, value)


def is_number(value: Any) -> bool:
    """Unsigned digits only."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 0
    return _matches(_NUMBER, value)


def is_email(value: Any) -> bool:
    return isinstance(value, str) and len(value) <= 254 and _EMAIL.fullmatch(value) is not None


def is_lowercase(value: Any) -> bool:
    return isinstance(value, str) and value != "" and value == value.lower()


def is_uppercase(value: Any) -> bool:
    return isinstance(value, str) and value != "" and value == value.upper()


def is_ascii(value: Any) -> bool:
    return isinstance(value, str) and value.isascii()


def is_boolean(value: Any) -> bool:
    """A bool, or a string spelling one (true/false, t/f, 1/0)."""
    return isinstance(value, bool) or (isinstance(value, str) and value in _BOOL_STRINGS)


def is_url(value: Any) -> bool:
    if not isinstance(value, str) or not value:
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc or parsed.path)


BUILTIN_PREDICATES: dict[str, Predicate] = {
    "required": required,
    "alpha": is_alpha,
    "alphanum": is_alphanum,
    "numeric": is_numeric,
    "number": is_number,
    "email": is_email,
    "lowercase": is_lowercase,
    "uppercase": is_uppercase,
    "ascii": is_ascii,
    "boolean": is_boolean,
    "url": is_url,
}
