# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""ErrorReport - ordered result of one validation call."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, overload

import orjson

from .errors import ReportError
from .models import ValidationError

__all__ = ("ErrorReport",)


class ErrorReport:
    """Ordered collection of ValidationError, in rule order.

    An empty report means the record satisfied every rule. Reports are
    created fresh per validation call and never merged.

    Usage:
        report = validator.validate(user, rules)
        if report:
            report.override_message("email", "Please provide a valid email")
            return {"errors": report.to_list()}
    """

    __slots__ = ("_errors",)

    def __init__(self, errors: Iterable[ValidationError] = ()):
        self._errors: list[ValidationError] = list(errors)

    def append(self, error: ValidationError) -> None:
        self._errors.append(error)

    @property
    def errors(self) -> list[ValidationError]:
        """Snapshot of the contained errors, as copies."""
        return [e.model_copy() for e in self._errors]

    def fields(self) -> list[str]:
        """External field names in report order (duplicates preserved)."""
        return [e.field for e in self._errors]

    def override_message(self, field: str, message: str) -> None:
        """Replace the message of every error reported for `field`.

        No-op when nothing matches.
        """
        for error in self._errors:
            if error.field == field:
                error.message = message

    def describe(self) -> str:
        """Human-readable rendering for logs. Not meant to be parsed."""
        body = "; ".join(f"{e.field}: {e.message}" for e in self._errors)
        return f"validation errors: [{body}]"

    def raise_for_errors(self) -> None:
        """Raise ReportError if the report holds any error."""
        if self._errors:
            raise ReportError(self)

    def to_list(self) -> list[dict[str, Any]]:
        return [e.to_dict() for e in self._errors]

    def to_dict(self) -> dict[str, Any]:
        return {"valid": not self._errors, "errors": self.to_list()}

    def to_json(self) -> str:
        return orjson.dumps(self.to_list()).decode()

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[ValidationError]:
        return iter(self._errors)

    @overload
    def __getitem__(self, index: int) -> ValidationError: ...

    @overload
    def __getitem__(self, index: slice) -> list[ValidationError]: ...

    def __getitem__(self, index):
        return self._errors[index]

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ErrorReport):
            return self._errors == other._errors
        if isinstance(other, list):
            return self._errors == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"ErrorReport(errors={len(self._errors)}, fields={self.fields()})"
