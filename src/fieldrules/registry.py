# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Per-validator predicate registry.

PredicateRegistry maps tag names to predicate functions. Each Validator
owns its own registry; there is no process-global registration state.

Writes are copy-on-write under a lock: a new mapping is built and swapped
in, so concurrent lookups always see a complete mapping.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from types import MappingProxyType

from .errors import RegistrationError, UnknownPredicateError
from .predicates import BUILTIN_PREDICATES, Predicate

__all__ = ("PredicateRegistry", "create_default_registry")

logger = logging.getLogger(__name__)


class PredicateRegistry:
    """Registry mapping predicate names to `(value) -> bool` functions.

    Usage:
        registry = create_default_registry()
        registry.register("is-even", lambda v: v.isdigit() and int(v) % 2 == 0)

        validator = Validator(registry=registry)
    """

    def __init__(self, predicates: Mapping[str, Predicate] | None = None):
        """Initialize registry.

        Args:
            predicates: Initial name -> predicate entries
        """
        self._lock = threading.Lock()
        self._predicates: Mapping[str, Predicate] = MappingProxyType({})
        for name, predicate in (predicates or {}).items():
            self.register(name, predicate)

    def _check(self, name: str, predicate: Predicate | None) -> None:
        if not isinstance(name, str) or name == "":
            raise RegistrationError(
                "Predicate name must be a non-empty string",
                details={"name": name},
            )
        if predicate is None or not callable(predicate):
            raise RegistrationError(
                f"Predicate for '{name}' must be callable, got {type(predicate).__name__}",
                details={"name": name},
            )

    def register(self, name: str, predicate: Predicate) -> None:
        """Install or replace the predicate registered under `name`.

        Raises:
            RegistrationError: If name is empty or predicate is not callable
        """
        self._check(name, predicate)
        with self._lock:
            updated = dict(self._predicates)
            replaced = name in updated
            updated[name] = predicate
            self._predicates = MappingProxyType(updated)
        logger.debug(f"{'Replaced' if replaced else 'Registered'} predicate '{name}'")

    def unregister(self, name: str) -> bool:
        """Unregister predicate. Returns True if removed."""
        with self._lock:
            if name not in self._predicates:
                return False
            updated = dict(self._predicates)
            del updated[name]
            self._predicates = MappingProxyType(updated)
        return True

    def get(self, name: str) -> Predicate:
        """Get predicate for name.

        Raises:
            UnknownPredicateError: If name was never registered
        """
        predicates = self._predicates
        try:
            return predicates[name]
        except KeyError:
            raise UnknownPredicateError(
                f"Predicate '{name}' not registered. Available: {sorted(predicates)}",
                details={"name": name, "available": sorted(predicates)},
            ) from None

    def has(self, name: str) -> bool:
        """Check if predicate is registered."""
        return name in self._predicates

    def list_names(self) -> list[str]:
        """List all registered predicate names."""
        return list(self._predicates.keys())

    def copy(self) -> PredicateRegistry:
        """Independent registry with the same entries."""
        return PredicateRegistry(self._predicates)

    def __contains__(self, name: str) -> bool:
        return name in self._predicates

    def __len__(self) -> int:
        return len(self._predicates)

    def __repr__(self) -> str:
        return f"PredicateRegistry(predicates={self.list_names()})"


def create_default_registry() -> PredicateRegistry:
    """New registry preloaded with the built-in predicates."""
    return PredicateRegistry(BUILTIN_PREDICATES)
