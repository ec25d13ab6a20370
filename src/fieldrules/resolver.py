# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Field resolution - value and external (serialization) name lookup.

Supported record kinds:
- pydantic models: external name from serialization_alias, then alias;
  fields with exclude=True have none.
- dataclasses: external name from field metadata under `tag_key`
  ("json" by default), e.g. field(metadata={"json": "email,omitempty"}).
  A tag of "-" suppresses the name; modifiers after "," are dropped.
- plain objects: annotated attributes across the MRO, __slots__ and
  instance attributes; never have an external name.
- mappings: keys are fields; never have an external name.

One accessor table is built per record type and cached on the resolver
without keeping the type alive.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import threading
import weakref
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MemberDescriptorType
from typing import Any, Final

from pydantic import BaseModel
from pydantic.fields import ComputedFieldInfo, FieldInfo

from .errors import FieldAccessError

__all__ = (
    "MISSING",
    "FieldAccessor",
    "FieldResolver",
    "parse_tag",
)

logger = logging.getLogger(__name__)


class _Missing:
    """Sentinel for a field that does not exist on the record."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


@dataclass(frozen=True, slots=True)
class FieldAccessor:
    """Getter plus external-name metadata for one field of a record type."""

    name: str
    external_name: str | None
    getter: Callable[[Any], Any]


def parse_tag(tag: Any) -> str | None:
    """Extract the name from a serialization tag like "email,omitempty".

    Returns None for missing, empty or "-" (ignored) tags.
    """
    if not isinstance(tag, str) or tag == "" or tag == "-":
        return None
    name = tag.split(",", 1)[0].strip()
    return name or None


def _attribute_getter(name: str) -> Callable[[Any], Any]:
    """Getter returning MISSING only when the attribute is absent.

    Errors raised while computing a present attribute (properties, computed
    fields) surface as FieldAccessError.
    """

    def getter(record: Any) -> Any:
        static = inspect.getattr_static(record, name, MISSING)
        if static is MISSING:
            return MISSING
        if isinstance(static, MemberDescriptorType):
            try:
                return static.__get__(record, type(record))
            except AttributeError:
                # unset slot
                return MISSING
        try:
            return getattr(record, name)
        except Exception as e:
            raise FieldAccessError(
                f"Reading field '{name}' on {type(record).__name__} raised "
                f"{type(e).__name__}: {e}",
                details={"field": name, "record_type": type(record).__name__},
            ) from e

    return getter


def _pydantic_external_name(info: FieldInfo | ComputedFieldInfo) -> str | None:
    if isinstance(info, FieldInfo) and info.exclude is True:
        return None
    return getattr(info, "serialization_alias", None) or info.alias or None


class FieldResolver:
    """Resolves field values and external names from field identifiers.

    Args:
        tag_key: Dataclass metadata key holding the serialization tag
    """

    def __init__(self, tag_key: str = "json"):
        self.tag_key = tag_key
        self._tables: weakref.WeakKeyDictionary[type, dict[str, FieldAccessor]] = (
            weakref.WeakKeyDictionary()
        )
        self._lock = threading.Lock()

    def accessors(self, record_type: type) -> dict[str, FieldAccessor]:
        """Accessor table for a record type, built on first use."""
        table = self._tables.get(record_type)
        if table is not None:
            return table
        with self._lock:
            table = self._tables.get(record_type)
            if table is None:
                table = self._build_table(record_type)
                self._tables[record_type] = table
                logger.debug(
                    f"Built accessor table for {record_type.__name__}: {sorted(table)}"
                )
        return table

    def _build_table(self, record_type: type) -> dict[str, FieldAccessor]:
        table: dict[str, FieldAccessor] = {}

        if issubclass(record_type, BaseModel):
            infos: dict[str, FieldInfo | ComputedFieldInfo] = {
                **record_type.model_fields,
                **record_type.model_computed_fields,
            }
            for name, info in infos.items():
                table[name] = FieldAccessor(
                    name, _pydantic_external_name(info), _attribute_getter(name)
                )
            return table

        if dataclasses.is_dataclass(record_type):
            for f in dataclasses.fields(record_type):
                external = parse_tag(f.metadata.get(self.tag_key))
                table[f.name] = FieldAccessor(f.name, external, _attribute_getter(f.name))
            return table

        # Plain class: annotations from base to subclass, then slots
        for klass in reversed(record_type.__mro__):
            for name in inspect.get_annotations(klass):
                table[name] = FieldAccessor(name, None, _attribute_getter(name))
            slots = vars(klass).get("__slots__", ())
            for name in (slots,) if isinstance(slots, str) else slots:
                if not name.startswith("__"):
                    table[name] = FieldAccessor(name, None, _attribute_getter(name))
        return table

    def resolve_value(self, record: Any, field: str) -> Any:
        """Current value of `field` on `record`, or MISSING if it has none.

        None is a real value and is returned as such.
        """
        if isinstance(record, Mapping):
            return record[field] if field in record else MISSING

        accessor = self.accessors(type(record)).get(field)
        if accessor is not None:
            return accessor.getter(record)

        # Undeclared instance attributes (pydantic extras, plain __dict__)
        extra = getattr(record, "__pydantic_extra__", None)
        if extra and field in extra:
            return extra[field]
        if not isinstance(record, BaseModel):
            instance_dict = getattr(record, "__dict__", None)
            if instance_dict is not None and field in instance_dict:
                return instance_dict[field]
        return MISSING

    def resolve_external_name(self, record_or_type: Any, field: str) -> str | None:
        """Declared serialization name of `field`, or None.

        Accepts the record instance or its type.
        """
        record_type = record_or_type if isinstance(record_or_type, type) else type(record_or_type)
        if issubclass(record_type, Mapping):
            return None
        accessor = self.accessors(record_type).get(field)
        return accessor.external_name if accessor is not None else None

    def clear_cache(self) -> None:
        with self._lock:
            self._tables.clear()

    def __repr__(self) -> str:
        return f"FieldResolver(tag_key={self.tag_key!r}, cached_types={len(self._tables)})"
