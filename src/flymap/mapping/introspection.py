# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Type introspection — enumerate a type's members and their annotations."""

from __future__ import annotations

import inspect
import types
from typing import (
    Annotated,
    Any,
    ClassVar,
    Protocol,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
    runtime_checkable,
)

from pydantic import BaseModel

from flymap.mapping.types import MemberDescriptor, MemberKind

M = TypeVar("M")


@runtime_checkable
class TypeIntrospector(Protocol):
    """Port supplying member descriptors and per-member annotations."""

    def members(self, tp: type) -> list[MemberDescriptor]: ...
    def annotations_of(self, member: MemberDescriptor, marker_type: type[M]) -> list[M]: ...


def _split_annotated(hint: Any) -> tuple[Any, tuple[Any, ...]]:
    """Strip ``Annotated`` extras, also from the members of a union.

    ``Annotated[str, Bind("x")] | None`` yields ``(str | None, (Bind("x"),))``.
    """
    origin = get_origin(hint)
    if origin is Annotated:
        base, *extras = get_args(hint)
        return base, tuple(extras)
    if origin is Union or origin is types.UnionType:
        bases: list[Any] = []
        extras: list[Any] = []
        for arg in get_args(hint):
            base, arg_extras = _split_annotated(arg)
            bases.append(base)
            extras.extend(arg_extras)
        if extras:
            return Union[tuple(bases)], tuple(extras)
    return hint, ()


def _is_class_var(hint: Any) -> bool:
    return hint is ClassVar or get_origin(hint) is ClassVar


def _is_public(name: str) -> bool:
    return not name.startswith("_")


def _single_value_setter(fset: Any) -> bool:
    try:
        params = inspect.signature(fset).parameters
    except (TypeError, ValueError):
        return False
    return len(params) == 2


class ReflectionIntrospector:
    """Default :class:`TypeIntrospector` built on runtime type hints.

    Members are listed annotated fields first (base classes before
    subclasses), then public properties. Dataclasses, Pydantic models and
    plain annotated classes are supported. Annotation markers are read from
    ``typing.Annotated`` extras; for properties, from the getter's return
    annotation.
    """

    def members(self, tp: type) -> list[MemberDescriptor]:
        fields = self._fields(tp)
        field_names = {m.name for m in fields}
        properties = [m for m in self._properties(tp) if m.name not in field_names]
        return fields + properties

    def annotations_of(self, member: MemberDescriptor, marker_type: type[M]) -> list[M]:
        return [extra for extra in member.metadata if isinstance(extra, marker_type)]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _fields(tp: type) -> list[MemberDescriptor]:
        if isinstance(tp, type) and issubclass(tp, BaseModel):
            pydantic_fields: list[MemberDescriptor] = []
            for name, info in tp.model_fields.items():
                if not _is_public(name):
                    continue
                value_type, extras = _split_annotated(info.annotation)
                pydantic_fields.append(
                    MemberDescriptor(
                        name=name,
                        value_type=value_type,
                        kind=MemberKind.FIELD,
                        declaring_type=tp,
                        metadata=tuple(info.metadata) + extras,
                    )
                )
            return pydantic_fields

        result: list[MemberDescriptor] = []
        for name, hint in get_type_hints(tp, include_extras=True).items():
            if not _is_public(name) or _is_class_var(hint):
                continue
            value_type, extras = _split_annotated(hint)
            result.append(
                MemberDescriptor(
                    name=name,
                    value_type=value_type,
                    kind=MemberKind.FIELD,
                    declaring_type=tp,
                    metadata=extras,
                )
            )
        return result

    @staticmethod
    def _properties(tp: type) -> list[MemberDescriptor]:
        found: dict[str, property] = {}
        for klass in reversed(tp.__mro__):
            if klass is object or klass.__module__.startswith("pydantic"):
                continue
            for name, attr in vars(klass).items():
                if isinstance(attr, property) and _is_public(name):
                    found[name] = attr

        result: list[MemberDescriptor] = []
        for name, prop in found.items():
            hint: Any = Any
            if prop.fget is not None:
                hint = get_type_hints(prop.fget, include_extras=True).get("return", Any)
            value_type, extras = _split_annotated(hint)
            result.append(
                MemberDescriptor(
                    name=name,
                    value_type=value_type,
                    kind=MemberKind.PROPERTY,
                    readable=prop.fget is not None,
                    writable=prop.fset is not None and _single_value_setter(prop.fset),
                    declaring_type=tp,
                    metadata=extras,
                )
            )
        return result
