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
"""Value types shared by the member resolution pipeline."""

from __future__ import annotations

import enum
import types
from dataclasses import dataclass
from typing import Any, Union, get_args, get_origin


def _type_name(tp: Any) -> str:
    return getattr(tp, "__qualname__", repr(tp))


@dataclass(frozen=True)
class TypePair:
    """The (source, target) shape identity a mapping is resolved for."""

    source: type
    target: type

    @classmethod
    def of(cls, source: type, target: type) -> TypePair:
        return cls(source, target)

    def __str__(self) -> str:
        return f"{_type_name(self.source)} -> {_type_name(self.target)}"


class MemberKind(enum.Enum):
    """How a member is stored on its declaring type."""

    FIELD = "field"
    PROPERTY = "property"


def _unwrap_optional(tp: Any) -> Any:
    origin = get_origin(tp)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


@dataclass(frozen=True)
class MemberDescriptor:
    """A named, typed member of a shape.

    Attributes:
        name: Attribute name, unique within the declaring type.
        value_type: Declared type with ``Annotated`` metadata stripped.
        kind: Field-like or property-like.
        readable: Whether the member can be read (source endpoint).
        writable: Whether the member accepts a single value (target endpoint).
        declaring_type: The type the member was enumerated from.
        metadata: ``Annotated`` extras attached to the declaration.
    """

    name: str
    value_type: Any
    kind: MemberKind = MemberKind.FIELD
    readable: bool = True
    writable: bool = True
    declaring_type: type | None = None
    metadata: tuple[Any, ...] = ()

    @property
    def member_type(self) -> Any:
        """The declared type with ``X | None`` collapsed to ``X``."""
        return _unwrap_optional(self.value_type)

    def __repr__(self) -> str:
        return f"MemberDescriptor({self.name!r}, {self.kind.value})"


@dataclass(frozen=True)
class MappingMemberPath:
    """One unit of a mapping plan.

    A *simple* entry pairs one source member with one target member and may
    carry a substituted :class:`TypePair` the value has to be mapped through.
    A *path* entry pairs two member chains, root first, used to flatten or
    unflatten nested shapes.
    """

    source: tuple[MemberDescriptor, ...]
    target: tuple[MemberDescriptor, ...]
    type_pair: TypePair | None = None
    is_path: bool = False

    @classmethod
    def simple(
        cls,
        source_member: MemberDescriptor,
        target_member: MemberDescriptor,
        type_pair: TypePair | None = None,
    ) -> MappingMemberPath:
        return cls((source_member,), (target_member,), type_pair)

    @classmethod
    def path(
        cls,
        source_path: list[MemberDescriptor] | tuple[MemberDescriptor, ...],
        target_path: list[MemberDescriptor] | tuple[MemberDescriptor, ...],
    ) -> MappingMemberPath:
        return cls(tuple(source_path), tuple(target_path), None, True)

    @property
    def source_member(self) -> MemberDescriptor:
        """Leaf of the source chain."""
        return self.source[-1]

    @property
    def target_member(self) -> MemberDescriptor:
        """Leaf of the target chain."""
        return self.target[-1]

    @property
    def source_names(self) -> list[str]:
        return [m.name for m in self.source]

    @property
    def target_names(self) -> list[str]:
        return [m.name for m in self.target]

    def __str__(self) -> str:
        text = f"{'.'.join(self.source_names)} -> {'.'.join(self.target_names)}"
        if self.type_pair is not None:
            text += f" via ({self.type_pair})"
        return text
