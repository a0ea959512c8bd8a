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
"""Member filtering — which members may act as mapping endpoints."""

from __future__ import annotations

from flymap.mapping.introspection import ReflectionIntrospector, TypeIntrospector
from flymap.mapping.types import MemberDescriptor, MemberKind


class MemberFilter:
    """Select source-side and target-side members of a type.

    Field-like members qualify on both sides. A property qualifies as a
    source when it has a getter, and as a target when it has a setter taking
    exactly one value.
    """

    def __init__(self, introspector: TypeIntrospector | None = None) -> None:
        self._introspector = introspector or ReflectionIntrospector()

    @property
    def introspector(self) -> TypeIntrospector:
        return self._introspector

    def source_members(self, tp: type) -> list[MemberDescriptor]:
        return [
            m for m in self._introspector.members(tp)
            if m.kind is MemberKind.FIELD or m.readable
        ]

    def target_members(self, tp: type) -> list[MemberDescriptor]:
        return [
            m for m in self._introspector.members(tp)
            if m.kind is MemberKind.FIELD or m.writable
        ]
