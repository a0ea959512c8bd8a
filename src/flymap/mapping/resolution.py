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
"""Resolution rules — ignore checks, target naming, reverse binds and paths.

Precedence for the target name of a source member (first hit wins):

1. an unscoped ``Bind`` on the source member
2. a ``Bind`` scoped to a type the target type is assignable to
3. the pair's ``BindingConfig`` field binding (its top-level target name)
4. a target member that declared, via its own ``Bind``, that it receives
   this source member
5. the source member's own name
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from flymap.kernel.exceptions import AmbiguousBindingException, ResolutionException
from flymap.mapping.annotations import Bind, Ignore, Unscoped, first_applicable
from flymap.mapping.binding import BindingConfig
from flymap.mapping.introspection import TypeIntrospector
from flymap.mapping.members import MemberFilter
from flymap.mapping.types import MemberDescriptor, TypePair

REVERSE_BIND_POLICIES = ("error", "last_wins")


def build_reverse_bind_index(
    introspector: TypeIntrospector,
    type_pair: TypePair,
    target_members: list[MemberDescriptor],
    on_conflict: str = "error",
) -> dict[str, str]:
    """Map source member names to the target members that claim them.

    Raises:
        AmbiguousBindingException: Two target members claim the same source
            member and ``on_conflict`` is ``"error"``.
    """
    index: dict[str, str] = {}
    for member in target_members:
        for bind in introspector.annotations_of(member, Bind):
            if not bind.scope.applies_to(type_pair.source):
                continue
            claimed = index.get(bind.member_name)
            if claimed is not None and claimed != member.name and on_conflict == "error":
                raise AmbiguousBindingException(
                    f"Target members '{claimed}' and '{member.name}' both bind "
                    f"source member '{bind.member_name}' for {type_pair}",
                    code="MAPPING_AMBIGUOUS_BIND",
                    context={"source": bind.member_name, "targets": [claimed, member.name]},
                )
            index[bind.member_name] = member.name
    return index


def is_ignored(
    introspector: TypeIntrospector,
    binding_config: BindingConfig | None,
    type_pair: TypePair,
    source_member: MemberDescriptor,
) -> bool:
    ignores = introspector.annotations_of(source_member, Ignore)
    if any(isinstance(ignore.scope, Unscoped) for ignore in ignores):
        return True
    if any(ignore.scope.applies_to(type_pair.target) for ignore in ignores):
        return True
    return binding_config is not None and binding_config.ignore_source_field(source_member.name)


def resolve_target_name(
    introspector: TypeIntrospector,
    binding_config: BindingConfig | None,
    type_pair: TypePair,
    source_member: MemberDescriptor,
    reverse_binds: dict[str, str],
) -> str:
    bind = first_applicable(introspector.annotations_of(source_member, Bind), type_pair.target)
    if bind is not None:
        return bind.member_name

    if binding_config is not None:
        configured = binding_config.bind_field(source_member.name)
        if configured is not None:
            return configured

    return reverse_binds.get(source_member.name, source_member.name)


class PathResolver:
    """Turn member-name paths into descriptor chains by walking nested types."""

    def __init__(self, member_filter: MemberFilter, separator: str = ".") -> None:
        self._filter = member_filter
        self._separator = separator

    def resolve_source(self, path: Sequence[str], root: type) -> list[MemberDescriptor]:
        return self._resolve(path, root, self._filter.source_members)

    def resolve_target(self, path: Sequence[str], root: type) -> list[MemberDescriptor]:
        return self._resolve(path, root, self._filter.target_members)

    def _resolve(
        self,
        path: Sequence[str],
        root: type,
        members_of: Callable[[type], list[MemberDescriptor]],
    ) -> list[MemberDescriptor]:
        result: list[MemberDescriptor] = []
        current = root
        for segment in path:
            if not isinstance(current, type):
                raise ResolutionException(self._separator.join(path), segment, type(current))
            member = next((m for m in members_of(current) if m.name == segment), None)
            if member is None:
                raise ResolutionException(self._separator.join(path), segment, current)
            result.append(member)
            current = member.member_type
        return result
