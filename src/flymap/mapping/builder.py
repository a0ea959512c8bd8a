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
"""MappingMemberBuilder — resolve the member plan for a type pair.

For every readable source member, in enumeration order, the builder drops
ignored members, resolves the target name, and emits at most one
:class:`MappingMemberPath`:

* a *path* entry when the pair's config binds the target name to a nested
  target path,
* otherwise a *simple* entry for the first target member the name matching
  rule accepts, carrying a substituted :class:`TypePair` when the config
  overrides the type for that target name.

Source members without a counterpart are left out silently. The only
failure is an explicit path that does not resolve.
"""

from __future__ import annotations

import logging

from flymap.kernel.exceptions import MappingConfigurationException
from flymap.mapping.binding import BindingConfig
from flymap.mapping.introspection import TypeIntrospector
from flymap.mapping.members import MemberFilter
from flymap.mapping.registry import BindingConfigProvider
from flymap.mapping.resolution import (
    REVERSE_BIND_POLICIES,
    PathResolver,
    build_reverse_bind_index,
    is_ignored,
    resolve_target_name,
)
from flymap.mapping.types import MappingMemberPath, MemberDescriptor, TypePair

logger = logging.getLogger(__name__)


class MappingMemberBuilder:
    """Build the ordered member mapping plan for a :class:`TypePair`.

    The builder keeps no state between calls: the same pair, annotations and
    binding config always produce the same plan. Memoizing plans per pair is
    left to the caller.

    Args:
        provider: Supplies per-pair binding configs and name matching.
        introspector: Member enumeration; defaults to reflection.
        separator: Separator used when reporting unresolved paths.
        reverse_bind_conflict: ``"error"`` or ``"last_wins"``.
    """

    def __init__(
        self,
        provider: BindingConfigProvider,
        introspector: TypeIntrospector | None = None,
        *,
        separator: str = ".",
        reverse_bind_conflict: str = "error",
    ) -> None:
        if reverse_bind_conflict not in REVERSE_BIND_POLICIES:
            raise MappingConfigurationException(
                f"Unknown reverse bind conflict policy '{reverse_bind_conflict}'",
                context={"available": list(REVERSE_BIND_POLICIES)},
            )
        self._provider = provider
        self._filter = MemberFilter(introspector)
        self._introspector = self._filter.introspector
        self._paths = PathResolver(self._filter, separator)
        self._reverse_bind_conflict = reverse_bind_conflict

    def build(self, type_pair: TypePair) -> list[MappingMemberPath]:
        """Resolve the mapping plan for ``type_pair``.

        Raises:
            ResolutionException: A configured path names a missing member.
            AmbiguousBindingException: Two target members claim one source
                member under the ``"error"`` conflict policy.
        """
        source_members = self._filter.source_members(type_pair.source)
        target_members = self._filter.target_members(type_pair.target)
        reverse_binds = build_reverse_bind_index(
            self._introspector, type_pair, target_members, self._reverse_bind_conflict
        )
        binding_config = self._provider.config_for(type_pair)

        result: list[MappingMemberPath] = []
        for source_member in source_members:
            if is_ignored(self._introspector, binding_config, type_pair, source_member):
                continue
            target_name = resolve_target_name(
                self._introspector, binding_config, type_pair, source_member, reverse_binds
            )
            entry = self._entry_for(type_pair, binding_config, source_member, target_name, target_members)
            if entry is not None:
                result.append(entry)

        logger.debug("mapping_plan_built", extra={"type_pair": str(type_pair), "entries": len(result)})
        return result

    def _entry_for(
        self,
        type_pair: TypePair,
        binding_config: BindingConfig | None,
        source_member: MemberDescriptor,
        target_name: str,
        target_members: list[MemberDescriptor],
    ) -> MappingMemberPath | None:
        if binding_config is not None:
            target_binding = binding_config.bind_field_target_path(target_name)
            if target_binding is not None:
                source_binding = binding_config.bind_field_source_path(source_member.name)
                source_path = source_binding.source_path if source_binding is not None else (source_member.name,)
                return MappingMemberPath.path(
                    self._paths.resolve_source(source_path, type_pair.source),
                    self._paths.resolve_target(target_binding.target_path, type_pair.target),
                )

        matches = self._provider.matches
        if binding_config is not None and binding_config.name_matching is not None:
            matches = binding_config.name_matching
        target_member = next((m for m in target_members if matches(target_name, m.name)), None)
        if target_member is None:
            return None

        override = binding_config.bind_type(target_name) if binding_config is not None else None
        if override is not None:
            return MappingMemberPath.simple(
                source_member, target_member, TypePair(source_member.member_type, override)
            )
        return MappingMemberPath.simple(source_member, target_member)
