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
"""Generic type-to-type mapper driven by resolved member plans.

The mapper asks :class:`MappingMemberBuilder` for the plan of each
(source, target) pair once, caches it, and applies it with plain attribute
access. Values are copied as-is; entries carrying a substituted type pair
are mapped recursively through that pair.

Example::

    mapper = Mapper()
    dto = mapper.map(user_entity, UserDTO)

    # Rename and flatten
    mapper.bind(User, UserDTO, fields={"login": "username", "address.city": "city"})

    # Skip a member
    mapper.bind(User, UserDTO, ignore={"password"})
"""

from __future__ import annotations

import inspect
import logging
import threading
from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from pydantic import ValidationError

from flymap.core.config import Config
from flymap.core.properties import MappingProperties
from flymap.kernel.exceptions import MappingExecutionException
from flymap.logging.port import LoggingPort
from flymap.logging.structlog_adapter import StructlogAdapter
from flymap.mapping.binding import NameMatcher
from flymap.mapping.builder import MappingMemberBuilder
from flymap.mapping.introspection import TypeIntrospector
from flymap.mapping.registry import BindingRegistry
from flymap.mapping.types import MappingMemberPath, TypePair

S = TypeVar("S")
D = TypeVar("D")

logger = logging.getLogger(__name__)

_KEYWORD_KINDS = (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)

# Marks a path read that hit None before its leaf.
_SKIP = object()


class Mapper:
    """Maps objects between types using cached member plans.

    Usage::

        mapper = Mapper()
        dto = mapper.map(user_entity, UserDTO)

        mapper.bind(Order, OrderDTO, types={"customer": CustomerSummary})
        summary = mapper.map(order, OrderDTO)
    """

    def __init__(
        self,
        registry: BindingRegistry | None = None,
        introspector: TypeIntrospector | None = None,
        *,
        reverse_bind_conflict: str = "error",
    ) -> None:
        self._registry = registry or BindingRegistry()
        self._builder = MappingMemberBuilder(
            self._registry,
            introspector,
            separator=self._registry.separator,
            reverse_bind_conflict=reverse_bind_conflict,
        )
        self._plans: dict[TypePair, list[MappingMemberPath]] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Config, logging_port: LoggingPort | None = None) -> Mapper:
        """Create a mapper configured from the ``flymap.mapping`` section.

        When ``config`` has a ``flymap.logging`` section, ``logging_port``
        (a :class:`StructlogAdapter` unless given) is configured from it.
        """
        if logging_port is not None or config.get_section("flymap.logging"):
            (logging_port or StructlogAdapter()).configure(config)
        props = config.bind(MappingProperties)
        return cls(
            BindingRegistry.from_properties(props),
            reverse_bind_conflict=props.reverse_bind_conflict,
        )

    @property
    def registry(self) -> BindingRegistry:
        return self._registry

    def bind(
        self,
        source_type: type[S],
        dest_type: type[D],
        *,
        fields: Mapping[str, str] | None = None,
        ignore: Iterable[str] | None = None,
        types: Mapping[str, type] | None = None,
        name_matching: str | NameMatcher | None = None,
    ) -> None:
        """Register binding overrides for a pair and drop its cached plan.

        Args:
            source_type: The source type to map from.
            dest_type: The destination type to map to.
            fields: Dotted source path -> dotted destination path.
            ignore: Source member names to skip.
            types: Destination member name -> type its value is mapped through.
            name_matching: Per-pair name matching strategy.
        """
        self._registry.bind(
            source_type,
            dest_type,
            fields=fields,
            ignore=ignore,
            types=types,
            name_matching=name_matching,
        )
        with self._lock:
            self._plans.pop(TypePair(source_type, dest_type), None)

    def plan(self, source_type: type, dest_type: type) -> list[MappingMemberPath]:
        """Return the member plan for a pair, resolving it on first use."""
        pair = TypePair(source_type, dest_type)
        with self._lock:
            cached = self._plans.get(pair)
        if cached is None:
            built = self._builder.build(pair)
            logger.debug("mapping_plan_cached", extra={"type_pair": str(pair)})
            with self._lock:
                cached = self._plans.setdefault(pair, built)
        return list(cached)

    def map(self, source: S, dest_type: type[D]) -> D:
        """Map source object to a new instance of ``dest_type``.

        Values bound to top-level target members (simple entries and paths
        ending at the target root) are passed as keyword arguments when the
        constructor accepts them; the rest are assigned afterwards.
        """
        plan = self.plan(type(source), dest_type)
        values: dict[str, Any] = {}
        paths: list[MappingMemberPath] = []
        for entry in plan:
            if not entry.is_path:
                values[entry.target_member.name] = self._read(source, entry)
            elif len(entry.target) == 1:
                value = self._read_path(source, entry)
                if value is not _SKIP:
                    values[entry.target_member.name] = value
            else:
                paths.append(entry)

        target = self._instantiate(dest_type, values)
        for entry in paths:
            self._apply_path(source, target, entry)
        return target

    def map_into(self, source: object, target: D) -> D:
        """Copy mapped members of ``source`` onto an existing ``target``."""
        for entry in self.plan(type(source), type(target)):
            if entry.is_path:
                self._apply_path(source, target, entry)
            else:
                self._set(target, entry.target_member.name, self._read(source, entry))
        return target

    def map_list(self, sources: list[S], dest_type: type[D]) -> list[D]:
        return [self.map(s, dest_type) for s in sources]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _read(self, source: object, entry: MappingMemberPath) -> Any:
        value = getattr(source, entry.source_member.name)
        if entry.type_pair is not None and value is not None:
            value = self.map(value, entry.type_pair.target)
        return value

    def _instantiate(self, dest_type: type[D], values: dict[str, Any]) -> D:
        try:
            params = inspect.signature(dest_type).parameters
        except (TypeError, ValueError):
            params = {}  # type: ignore[assignment]
        kwargs = {
            name: value
            for name, value in values.items()
            if name in params and params[name].kind in _KEYWORD_KINDS
        }
        try:
            target = dest_type(**kwargs)
        except (TypeError, ValidationError) as exc:
            raise MappingExecutionException(
                f"Cannot instantiate {dest_type.__qualname__}: {exc}",
                context={"type": dest_type, "arguments": sorted(kwargs)},
            ) from exc
        for name, value in values.items():
            if name not in kwargs:
                self._set(target, name, value)
        return target

    @staticmethod
    def _read_path(source: object, entry: MappingMemberPath) -> Any:
        value: Any = source
        for member in entry.source[:-1]:
            value = getattr(value, member.name)
            if value is None:
                return _SKIP
        return getattr(value, entry.source_member.name)

    def _apply_path(self, source: object, target: object, entry: MappingMemberPath) -> None:
        value = self._read_path(source, entry)
        if value is _SKIP:
            return

        owner: Any = target
        for member in entry.target[:-1]:
            nested = getattr(owner, member.name, None)
            if nested is None:
                nested = self._instantiate(member.member_type, {})
                self._set(owner, member.name, nested)
            owner = nested
        self._set(owner, entry.target_member.name, value)

    @staticmethod
    def _set(owner: object, name: str, value: Any) -> None:
        try:
            setattr(owner, name, value)
        except AttributeError as exc:
            raise MappingExecutionException(
                f"Cannot assign '{name}' on {type(owner).__qualname__}: {exc}",
                context={"member": name, "type": type(owner)},
            ) from exc
