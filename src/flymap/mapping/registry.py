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
"""Binding configuration provider — per-pair configs plus global name matching."""

from __future__ import annotations

import importlib
from collections.abc import Iterable, Mapping
from typing import Protocol, runtime_checkable

from flymap.core.config import Config
from flymap.core.properties import MappingProperties
from flymap.kernel.exceptions import MappingConfigurationException
from flymap.mapping.binding import BindingConfig, NameMatcher, name_matcher
from flymap.mapping.types import TypePair


@runtime_checkable
class BindingConfigProvider(Protocol):
    """Port supplying per-pair overrides and the global name-matching rule."""

    def config_for(self, type_pair: TypePair) -> BindingConfig | None: ...
    def matches(self, candidate_name: str, member_name: str) -> bool: ...


def import_type(dotted: str) -> type:
    """Resolve ``package.module.Name`` to the class it names."""
    module_name, _, attr = dotted.rpartition(".")
    if not module_name:
        raise MappingConfigurationException(f"'{dotted}' is not a dotted import path", context={"type": dotted})
    try:
        resolved = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as exc:
        raise MappingConfigurationException(f"Cannot import type '{dotted}'", context={"type": dotted}) from exc
    if not isinstance(resolved, type):
        raise MappingConfigurationException(f"'{dotted}' is not a type", context={"type": dotted})
    return resolved


class BindingRegistry:
    """Default :class:`BindingConfigProvider` holding one config per type pair.

    Usage::

        registry = BindingRegistry(name_matching="relaxed")
        registry.bind(
            Customer,
            CustomerDTO,
            fields={"address.city": "city"},
            ignore={"password"},
            types={"pet": Dog},
        )
    """

    def __init__(
        self,
        name_matching: str | NameMatcher = "exact",
        *,
        separator: str = ".",
    ) -> None:
        self._matcher = name_matcher(name_matching)
        self._separator = separator
        self._configs: dict[TypePair, BindingConfig] = {}

    @classmethod
    def from_config(cls, config: Config) -> BindingRegistry:
        """Build a registry from the ``flymap.mapping`` configuration section."""
        return cls.from_properties(config.bind(MappingProperties))

    @classmethod
    def from_properties(cls, props: MappingProperties) -> BindingRegistry:
        registry = cls(props.name_matching, separator=props.path_separator)
        for decl in props.bindings:
            registry.bind(
                import_type(decl.source),
                import_type(decl.target),
                fields=decl.fields,
                ignore=decl.ignore,
                types={name: import_type(dotted) for name, dotted in decl.types.items()},
                name_matching=decl.name_matching,
            )
        return registry

    @property
    def separator(self) -> str:
        return self._separator

    def bind(
        self,
        source_type: type,
        target_type: type,
        *,
        fields: Mapping[str, str] | None = None,
        ignore: Iterable[str] | None = None,
        types: Mapping[str, type] | None = None,
        name_matching: str | NameMatcher | None = None,
    ) -> BindingConfig:
        """Register (or replace) the binding config for a type pair.

        Args:
            source_type: The source type to map from.
            target_type: The target type to map to.
            fields: Dotted source path -> dotted target path.
            ignore: Source member names to skip.
            types: Target member name -> type the value is mapped through.
            name_matching: Per-pair name matching strategy.
        """
        binding = BindingConfig(
            fields=fields,
            ignore=ignore,
            types=types,
            name_matching=name_matching,
            separator=self._separator,
        )
        self._configs[TypePair(source_type, target_type)] = binding
        return binding

    def config_for(self, type_pair: TypePair) -> BindingConfig | None:
        return self._configs.get(type_pair)

    def matches(self, candidate_name: str, member_name: str) -> bool:
        return self._matcher(candidate_name, member_name)
