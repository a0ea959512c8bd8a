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
"""FlyMap Mapping — member correspondence resolution between two types.

Given a (source, target) type pair, :class:`MappingMemberBuilder` computes
the ordered member-to-member plan a copier uses, reconciling same-name
convention, ``Bind``/``Ignore`` annotations and per-pair binding configs.
:class:`Mapper` caches those plans and applies them to objects.
"""

from flymap.mapping.annotations import UNSCOPED, Bind, Ignore, ScopedTo, Unscoped
from flymap.mapping.binding import BindingConfig, BindingFieldPath, NameMatcher
from flymap.mapping.builder import MappingMemberBuilder
from flymap.mapping.introspection import ReflectionIntrospector, TypeIntrospector
from flymap.mapping.mapper import Mapper
from flymap.mapping.members import MemberFilter
from flymap.mapping.registry import BindingConfigProvider, BindingRegistry
from flymap.mapping.resolution import PathResolver
from flymap.mapping.types import MappingMemberPath, MemberDescriptor, MemberKind, TypePair

__all__ = [
    "Bind",
    "BindingConfig",
    "BindingConfigProvider",
    "BindingFieldPath",
    "BindingRegistry",
    "Ignore",
    "Mapper",
    "MappingMemberBuilder",
    "MappingMemberPath",
    "MemberDescriptor",
    "MemberFilter",
    "MemberKind",
    "NameMatcher",
    "PathResolver",
    "ReflectionIntrospector",
    "ScopedTo",
    "TypeIntrospector",
    "TypePair",
    "UNSCOPED",
    "Unscoped",
]
