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
"""Per-type-pair binding configuration and name matching strategies."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

from flymap.kernel.exceptions import MappingConfigurationException

NameMatcher = Callable[[str, str], bool]


# ---------------------------------------------------------------------------
# Name matching strategies
# ---------------------------------------------------------------------------


def exact_match(candidate: str, member_name: str) -> bool:
    return candidate == member_name


def case_insensitive_match(candidate: str, member_name: str) -> bool:
    return candidate.casefold() == member_name.casefold()


def relaxed_match(candidate: str, member_name: str) -> bool:
    """Case-insensitive match that also ignores underscores (``userName`` ~ ``user_name``)."""
    return candidate.replace("_", "").casefold() == member_name.replace("_", "").casefold()


NAME_MATCHERS: dict[str, NameMatcher] = {
    "exact": exact_match,
    "case_insensitive": case_insensitive_match,
    "relaxed": relaxed_match,
}


def name_matcher(strategy: str | NameMatcher) -> NameMatcher:
    """Return the matcher for a strategy name, or the callable itself."""
    if callable(strategy):
        return strategy
    try:
        return NAME_MATCHERS[strategy]
    except KeyError:
        raise MappingConfigurationException(
            f"Unknown name matching strategy '{strategy}'",
            context={"available": sorted(NAME_MATCHERS)},
        ) from None


# ---------------------------------------------------------------------------
# Binding declarations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BindingFieldPath:
    """A configured source path bound to a target path.

    Attributes:
        source_path: Source member names, root first.
        target_path: Target member names, root first.
    """

    source_path: tuple[str, ...]
    target_path: tuple[str, ...]

    @classmethod
    def parse(cls, source: str, target: str, separator: str = ".") -> BindingFieldPath:
        source_path = tuple(source.split(separator))
        target_path = tuple(target.split(separator))
        if not all(source_path) or not all(target_path):
            raise MappingConfigurationException(
                f"Empty segment in binding '{source}' -> '{target}'",
                context={"source": source, "target": target},
            )
        return cls(source_path, target_path)

    @property
    def source_head(self) -> str:
        return self.source_path[0]

    @property
    def target_head(self) -> str:
        return self.target_path[0]

    @property
    def has_path(self) -> bool:
        """True when either side reaches into a nested member."""
        return len(self.source_path) > 1 or len(self.target_path) > 1


class BindingConfig:
    """Read-only overrides for one (source, target) type pair.

    Args:
        fields: Dotted source path -> dotted target path.
        ignore: Source member names that are never mapped.
        types: Target member name -> type the value is mapped through.
        name_matching: Strategy name or callable replacing the global one.
        separator: Path segment separator.

    Raises:
        MappingConfigurationException: Two bindings start at the same
            source member, or a path has an empty segment.
    """

    __slots__ = ("_bindings", "_ignored", "_types", "_name_matching")

    def __init__(
        self,
        *,
        fields: Mapping[str, str] | None = None,
        ignore: Iterable[str] | None = None,
        types: Mapping[str, type] | None = None,
        name_matching: str | NameMatcher | None = None,
        separator: str = ".",
    ) -> None:
        self._bindings: dict[str, BindingFieldPath] = {}
        for source, target in (fields or {}).items():
            binding = BindingFieldPath.parse(source, target, separator)
            if binding.source_head in self._bindings:
                raise MappingConfigurationException(
                    f"Source member '{binding.source_head}' is bound more than once",
                    context={"source": binding.source_head},
                )
            self._bindings[binding.source_head] = binding
        self._ignored = frozenset(ignore or ())
        self._types = dict(types or {})
        self._name_matching = None if name_matching is None else name_matcher(name_matching)

    @property
    def name_matching(self) -> NameMatcher | None:
        return self._name_matching

    def ignore_source_field(self, name: str) -> bool:
        return name in self._ignored

    def bind_field(self, source_name: str) -> str | None:
        """Top-level target member name configured for a source member."""
        binding = self._bindings.get(source_name)
        return binding.target_head if binding is not None else None

    def bind_field_source_path(self, source_name: str) -> BindingFieldPath | None:
        return self._bindings.get(source_name)

    def bind_field_target_path(self, target_name: str) -> BindingFieldPath | None:
        """First nested binding whose target path starts at ``target_name``."""
        for binding in self._bindings.values():
            if binding.has_path and binding.target_head == target_name:
                return binding
        return None

    def bind_type(self, target_name: str) -> type | None:
        return self._types.get(target_name)

    def __repr__(self) -> str:
        return (
            f"BindingConfig(fields={list(self._bindings.values())!r}, "
            f"ignore={sorted(self._ignored)!r}, types={self._types!r})"
        )
