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
"""Typed configuration for the mapping engine (``flymap.mapping``)."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from flymap.core.config import config_properties


class BindingDeclaration(BaseModel):
    """A type-pair binding declared in configuration.

    Types are dotted import paths (``myapp.models.User``). ``fields`` maps
    dotted source paths to dotted target paths, ``types`` maps target member
    names to the dotted path of the type their value is mapped through.
    """

    source: str
    target: str
    fields: dict[str, str] = Field(default_factory=dict)
    ignore: list[str] = Field(default_factory=list)
    types: dict[str, str] = Field(default_factory=dict)
    name_matching: Literal["exact", "case_insensitive", "relaxed"] | None = None


@config_properties(prefix="flymap.mapping")
class MappingProperties(BaseModel):
    """Engine-wide mapping settings.

    Attributes:
        name_matching: Strategy used to pair a resolved target name with a
            target member when no per-pair strategy is given.
        reverse_bind_conflict: ``error`` rejects two target members that
            claim the same source member, ``last_wins`` keeps the last one.
        path_separator: Separator between segments of a binding path.
        bindings: Declarative per-pair bindings.
    """

    name_matching: Literal["exact", "case_insensitive", "relaxed"] = "exact"
    reverse_bind_conflict: Literal["error", "last_wins"] = "error"
    path_separator: str = Field(default=".", min_length=1)
    bindings: list[BindingDeclaration] = Field(default_factory=list)
