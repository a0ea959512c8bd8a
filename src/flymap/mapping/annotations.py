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
"""Member annotations — ``typing.Annotated`` markers for bind/ignore rules.

Markers (for use with ``typing.Annotated``):
    Bind(member_name, target=None) — pair this member with a named counterpart
    Ignore(target=None)            — never map this source member

A marker without ``target`` is *unscoped* and always applies. With
``target`` it is *scoped*: it applies only when the opposing type of the
pair is ``target`` or a subclass of it.

Usage::

    @dataclass
    class Account:
        login: Annotated[str, Bind("username")]
        password: Annotated[str, Ignore()]
        nickname: Annotated[str, Bind("alias", target=PublicProfile)]

On properties, annotate the getter's return type::

    @property
    def display(self) -> Annotated[str, Bind("title")]: ...
"""

from __future__ import annotations

from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Scope variant
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Unscoped:
    """Applies whatever the opposing type is."""

    def applies_to(self, opposing: type) -> bool:
        return True


@dataclass(frozen=True)
class ScopedTo:
    """Applies only when the opposing type is assignable to ``target``."""

    target: type

    def applies_to(self, opposing: type) -> bool:
        return isinstance(opposing, type) and issubclass(opposing, self.target)


Scope = Unscoped | ScopedTo

UNSCOPED = Unscoped()


def _scope(target: type | None) -> Scope:
    return UNSCOPED if target is None else ScopedTo(target)


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Bind:
    """Declare the counterpart member this member is paired with.

    On a source member ``member_name`` names the target member it feeds; on
    a target member it names the source member it receives.

    Args:
        member_name: Name of the counterpart member.
        target: Optional type the opposing shape must be assignable to.
    """

    member_name: str
    target: type | None = None

    @property
    def scope(self) -> Scope:
        return _scope(self.target)


@dataclass(frozen=True)
class Ignore:
    """Exclude a source member from mapping.

    Args:
        target: Optional type the target shape must be assignable to.
    """

    target: type | None = None

    @property
    def scope(self) -> Scope:
        return _scope(self.target)


def first_applicable(markers: list[Bind], opposing: type) -> Bind | None:
    """Pick the marker in force for ``opposing``: unscoped first, then scoped."""
    for marker in markers:
        if isinstance(marker.scope, Unscoped):
            return marker
    for marker in markers:
        if marker.scope.applies_to(opposing):
            return marker
    return None
