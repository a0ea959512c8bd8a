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
"""Tests for MappingMemberBuilder — member plan resolution for a type pair."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated

import pytest

from flymap.kernel.exceptions import AmbiguousBindingException, MappingConfigurationException, ResolutionException
from flymap.mapping.annotations import Bind, Ignore
from flymap.mapping.builder import MappingMemberBuilder
from flymap.mapping.registry import BindingRegistry
from flymap.mapping.types import MappingMemberPath, TypePair
from flymap.testing import assert_not_mapped, assert_path_entry, assert_simple_entry

# ---------------------------------------------------------------------------
# Test types
# ---------------------------------------------------------------------------


@dataclass
class Person:
    Name: str
    Age: int


@dataclass
class PersonDTO:
    Name: str
    Age: int


@dataclass
class Account:
    Login: Annotated[str, Bind("Username")]
    Password: str = ""


@dataclass
class AccountDTO:
    Username: str = ""
    Password: str = ""


@dataclass
class Address:
    City: str = ""
    Zip: str = ""


@dataclass
class Place:
    City: str = ""


@dataclass
class Customer:
    Addr: Address = field(default_factory=Address)
    City: str = ""


@dataclass
class CustomerView:
    Location: Place = field(default_factory=Place)
    City: str = ""


@dataclass
class Secretive:
    Secret: Annotated[str, Ignore(), Bind("Token")] = ""
    Token: str = ""


@dataclass
class TokenHolder:
    Token: str = ""


@dataclass
class PublicCard:
    Title: str = ""
    Notes: str = ""


@dataclass
class PublicCardV2(PublicCard):
    pass


@dataclass
class InternalCard:
    Title: str = ""
    Notes: str = ""
    Heading: str = ""
    Caption: str = ""


@dataclass
class Card:
    Title: Annotated[str, Bind("Heading", target=InternalCard), Bind("Caption")] = ""
    Notes: Annotated[str, Ignore(target=PublicCard)] = ""


@dataclass
class Profile:
    Alias: Annotated[str, Bind("Nick", target=ProfileDTO)] = ""


@dataclass
class ProfileDTO:
    Nick: str = ""
    Handle: str = ""


@dataclass
class HandleDTO:
    Nick: str = ""
    Handle: str = ""


@dataclass
class Labelled:
    Label: str = ""


@dataclass
class LabelTarget:
    Label: str = ""
    Caption: str = ""
    Display: Annotated[str, Bind("Label")] = ""


@dataclass
class ScopedLabelTarget:
    Label: str = ""
    Display: Annotated[str, Bind("Label", target=Person)] = ""


@dataclass
class ConflictingTarget:
    First: Annotated[str, Bind("Label")] = ""
    Second: Annotated[str, Bind("Label")] = ""


@dataclass
class Customer2:
    Id: int = 0
    Buyer: Customer = field(default_factory=Customer)


@dataclass
class CustomerSummary:
    City: str = ""


@dataclass
class OrderDTO:
    Id: int = 0
    Buyer: object = None


def _builder(registry: BindingRegistry | None = None, **kwargs) -> MappingMemberBuilder:
    return MappingMemberBuilder(registry or BindingRegistry(), **kwargs)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestConventionMapping:
    def test_same_names_pair_in_source_order(self) -> None:
        plan = _builder().build(TypePair(Person, PersonDTO))

        assert [str(entry) for entry in plan] == ["Name -> Name", "Age -> Age"]
        assert all(not entry.is_path and entry.type_pair is None for entry in plan)

    def test_unmatched_source_member_is_skipped_without_error(self) -> None:
        plan = _builder().build(TypePair(Customer, TokenHolder))
        assert plan == []

    def test_repeated_builds_are_identical(self) -> None:
        builder = _builder()
        pair = TypePair(Person, PersonDTO)
        assert builder.build(pair) == builder.build(pair)

    def test_builder_does_not_memoize(self) -> None:
        calls: list[TypePair] = []

        class CountingRegistry(BindingRegistry):
            def config_for(self, type_pair: TypePair):
                calls.append(type_pair)
                return super().config_for(type_pair)

        builder = _builder(CountingRegistry())
        builder.build(TypePair(Person, PersonDTO))
        builder.build(TypePair(Person, PersonDTO))
        assert len(calls) == 2


class TestBindAnnotations:
    def test_unscoped_bind_renames(self) -> None:
        plan = _builder().build(TypePair(Account, AccountDTO))

        assert_simple_entry(plan, "Login", "Username")
        assert_simple_entry(plan, "Password", "Password")
        assert len(plan) == 2

    def test_unscoped_bind_wins_over_scoped(self) -> None:
        plan = _builder().build(TypePair(Card, InternalCard))
        assert_simple_entry(plan, "Title", "Caption")

    def test_scoped_bind_wins_over_binding_config(self) -> None:
        registry = BindingRegistry()
        registry.bind(Profile, ProfileDTO, fields={"Alias": "Handle"})

        plan = _builder(registry).build(TypePair(Profile, ProfileDTO))
        assert [str(entry) for entry in plan] == ["Alias -> Nick"]

    def test_scoped_bind_ignored_for_unrelated_target(self) -> None:
        registry = BindingRegistry()
        registry.bind(Profile, HandleDTO, fields={"Alias": "Handle"})

        plan = _builder(registry).build(TypePair(Profile, HandleDTO))
        assert [str(entry) for entry in plan] == ["Alias -> Handle"]

    def test_binding_config_wins_over_reverse_bind(self) -> None:
        registry = BindingRegistry()
        registry.bind(Labelled, LabelTarget, fields={"Label": "Caption"})

        plan = _builder(registry).build(TypePair(Labelled, LabelTarget))
        assert [str(entry) for entry in plan] == ["Label -> Caption"]

    def test_reverse_bind_wins_over_same_name(self) -> None:
        plan = _builder().build(TypePair(Labelled, LabelTarget))
        assert [str(entry) for entry in plan] == ["Label -> Display"]

    def test_scoped_reverse_bind_requires_matching_source(self) -> None:
        plan = _builder().build(TypePair(Labelled, ScopedLabelTarget))
        assert [str(entry) for entry in plan] == ["Label -> Label"]

    def test_reverse_bind_conflict_is_rejected(self) -> None:
        with pytest.raises(AmbiguousBindingException) as exc_info:
            _builder().build(TypePair(Labelled, ConflictingTarget))
        assert exc_info.value.context["targets"] == ["First", "Second"]

    def test_reverse_bind_conflict_last_wins_when_configured(self) -> None:
        plan = _builder(reverse_bind_conflict="last_wins").build(TypePair(Labelled, ConflictingTarget))
        assert [str(entry) for entry in plan] == ["Label -> Second"]

    def test_unknown_conflict_policy_is_rejected(self) -> None:
        with pytest.raises(MappingConfigurationException):
            _builder(reverse_bind_conflict="first_wins")


class TestIgnoreRules:
    def test_unscoped_ignore_wins_over_bind(self) -> None:
        registry = BindingRegistry()
        registry.bind(Secretive, TokenHolder, fields={"Secret": "Token"})

        plan = _builder(registry).build(TypePair(Secretive, TokenHolder))
        assert_not_mapped(plan, "Secret")
        assert [str(entry) for entry in plan] == ["Token -> Token"]

    def test_scoped_ignore_applies_to_matching_target(self) -> None:
        plan = _builder().build(TypePair(Card, PublicCard))
        assert_not_mapped(plan, "Notes")

    def test_scoped_ignore_applies_to_subclass_of_scope(self) -> None:
        plan = _builder().build(TypePair(Card, PublicCardV2))
        assert_not_mapped(plan, "Notes")

    def test_scoped_ignore_skipped_for_other_target(self) -> None:
        plan = _builder().build(TypePair(Card, InternalCard))
        assert_simple_entry(plan, "Notes", "Notes")

    def test_binding_config_ignore(self) -> None:
        registry = BindingRegistry()
        registry.bind(Account, AccountDTO, ignore={"Password"})

        plan = _builder(registry).build(TypePair(Account, AccountDTO))
        assert_not_mapped(plan, "Password")
        assert len(plan) == 1


class TestPathBindings:
    def test_nested_to_nested_path(self) -> None:
        registry = BindingRegistry()
        registry.bind(Customer, CustomerView, fields={"Addr.City": "Location.City"})

        plan = _builder(registry).build(TypePair(Customer, CustomerView))

        entry = assert_path_entry(plan, ["Addr", "City"], ["Location", "City"])
        assert entry.source[0].declaring_type is Customer
        assert entry.target[1].declaring_type is Place
        assert_simple_entry(plan, "City", "City")

    def test_path_entry_replaces_simple_entry(self) -> None:
        registry = BindingRegistry()
        registry.bind(Customer, CustomerView, fields={"City": "Location.City"})

        plan = _builder(registry).build(TypePair(Customer, CustomerView))

        assert_path_entry(plan, ["City"], ["Location", "City"])
        assert [entry.is_path for entry in plan if entry.source[0].name == "City"] == [True]

    def test_flattening_path(self) -> None:
        registry = BindingRegistry()
        registry.bind(Customer, CustomerView, fields={"Addr.Zip": "City"})

        plan = _builder(registry).build(TypePair(Customer, CustomerView))
        assert_path_entry(plan, ["Addr", "Zip"], ["City"])

    def test_custom_separator(self) -> None:
        registry = BindingRegistry(separator="/")
        registry.bind(Customer, CustomerView, fields={"Addr/City": "Location/City"})

        plan = _builder(registry, separator="/").build(TypePair(Customer, CustomerView))
        assert_path_entry(plan, ["Addr", "City"], ["Location", "City"])

    def test_unresolvable_target_path_fails(self) -> None:
        registry = BindingRegistry()
        registry.bind(Customer, CustomerView, fields={"Addr.City": "X.Y"})

        with pytest.raises(ResolutionException) as exc_info:
            _builder(registry).build(TypePair(Customer, CustomerView))

        assert exc_info.value.context == {"path": "X.Y", "segment": "X", "type": CustomerView}

    def test_unresolvable_source_path_fails(self) -> None:
        registry = BindingRegistry()
        registry.bind(Customer, CustomerView, fields={"Addr.Street": "Location.City"})

        with pytest.raises(ResolutionException) as exc_info:
            _builder(registry).build(TypePair(Customer, CustomerView))
        assert exc_info.value.context["segment"] == "Street"
        assert exc_info.value.context["type"] is Address

    def test_path_through_scalar_fails(self) -> None:
        registry = BindingRegistry()
        registry.bind(Customer, CustomerView, fields={"City.Name": "Location.City"})

        with pytest.raises(ResolutionException):
            _builder(registry).build(TypePair(Customer, CustomerView))


class TestTypeOverride:
    def test_override_carries_substituted_pair(self) -> None:
        registry = BindingRegistry()
        registry.bind(Customer2, OrderDTO, types={"Buyer": CustomerSummary})

        plan = _builder(registry).build(TypePair(Customer2, OrderDTO))

        assert_simple_entry(plan, "Id", "Id")
        entry = assert_simple_entry(plan, "Buyer", "Buyer", type_pair=(Customer, CustomerSummary))
        assert entry.type_pair == TypePair(Customer, CustomerSummary)


class TestNameMatching:
    def test_global_case_insensitive(self) -> None:
        @dataclass
        class Lower:
            name: str = ""

        plan = _builder(BindingRegistry("case_insensitive")).build(TypePair(Person, Lower))
        assert [str(entry) for entry in plan] == ["Name -> name"]

    def test_per_pair_strategy_overrides_global(self) -> None:
        @dataclass
        class Snake:
            display_label: str = ""

        @dataclass
        class Camel:
            displayLabel: str = ""

        registry = BindingRegistry()
        registry.bind(Camel, Snake, name_matching="relaxed")

        plan = _builder(registry).build(TypePair(Camel, Snake))
        assert [str(entry) for entry in plan] == ["displayLabel -> display_label"]

    def test_custom_matcher_callable(self) -> None:
        registry = BindingRegistry(lambda candidate, member: member == f"{candidate}Value")

        @dataclass
        class Suffixed:
            NameValue: str = ""

        plan = _builder(registry).build(TypePair(Person, Suffixed))
        assert [str(entry) for entry in plan] == ["Name -> NameValue"]

    def test_first_matching_target_wins(self) -> None:
        @dataclass
        class Twice:
            NAME: str = ""
            name: str = ""

        plan = _builder(BindingRegistry("case_insensitive")).build(TypePair(Person, Twice))
        assert [str(entry) for entry in plan] == ["Name -> NAME"]


class TestPlanEntries:
    def test_simple_entry_shape(self) -> None:
        entry = _builder().build(TypePair(Person, PersonDTO))[0]

        assert isinstance(entry, MappingMemberPath)
        assert entry.source_member.name == "Name"
        assert entry.target_member.name == "Name"
        assert entry.source_member.value_type is str

    def test_entries_are_immutable(self) -> None:
        entry = _builder().build(TypePair(Person, PersonDTO))[0]
        with pytest.raises(AttributeError):
            entry.is_path = True  # type: ignore[misc]
