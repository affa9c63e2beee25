"""Tests for the registration invariant tracker and the attempt helpers."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

import pytest

from dicontract.exceptions import (
    DIContractDuplicateRegistrationError,
    DIContractInvalidRegistrationError,
)
from dicontract.lifestyle import Lifestyle
from dicontract.registry import (
    ComponentRegistry,
    attempt_register,
    attempt_register_collection,
    attempt_register_instance,
    attempt_register_open,
)

T = TypeVar("T")


class ISomeDependency:
    pass


class SomeDependency(ISomeDependency):
    pass


class OtherDependency(ISomeDependency):
    pass


class Repository(Generic[T]):
    pass


class SqlRepository(Repository[T]):
    pass


class TestIsRegistered:
    def test_false_until_registered_then_true(self, registry: ComponentRegistry) -> None:
        assert registry.is_registered(ISomeDependency) is False

        registry.register(ISomeDependency, SomeDependency)

        assert registry.is_registered(ISomeDependency) is True
        assert registry.is_registered(SomeDependency) is False

    @pytest.mark.parametrize(
        "register",
        [
            lambda registry: registry.register(ISomeDependency, SomeDependency),
            lambda registry: registry.register_collection(ISomeDependency, [SomeDependency]),
            lambda registry: registry.register_instance(ISomeDependency, SomeDependency()),
        ],
        ids=["register", "register_collection", "register_instance"],
    )
    def test_every_register_path_claims_the_dependency_type(
        self,
        registry: ComponentRegistry,
        register: Any,
    ) -> None:
        register(registry)

        assert registry.is_registered(ISomeDependency)
        assert registry.registered_types == (ISomeDependency,)

    def test_rejects_none(self, registry: ComponentRegistry) -> None:
        with pytest.raises(DIContractInvalidRegistrationError, match="is_registered"):
            registry.is_registered(None)


class TestRegister:
    def test_register_returns_registry_for_chaining(self, registry: ComponentRegistry) -> None:
        result = registry.register(ISomeDependency, SomeDependency).register(SomeDependency)

        assert result is registry
        assert registry.registered_types == (ISomeDependency, SomeDependency)

    def test_second_register_raises_and_keeps_single_entry(self, registry: ComponentRegistry) -> None:
        registry.register(ISomeDependency, SomeDependency)

        with pytest.raises(DIContractDuplicateRegistrationError, match="already been registered") as exc_info:
            registry.register(ISomeDependency, OtherDependency, Lifestyle.TRANSIENT)

        assert exc_info.value.dependency_type is ISomeDependency
        assert registry.registered_types == (ISomeDependency,)

    def test_message_names_the_dependency_type(self, registry: ComponentRegistry) -> None:
        registry.register(ISomeDependency, SomeDependency)

        with pytest.raises(DIContractDuplicateRegistrationError, match=r"test_registry\.ISomeDependency"):
            registry.register(ISomeDependency, SomeDependency)

    @pytest.mark.parametrize(
        "second",
        [
            lambda registry: registry.register(ISomeDependency, OtherDependency),
            lambda registry: registry.register_open(ISomeDependency, OtherDependency),
            lambda registry: registry.register_collection(ISomeDependency, [OtherDependency]),
            lambda registry: registry.register_instance(ISomeDependency, OtherDependency()),
        ],
        ids=["register", "register_open", "register_collection", "register_instance"],
    )
    def test_uniqueness_spans_all_register_paths(self, registry: ComponentRegistry, second: Any) -> None:
        registry.register_instance(ISomeDependency, SomeDependency())

        with pytest.raises(DIContractDuplicateRegistrationError):
            second(registry)

        assert registry.registered_types == (ISomeDependency,)

    def test_register_open_claims_the_open_generic(self, registry: ComponentRegistry) -> None:
        registry.register_open(Repository, SqlRepository, Lifestyle.TRANSIENT)

        assert registry.is_registered(Repository)

    def test_empty_collection_is_accepted(self, registry: ComponentRegistry) -> None:
        registry.register_collection(ISomeDependency, [])

        assert registry.is_registered(ISomeDependency)

    @pytest.mark.parametrize(
        ("call", "parameter"),
        [
            (lambda registry: registry.register(None, SomeDependency), "dependency_type"),
            (lambda registry: registry.register_open(Repository, None), "implementation_type"),
            (lambda registry: registry.register_collection(ISomeDependency, None), "implementation_types"),
            (lambda registry: registry.register_instance(ISomeDependency, None), "instance"),
        ],
    )
    def test_rejects_none_arguments(self, registry: ComponentRegistry, call: Any, parameter: str) -> None:
        with pytest.raises(DIContractInvalidRegistrationError, match=parameter):
            call(registry)

        assert registry.registered_types == ()


class TestAttemptRegister:
    def test_second_attempt_is_a_no_op(self, recording_registry: Any) -> None:
        first = attempt_register(recording_registry, ISomeDependency, SomeDependency)
        second = attempt_register(recording_registry, ISomeDependency, OtherDependency)

        assert first is recording_registry
        assert second is recording_registry
        assert recording_registry.is_registered_calls == [ISomeDependency, ISomeDependency]
        assert recording_registry.calls == [
            ("register", ISomeDependency, SomeDependency, Lifestyle.SINGLETON),
        ]

    def test_forwards_lifestyle(self, recording_registry: Any) -> None:
        attempt_register(recording_registry, ISomeDependency, SomeDependency, Lifestyle.TRANSIENT)

        assert recording_registry.calls == [
            ("register", ISomeDependency, SomeDependency, Lifestyle.TRANSIENT),
        ]

    def test_registers_implementation_against_itself(self, recording_registry: Any) -> None:
        attempt_register(recording_registry, SomeDependency)
        attempt_register(recording_registry, SomeDependency)

        assert recording_registry.calls == [
            ("register", SomeDependency, SomeDependency, Lifestyle.SINGLETON),
        ]

    def test_attempt_register_instance(self, recording_registry: Any) -> None:
        instance = SomeDependency()

        attempt_register_instance(recording_registry, ISomeDependency, instance)
        attempt_register_instance(recording_registry, ISomeDependency, SomeDependency())

        assert recording_registry.calls == [("register_instance", ISomeDependency, instance)]

    def test_attempt_register_collection(self, recording_registry: Any) -> None:
        attempt_register_collection(recording_registry, ISomeDependency, [SomeDependency, OtherDependency])
        attempt_register_collection(recording_registry, ISomeDependency, [SomeDependency])

        assert recording_registry.calls == [
            (
                "register_collection",
                ISomeDependency,
                (SomeDependency, OtherDependency),
                Lifestyle.SINGLETON,
            ),
        ]

    def test_attempt_register_open(self, recording_registry: Any) -> None:
        attempt_register_open(recording_registry, Repository, SqlRepository)
        attempt_register_open(recording_registry, Repository, SqlRepository, Lifestyle.TRANSIENT)

        assert recording_registry.calls == [
            ("register_open", Repository, SqlRepository, Lifestyle.SINGLETON),
        ]

    def test_attempt_skips_types_claimed_by_other_paths(self, recording_registry: Any) -> None:
        recording_registry.register_instance(ISomeDependency, SomeDependency())

        attempt_register(recording_registry, ISomeDependency, OtherDependency)

        assert len(recording_registry.calls) == 1
