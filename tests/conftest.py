"""Shared pytest fixtures for dicontract tests."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

import pytest

from dicontract.exceptions import DIContractResolutionError
from dicontract.lifestyle import Lifestyle
from dicontract.registry import ComponentRegistry


class RecordingRegistry(ComponentRegistry):
    """Registry that records every registration accepted by the base tracker."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[Any, ...]] = []
        self.is_registered_calls: list[Any] = []

    def is_registered(self, dependency_type: Any) -> bool:
        self.is_registered_calls.append(dependency_type)
        return super().is_registered(dependency_type)

    def register(
        self,
        dependency_type: Any,
        implementation_type: type[Any] | None = None,
        lifestyle: Lifestyle = Lifestyle.SINGLETON,
    ) -> RecordingRegistry:
        super().register(dependency_type, implementation_type, lifestyle)
        self.calls.append(("register", dependency_type, implementation_type or dependency_type, lifestyle))
        return self

    def register_open(
        self,
        dependency_type: Any,
        implementation_type: type[Any],
        lifestyle: Lifestyle = Lifestyle.SINGLETON,
    ) -> RecordingRegistry:
        super().register_open(dependency_type, implementation_type, lifestyle)
        self.calls.append(("register_open", dependency_type, implementation_type, lifestyle))
        return self

    def register_collection(
        self,
        dependency_type: Any,
        implementation_types: Iterable[type[Any]],
        lifestyle: Lifestyle = Lifestyle.SINGLETON,
    ) -> RecordingRegistry:
        super().register_collection(dependency_type, implementation_types, lifestyle)
        self.calls.append(("register_collection", dependency_type, tuple(implementation_types), lifestyle))
        return self

    def register_instance(self, dependency_type: Any, instance: Any) -> RecordingRegistry:
        super().register_instance(dependency_type, instance)
        self.calls.append(("register_instance", dependency_type, instance))
        return self

    def calls_named(self, name: str) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == name]


class InMemoryEngine(RecordingRegistry):
    """Minimal engine for resolver tests: builds registered types with no arguments."""

    def resolve(self, dependency_type: Any) -> Any:
        for call in self.calls:
            if call[1] is not dependency_type:
                continue
            if call[0] == "register_instance":
                return call[2]
            if call[0] == "register":
                return call[2]()
        msg = f"Nothing is registered for {dependency_type!r}."
        raise DIContractResolutionError(msg, dependency_type=dependency_type)

    def resolve_all(self, dependency_type: Any) -> Sequence[Any]:
        for call in self.calls:
            if call[1] is not dependency_type:
                continue
            if call[0] == "register_collection":
                return [implementation() for implementation in call[2]]
            return [self.resolve(dependency_type)]
        return []


@pytest.fixture()
def registry() -> ComponentRegistry:
    """Plain invariant-tracking registry."""
    return ComponentRegistry()


@pytest.fixture()
def recording_registry() -> RecordingRegistry:
    """Registry recording each accepted registration call."""
    return RecordingRegistry()


@pytest.fixture()
def engine() -> InMemoryEngine:
    """Registry that can also resolve what was registered."""
    return InMemoryEngine()


@pytest.fixture(autouse=True)
def _clean_dicontract_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep settings defaults independent of the developer's environment."""
    for prefix in ("DICONTRACT_REGISTRY_", "DICONTRACT_RESOLVER_", "DICONTRACT_BOOTSTRAP_"):
        for name in ("COMPONENTS", "COLLECTIONS", "MODULES"):
            monkeypatch.delenv(f"{prefix}{name}", raising=False)
