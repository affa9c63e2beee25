from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

from dicontract._internal.type_checks import type_name
from dicontract._internal.validators import ArgumentsValidator
from dicontract.exceptions import DIContractDuplicateRegistrationError
from dicontract.lifestyle import Lifestyle

if TYPE_CHECKING:
    from typing_extensions import Self

R = TypeVar("R", bound="ComponentRegistryProtocol")

logger = logging.getLogger(__name__)


class ComponentRegistryProtocol(Protocol):
    """Protocol for the registration side of a dependency injection engine."""

    def is_registered(self, dependency_type: Any) -> bool:
        """Return whether the dependency type has been registered."""

    def register(
        self,
        dependency_type: Any,
        implementation_type: type[Any] | None = None,
        lifestyle: Lifestyle = Lifestyle.SINGLETON,
    ) -> Self:
        """Register an implementation type against a dependency type."""

    def register_open(
        self,
        dependency_type: Any,
        implementation_type: type[Any],
        lifestyle: Lifestyle = Lifestyle.SINGLETON,
    ) -> Self:
        """Register an open generic implementation against an open generic dependency type."""

    def register_collection(
        self,
        dependency_type: Any,
        implementation_types: Iterable[type[Any]],
        lifestyle: Lifestyle = Lifestyle.SINGLETON,
    ) -> Self:
        """Register several implementation types resolved together as one collection."""

    def register_instance(self, dependency_type: Any, instance: Any) -> Self:
        """Register an existing instance against a dependency type."""


class ComponentRegistry:
    """Track registered dependency types and enforce one registration per type.

    This class does not build anything. Concrete engines subclass it, call the
    base method first to claim the dependency type, then record the
    registration in their own structures::

        class MyEngineRegistry(ComponentRegistry):
            def register(self, dependency_type, implementation_type=None, lifestyle=Lifestyle.SINGLETON):
                super().register(dependency_type, implementation_type, lifestyle)
                self._engine.bind(dependency_type, implementation_type or dependency_type, lifestyle)
                return self

    Every register path applies the same check, so a dependency type claimed
    by ``register_instance`` cannot be claimed again by ``register_collection``
    and so on. There is no way to unregister.
    """

    def __init__(self) -> None:
        self._registered_types: dict[Any, None] = {}
        self._validator = ArgumentsValidator()

    @property
    def registered_types(self) -> tuple[Any, ...]:
        """Dependency types claimed so far, in registration order."""
        return tuple(self._registered_types)

    def is_registered(self, dependency_type: Any) -> bool:
        """Return whether the dependency type has been registered.

        Args:
            dependency_type: The dependency type being checked.

        """
        self._validator.validate_not_none(
            dependency_type,
            operation="is_registered",
            parameter="dependency_type",
        )
        return dependency_type in self._registered_types

    def register(
        self,
        dependency_type: Any,
        implementation_type: type[Any] | None = None,
        lifestyle: Lifestyle = Lifestyle.SINGLETON,
    ) -> Self:
        """Register an implementation type against a dependency type.

        Args:
            dependency_type: The dependency type being registered.
            implementation_type: The type that should be resolved. Defaults to
                ``dependency_type`` itself.
            lifestyle: Lifetime policy forwarded to the engine.

        Returns:
            The registry, for chaining.

        Raises:
            DIContractDuplicateRegistrationError: If ``dependency_type`` is
                already registered.

        """
        return self._track(dependency_type, operation="register")

    def register_open(
        self,
        dependency_type: Any,
        implementation_type: type[Any],
        lifestyle: Lifestyle = Lifestyle.SINGLETON,
    ) -> Self:
        """Register an open generic implementation against an open generic dependency type.

        Args:
            dependency_type: The open generic dependency type, e.g. ``Repository``
                for ``Repository[T]``.
            implementation_type: The open generic implementation type.
            lifestyle: Lifetime policy forwarded to the engine.

        """
        self._validator.validate_not_none(
            implementation_type,
            operation="register_open",
            parameter="implementation_type",
        )
        return self._track(dependency_type, operation="register_open")

    def register_collection(
        self,
        dependency_type: Any,
        implementation_types: Iterable[type[Any]],
        lifestyle: Lifestyle = Lifestyle.SINGLETON,
    ) -> Self:
        """Register several implementation types resolved together as one collection.

        Args:
            dependency_type: The dependency type shared by the implementations.
            implementation_types: Implementation types in resolution order.
            lifestyle: Lifetime policy forwarded to the engine for every item.

        """
        self._validator.validate_not_none(
            implementation_types,
            operation="register_collection",
            parameter="implementation_types",
        )
        return self._track(dependency_type, operation="register_collection")

    def register_instance(self, dependency_type: Any, instance: Any) -> Self:
        """Register an existing instance against a dependency type.

        Args:
            dependency_type: The dependency type being registered.
            instance: The instance returned for every resolution.

        """
        self._validator.validate_not_none(
            instance,
            operation="register_instance",
            parameter="instance",
        )
        return self._track(dependency_type, operation="register_instance")

    def _track(self, dependency_type: Any, *, operation: str) -> Self:
        self._validator.validate_not_none(
            dependency_type,
            operation=operation,
            parameter="dependency_type",
        )
        if dependency_type in self._registered_types:
            msg = f"Dependency type '{type_name(dependency_type)}' has already been registered."
            raise DIContractDuplicateRegistrationError(msg, dependency_type=dependency_type)

        self._registered_types[dependency_type] = None
        logger.debug("%s: claimed dependency type %s", operation, type_name(dependency_type))
        return self


def attempt_register(
    registry: R,
    dependency_type: Any,
    implementation_type: type[Any] | None = None,
    lifestyle: Lifestyle = Lifestyle.SINGLETON,
) -> R:
    """Register ``implementation_type`` unless ``dependency_type`` is already registered.

    The check and the registration are separate calls on ``registry``; this is
    a convenience for single-threaded start-up code, not an atomic operation.

    Args:
        registry: The registry to register against.
        dependency_type: The dependency type being registered.
        implementation_type: The type that should be resolved. Defaults to
            ``dependency_type`` itself.
        lifestyle: Lifetime policy forwarded to the engine.

    Returns:
        The registry, unchanged when the dependency type was already registered.

    """
    if registry.is_registered(dependency_type):
        return registry

    registry.register(dependency_type, implementation_type, lifestyle)
    return registry


def attempt_register_open(
    registry: R,
    dependency_type: Any,
    implementation_type: type[Any],
    lifestyle: Lifestyle = Lifestyle.SINGLETON,
) -> R:
    """Register an open generic unless ``dependency_type`` is already registered."""
    if registry.is_registered(dependency_type):
        return registry

    registry.register_open(dependency_type, implementation_type, lifestyle)
    return registry


def attempt_register_collection(
    registry: R,
    dependency_type: Any,
    implementation_types: Iterable[type[Any]],
    lifestyle: Lifestyle = Lifestyle.SINGLETON,
) -> R:
    """Register a collection unless ``dependency_type`` is already registered."""
    if registry.is_registered(dependency_type):
        return registry

    registry.register_collection(dependency_type, implementation_types, lifestyle)
    return registry


def attempt_register_instance(registry: R, dependency_type: Any, instance: Any) -> R:
    """Register an instance unless ``dependency_type`` is already registered."""
    if registry.is_registered(dependency_type):
        return registry

    registry.register_instance(dependency_type, instance)
    return registry


__all__ = [
    "ComponentRegistry",
    "ComponentRegistryProtocol",
    "attempt_register",
    "attempt_register_collection",
    "attempt_register_instance",
    "attempt_register_open",
]
