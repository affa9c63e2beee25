from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, overload

from dicontract._internal.type_checks import type_name
from dicontract._internal.validators import ArgumentsValidator
from dicontract.exceptions import (
    DIContractResolutionError,
    DIContractUnboundResolverError,
)

if TYPE_CHECKING:
    from dicontract.configuration import ComponentResolverConfiguration

T = TypeVar("T")
ResolverT = TypeVar("ResolverT", bound="ComponentResolverProtocol")

logger = logging.getLogger(__name__)


class ComponentResolverProtocol(Protocol):
    """Protocol for the resolution side of a dependency injection engine.

    The protocol class doubles as the dependency type under which a resolver
    registers itself, see ``registry_bootstrap`` and ``wire_resolver``.

    Engines raise ``DIContractResolutionError`` from ``resolve`` when nothing
    satisfies the dependency type, and return an empty sequence from
    ``resolve_all`` in the same situation.
    """

    @overload
    def resolve(self, dependency_type: type[T]) -> T: ...

    @overload
    def resolve(self, dependency_type: Any) -> Any: ...

    def resolve(self, dependency_type: Any) -> Any:
        """Resolve the given dependency type and return its instance."""

    def resolve_all(self, dependency_type: Any) -> Sequence[Any]:
        """Resolve every implementation registered for the dependency type."""


@dataclass(frozen=True, slots=True)
class _Unbound:
    """No concrete resolver has been assigned yet."""


@dataclass(frozen=True, slots=True)
class _Bound:
    """Calls are forwarded to ``resolver``."""

    resolver: ComponentResolverProtocol


_UNBOUND = _Unbound()


class ComponentResolver:
    """Resolver placeholder that forwards to a concrete resolver assigned later.

    Register an instance of this class before the backing engine exists, so
    anything that captures it during registration keeps a valid reference.
    Once the engine is built, ``wire_resolver(engine)`` (or ``assign``) binds
    it and every later call is forwarded.

    Until then ``resolve`` and ``resolve_all`` raise
    ``DIContractUnboundResolverError``.
    """

    def __init__(self) -> None:
        self._binding: _Unbound | _Bound = _UNBOUND
        self._validator = ArgumentsValidator()

    @property
    def is_bound(self) -> bool:
        """Whether a concrete resolver has been assigned."""
        return isinstance(self._binding, _Bound)

    def assign(self, resolver: ComponentResolverProtocol) -> None:
        """Forward all later calls to ``resolver``, replacing any previous assignment.

        Args:
            resolver: The concrete resolver.

        """
        self._validator.validate_not_none(resolver, operation="assign", parameter="resolver")
        self._binding = _Bound(resolver)
        logger.debug("ComponentResolver bound to %s", type_name(type(resolver)))

    @overload
    def resolve(self, dependency_type: type[T]) -> T: ...

    @overload
    def resolve(self, dependency_type: Any) -> Any: ...

    def resolve(self, dependency_type: Any) -> Any:
        """Resolve the dependency type via the assigned resolver."""
        self._validator.validate_not_none(dependency_type, operation="resolve", parameter="dependency_type")
        return self._bound_resolver(dependency_type).resolve(dependency_type)

    def resolve_all(self, dependency_type: Any) -> Sequence[Any]:
        """Resolve every implementation of the dependency type via the assigned resolver."""
        self._validator.validate_not_none(
            dependency_type,
            operation="resolve_all",
            parameter="dependency_type",
        )
        return self._bound_resolver(dependency_type).resolve_all(dependency_type)

    def _bound_resolver(self, dependency_type: Any) -> ComponentResolverProtocol:
        binding = self._binding
        if isinstance(binding, _Bound):
            return binding.resolver

        msg = (
            f"Cannot resolve '{type_name(dependency_type)}': ComponentResolver has not been "
            "assigned a concrete resolver. Call wire_resolver(engine) after building the engine."
        )
        raise DIContractUnboundResolverError(msg, dependency_type=dependency_type)


class DelegatedComponentResolver:
    """Resolver that forwards every call to the callables it was created with.

    Useful to expose an engine with a different API, e.g.::

        resolver = DelegatedComponentResolver(engine.get, engine.get_all)

    """

    def __init__(
        self,
        resolve: Callable[[Any], Any],
        resolve_all: Callable[[Any], Sequence[Any]],
    ) -> None:
        self._validator = ArgumentsValidator()
        self._validator.validate_callable(resolve, operation="DelegatedComponentResolver", parameter="resolve")
        self._validator.validate_callable(
            resolve_all,
            operation="DelegatedComponentResolver",
            parameter="resolve_all",
        )
        self._resolve = resolve
        self._resolve_all = resolve_all

    def resolve(self, dependency_type: Any) -> Any:
        self._validator.validate_not_none(dependency_type, operation="resolve", parameter="dependency_type")
        return self._resolve(dependency_type)

    def resolve_all(self, dependency_type: Any) -> Sequence[Any]:
        self._validator.validate_not_none(
            dependency_type,
            operation="resolve_all",
            parameter="dependency_type",
        )
        return self._resolve_all(dependency_type)


@overload
def attempt_resolve(resolver: ComponentResolverProtocol, dependency_type: type[T]) -> T | None: ...


@overload
def attempt_resolve(resolver: ComponentResolverProtocol, dependency_type: Any) -> Any | None: ...


def attempt_resolve(resolver: ComponentResolverProtocol, dependency_type: Any) -> Any | None:
    """Resolve the dependency type, or return ``None`` when it cannot be resolved.

    Only ``DIContractResolutionError`` (including the unbound resolver case) is
    converted; any other error raised by the engine propagates.

    Args:
        resolver: The resolver to use.
        dependency_type: The dependency type to resolve.

    """
    try:
        return resolver.resolve(dependency_type)
    except DIContractResolutionError:
        logger.debug("attempt_resolve: %s could not be resolved", type_name(dependency_type))
        return None


def resolve_many(resolver: ComponentResolverProtocol, dependency_types: Iterable[Any]) -> list[Any]:
    """Resolve each dependency type in order and return the instances."""
    return [resolver.resolve(dependency_type) for dependency_type in dependency_types]


def wire_resolver(resolver: ResolverT) -> ResolverT:
    """Bind ``resolver`` into the ``ComponentResolver`` registered for the resolver protocol.

    The registry bootstrap registers a ``ComponentResolver`` placeholder under
    ``ComponentResolverProtocol``. Call this once the engine behind
    ``resolver`` is ready: the placeholder is resolved through the engine and
    assigned ``resolver``, so code holding the placeholder reaches the engine.

    When resolving the protocol fails with any error, for example because the
    engine is still initialising or raises its own not-found error, or when it
    resolves to something other than a placeholder, nothing is changed.

    Args:
        resolver: The concrete resolver backed by the engine.

    Returns:
        ``resolver``, for chaining.

    """
    try:
        registered = resolver.resolve(ComponentResolverProtocol)
    except Exception as error:  # noqa: BLE001
        logger.debug("Resolver wiring skipped: %r", error)
        return resolver

    if isinstance(registered, ComponentResolver) and registered is not resolver:
        registered.assign(resolver)
        logger.info("Wired ComponentResolver to %s", type_name(type(resolver)))

    return resolver


def resolve_configuration(
    resolver: ResolverT,
    configuration: ComponentResolverConfiguration | None = None,
) -> ResolverT:
    """Resolve every configured dependency type, then wire the resolver.

    Eager resolution surfaces missing registrations at start-up instead of on
    first use, and creates singletons that must exist before requests arrive.

    Args:
        resolver: The concrete resolver backed by the engine.
        configuration: Dependency types to resolve. Defaults to
            ``ComponentResolverSettings()`` read from the environment.

    Returns:
        ``resolver``, for chaining.

    """
    if configuration is None:
        from dicontract.configuration import ComponentResolverSettings

        configuration = ComponentResolverSettings()

    for component in configuration.components:
        resolver.resolve(component.dependency_type)

    logger.debug("Eagerly resolved %d configured components", len(configuration.components))
    return wire_resolver(resolver)


__all__ = [
    "ComponentResolver",
    "ComponentResolverProtocol",
    "DelegatedComponentResolver",
    "attempt_resolve",
    "resolve_configuration",
    "resolve_many",
    "wire_resolver",
]
