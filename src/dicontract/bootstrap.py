from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from dicontract._internal.type_checks import has_zero_argument_constructor, type_name
from dicontract._internal.validators import ArgumentsValidator
from dicontract.catalog import TypeDescriptor
from dicontract.configuration import (
    BootstrapConfiguration,
    BootstrapSettings,
    ComponentRegistryConfiguration,
    ComponentRegistrySettings,
)
from dicontract.exceptions import DIContractMissingConstructorError
from dicontract.registry import ComponentRegistryProtocol, attempt_register_instance
from dicontract.resolvers import ComponentResolver, ComponentResolverProtocol

logger = logging.getLogger(__name__)

_validator = ArgumentsValidator()


class ComponentRegistryBootstrap(ABC):
    """Base class for self-registering units discovered by ``registry_bootstrap``.

    Subclasses must be constructible without arguments. Each subclass runs at
    most once per bootstrap, however many scanned units list it.
    """

    @abstractmethod
    def register(self, registry: ComponentRegistryProtocol) -> None:
        """Register this unit's dependencies against ``registry``."""


def registry_bootstrap(
    registry: ComponentRegistryProtocol,
    registry_configuration: ComponentRegistryConfiguration | None = None,
    bootstrap_configuration: BootstrapConfiguration | None = None,
) -> tuple[type[ComponentRegistryBootstrap], ...]:
    """Run bootstrap hooks, apply declarative registrations and register a resolver placeholder.

    Steps, in order:

    1. Every concrete ``ComponentRegistryBootstrap`` subclass found in the
       bootstrap units is created and its ``register`` called, once per class.
    2. Each configured component is registered.
    3. Each configured collection is registered.
    4. A ``ComponentResolver`` is registered under ``ComponentResolverProtocol``
       unless something already registered that dependency type.

    A failure stops the bootstrap where it happened; registrations made before
    it are kept.

    Args:
        registry: The registry to register against.
        registry_configuration: Declarative registrations. Defaults to
            ``ComponentRegistrySettings()`` read from the environment.
        bootstrap_configuration: Units scanned for hooks. Defaults to
            ``BootstrapSettings()`` read from the environment.

    Returns:
        The hook classes that ran, in the order they ran.

    Raises:
        DIContractMissingConstructorError: If a hook cannot be created without
            arguments.
        DIContractDuplicateRegistrationError: If two registrations claim the
            same dependency type.

    """
    _validator.validate_not_none(registry, operation="registry_bootstrap", parameter="registry")
    if registry_configuration is None:
        registry_configuration = ComponentRegistrySettings()
    if bootstrap_configuration is None:
        bootstrap_configuration = BootstrapSettings()

    completed = _run_bootstrap_hooks(registry, bootstrap_configuration.units())

    for component in registry_configuration.components:
        registry.register(component.dependency_type, component.implementation_type, component.lifestyle)

    for collection in registry_configuration.collections:
        registry.register_collection(
            collection.dependency_type,
            tuple(collection.implementation_types),
            collection.lifestyle,
        )

    attempt_register_instance(registry, ComponentResolverProtocol, ComponentResolver())

    logger.info(
        "Registry bootstrap completed: hooks=%d components=%d collections=%d",
        len(completed),
        len(registry_configuration.components),
        len(registry_configuration.collections),
    )
    return completed


def bootstrap_hook_types(
    units: Iterable[Iterable[TypeDescriptor]],
) -> tuple[type[ComponentRegistryBootstrap], ...]:
    """Return the distinct hook classes listed in ``units``, in discovery order."""
    discovered: dict[type[ComponentRegistryBootstrap], None] = {}
    for unit in units:
        for descriptor in unit:
            if _is_bootstrap_hook(descriptor):
                discovered.setdefault(descriptor.implementation_type, None)
    return tuple(discovered)


def _run_bootstrap_hooks(
    registry: ComponentRegistryProtocol,
    units: Iterable[Iterable[TypeDescriptor]],
) -> tuple[type[ComponentRegistryBootstrap], ...]:
    hook_types = bootstrap_hook_types(units)
    for hook_type in hook_types:
        if not has_zero_argument_constructor(hook_type):
            msg = (
                f"Bootstrap hook '{type_name(hook_type)}' must have a constructor that takes "
                "no arguments."
            )
            raise DIContractMissingConstructorError(msg, hook_type=hook_type)

        logger.debug("Running bootstrap hook %s", type_name(hook_type))
        hook_type().register(registry)

    return hook_types


def _is_bootstrap_hook(descriptor: TypeDescriptor) -> bool:
    candidate: Any = descriptor.implementation_type
    return (
        not descriptor.is_abstract
        and candidate is not ComponentRegistryBootstrap
        and issubclass(candidate, ComponentRegistryBootstrap)
    )


__all__ = [
    "ComponentRegistryBootstrap",
    "bootstrap_hook_types",
    "registry_bootstrap",
]
