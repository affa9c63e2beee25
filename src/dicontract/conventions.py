from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from dicontract._internal.type_checks import type_name
from dicontract._internal.validators import ArgumentsValidator
from dicontract.catalog import TypeDescriptor
from dicontract.lifestyle import Lifestyle
from dicontract.registry import ComponentRegistryProtocol

logger = logging.getLogger(__name__)

DEFAULT_SUFFIXES: tuple[str, ...] = (
    "Query",
    "Repository",
    "Provider",
    "Service",
    "Task",
    "Factory",
    "Mapper",
    "Cache",
)
"""Type name endings registered by ``register_suffixed`` unless other suffixes are given."""

ShouldRegister = Callable[[TypeDescriptor], bool]
GetDependencyType = Callable[[TypeDescriptor], Any]
GetLifestyle = Callable[[Any], Lifestyle]

_validator = ArgumentsValidator()


@dataclass(frozen=True, slots=True)
class ConventionRegistration:
    """A registration submitted by the convention scanner."""

    dependency_type: Any
    implementation_types: tuple[type[Any], ...]
    lifestyle: Lifestyle

    @property
    def is_collection(self) -> bool:
        """Whether the registration was submitted with ``register_collection``."""
        return len(self.implementation_types) > 1


@dataclass(frozen=True, slots=True)
class SuffixConventionPolicy:
    """Select catalog candidates whose class name ends with one of the suffixes."""

    suffixes: tuple[str, ...] = DEFAULT_SUFFIXES

    def should_register(self, descriptor: TypeDescriptor) -> bool:
        """Return true when the candidate name ends with a configured suffix.

        Args:
            descriptor: Candidate being considered.

        """
        return descriptor.name.endswith(self.suffixes)


def dependency_type_by_name(descriptor: TypeDescriptor) -> Any | None:
    """Pick the dependency type a candidate should be registered against.

    Prefers the declared contract named ``"I" + descriptor.name`` (so
    ``CustomerRepository`` maps to ``ICustomerRepository``) and otherwise falls
    back to the first declared contract.

    Args:
        descriptor: Candidate being considered.

    Returns:
        The chosen contract, or ``None`` when the candidate declares none.

    """
    if not descriptor.contracts:
        return None

    expected_name = f"I{descriptor.name}"
    for contract in descriptor.contracts:
        if getattr(contract, "__name__", None) == expected_name:
            return contract

    return descriptor.contracts[0]


def register_by_convention(
    registry: ComponentRegistryProtocol,
    catalog: Iterable[TypeDescriptor],
    should_register: ShouldRegister,
    get_dependency_type: GetDependencyType,
    get_lifestyle: GetLifestyle,
) -> list[ConventionRegistration]:
    """Register every qualifying catalog candidate against its dependency type.

    Candidates that are abstract, rejected by ``should_register`` or without a
    dependency type are skipped. The rest are grouped by dependency type in
    catalog order: a group with one implementation becomes a ``register``
    call, a larger group becomes a single ``register_collection`` call.
    Groups are submitted in the order their dependency type was first seen.

    Args:
        registry: The registry to register against.
        catalog: Candidate descriptors, in a stable order.
        should_register: Returns ``True`` to consider a candidate.
        get_dependency_type: Returns the dependency type for a candidate, or
            ``None`` to skip it.
        get_lifestyle: Returns the lifestyle for the type being registered:
            the implementation type for a single registration and the
            dependency type for a collection.

    Returns:
        The registrations submitted, in submission order.

    Raises:
        DIContractDuplicateRegistrationError: If a group's dependency type is
            already registered. Groups submitted before the failure stay
            registered.

    """
    _validator.validate_not_none(registry, operation="register_by_convention", parameter="registry")
    _validator.validate_not_none(catalog, operation="register_by_convention", parameter="catalog")
    for parameter, callback in (
        ("should_register", should_register),
        ("get_dependency_type", get_dependency_type),
        ("get_lifestyle", get_lifestyle),
    ):
        _validator.validate_callable(callback, operation="register_by_convention", parameter=parameter)

    groups: dict[Any, list[type[Any]]] = {}
    for descriptor in catalog:
        if descriptor.is_abstract or not should_register(descriptor):
            continue

        dependency_type = get_dependency_type(descriptor)
        if dependency_type is None:
            continue

        groups.setdefault(dependency_type, []).append(descriptor.implementation_type)

    registrations: list[ConventionRegistration] = []
    for dependency_type, implementation_types in groups.items():
        registration = _submit(registry, dependency_type, tuple(implementation_types), get_lifestyle)
        registrations.append(registration)

    logger.debug(
        "Convention scan submitted %d registrations (%d collections)",
        len(registrations),
        sum(1 for registration in registrations if registration.is_collection),
    )
    return registrations


def register_suffixed(
    registry: ComponentRegistryProtocol,
    catalog: Iterable[TypeDescriptor],
    suffixes: Iterable[str] = DEFAULT_SUFFIXES,
    lifestyle: Lifestyle = Lifestyle.SINGLETON,
) -> list[ConventionRegistration]:
    """Register candidates whose class name ends with one of ``suffixes``.

    Each candidate is registered against the dependency type chosen by
    ``dependency_type_by_name``, e.g. ``CustomerRepository`` against
    ``ICustomerRepository``.

    Args:
        registry: The registry to register against.
        catalog: Candidate descriptors, in a stable order.
        suffixes: Class name endings that qualify a candidate.
        lifestyle: Lifestyle used for every registration.

    """
    _validator.validate_not_none(suffixes, operation="register_suffixed", parameter="suffixes")
    policy = SuffixConventionPolicy(tuple(suffixes))

    return register_by_convention(
        registry,
        catalog,
        policy.should_register,
        dependency_type_by_name,
        lambda _: lifestyle,
    )


def register_all(
    registry: ComponentRegistryProtocol,
    catalog: Iterable[TypeDescriptor],
    lifestyle: Lifestyle = Lifestyle.SINGLETON,
) -> list[ConventionRegistration]:
    """Register every candidate whose dependency type is not registered yet.

    Running this twice over the same catalog is safe: the second run finds
    every dependency type already registered and submits nothing.

    Args:
        registry: The registry to register against.
        catalog: Candidate descriptors, in a stable order.
        lifestyle: Lifestyle used for every registration.

    """

    def should_register(descriptor: TypeDescriptor) -> bool:
        dependency_type = dependency_type_by_name(descriptor)
        return dependency_type is not None and not registry.is_registered(dependency_type)

    return register_by_convention(
        registry,
        catalog,
        should_register,
        dependency_type_by_name,
        lambda _: lifestyle,
    )


def _submit(
    registry: ComponentRegistryProtocol,
    dependency_type: Any,
    implementation_types: tuple[type[Any], ...],
    get_lifestyle: GetLifestyle,
) -> ConventionRegistration:
    if len(implementation_types) == 1:
        implementation_type = implementation_types[0]
        lifestyle = get_lifestyle(implementation_type)
        registry.register(dependency_type, implementation_type, lifestyle)
        logger.debug(
            "Registered %s -> %s (%s)",
            type_name(dependency_type),
            type_name(implementation_type),
            lifestyle.value,
        )
    else:
        lifestyle = get_lifestyle(dependency_type)
        registry.register_collection(dependency_type, implementation_types, lifestyle)
        logger.debug(
            "Registered collection %s -> [%s] (%s)",
            type_name(dependency_type),
            ", ".join(type_name(implementation) for implementation in implementation_types),
            lifestyle.value,
        )

    return ConventionRegistration(dependency_type, implementation_types, lifestyle)


__all__ = [
    "DEFAULT_SUFFIXES",
    "ConventionRegistration",
    "SuffixConventionPolicy",
    "dependency_type_by_name",
    "register_all",
    "register_by_convention",
    "register_suffixed",
]
