"""Type catalogs consumed by the convention scanner.

The scanner never looks for types on its own. It walks an ordered sequence of
``TypeDescriptor`` values, and this module builds such sequences from classes
or modules. Any other source, for example a plugin entry point listing, only
has to produce descriptors in a stable order.
"""

from __future__ import annotations

import importlib
import inspect
from collections.abc import Iterable
from dataclasses import dataclass
from types import ModuleType
from typing import Any

from dicontract._internal.type_checks import (
    declared_contracts,
    is_abstract_class,
    is_runtime_class,
)
from dicontract.exceptions import DIContractInvalidRegistrationError


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """Describe one candidate implementation type.

    Attributes:
        implementation_type: The class itself; used as the implementation identity.
        name: The simple class name the naming conventions match against.
        contracts: Declared dependency types, nearest base first.
        is_abstract: Whether the class cannot be registered as an implementation.

    """

    implementation_type: type[Any]
    name: str
    contracts: tuple[Any, ...]
    is_abstract: bool

    @classmethod
    def from_class(cls, candidate: type[Any]) -> TypeDescriptor:
        """Build a descriptor from a runtime class.

        Args:
            candidate: The class to describe.

        Raises:
            DIContractInvalidRegistrationError: If ``candidate`` is not a class.

        """
        if not is_runtime_class(candidate):
            msg = f"Catalog entries must be classes, got {candidate!r}."
            raise DIContractInvalidRegistrationError(msg)

        return cls(
            implementation_type=candidate,
            name=candidate.__name__,
            contracts=declared_contracts(candidate),
            is_abstract=is_abstract_class(candidate),
        )


def class_catalog(*classes: type[Any]) -> tuple[TypeDescriptor, ...]:
    """Return descriptors for the given classes, in argument order."""
    return tuple(TypeDescriptor.from_class(candidate) for candidate in classes)


def module_catalog(*modules: ModuleType | str) -> tuple[TypeDescriptor, ...]:
    """Return descriptors for the classes defined in each module.

    Classes are listed in definition order and modules in argument order.
    Classes imported into a module from elsewhere are left out, so scanning a
    module never registers another module's types.

    Args:
        modules: Module objects or dotted module names to import.

    """
    return tuple(
        descriptor
        for module in modules
        for descriptor in _module_descriptors(_load_module(module))
    )


def _load_module(module: ModuleType | str) -> ModuleType:
    if isinstance(module, ModuleType):
        return module
    return importlib.import_module(module)


def _module_descriptors(module: ModuleType) -> Iterable[TypeDescriptor]:
    for member in vars(module).values():
        if inspect.isclass(member) and member.__module__ == module.__name__:
            yield TypeDescriptor.from_class(member)


__all__ = ["TypeDescriptor", "class_catalog", "module_catalog"]
