from __future__ import annotations

import abc
import inspect
import types
from typing import Any, Generic, Protocol, TypeGuard

_CONTRACT_PLUMBING: tuple[type[Any], ...] = (object, abc.ABC, Protocol, Generic)  # type: ignore[arg-type]


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_protocol_class(candidate: object) -> bool:
    """Return true when candidate is a ``typing.Protocol`` definition."""
    return is_runtime_class(candidate) and bool(getattr(candidate, "_is_protocol", False))


def is_abstract_class(candidate: type[Any]) -> bool:
    """Return true when candidate is an interface rather than a concrete implementation.

    Protocols, ABCs with abstract members and classes that list ``ABC`` as a
    direct base are interfaces. A class deriving only from interfaces is an
    interface too when it follows the ``I`` + name convention and adds no
    public members, e.g. ``IOrderRepository(IRepository)``.

    Args:
        candidate: Class being checked.

    """
    if is_protocol_class(candidate) or inspect.isabstract(candidate):
        return True
    if not isinstance(candidate, abc.ABCMeta):
        return False
    if abc.ABC in candidate.__bases__:
        return True

    bases = [base for base in candidate.__bases__ if base not in _CONTRACT_PLUMBING]
    return (
        bool(bases)
        and _follows_interface_naming(candidate.__name__)
        and all(name.startswith("_") for name in vars(candidate))
        and all(is_abstract_class(base) for base in bases)
    )


def _follows_interface_naming(name: str) -> bool:
    return len(name) > 1 and name[0] == "I" and name[1].isupper()


def declared_contracts(candidate: type[Any]) -> tuple[type[Any], ...]:
    """Return the interfaces a class implements, nearest first.

    Only bases accepted by ``is_abstract_class`` count. Concrete base classes
    and typing plumbing (``object``, ``ABC``, ``Protocol``, ``Generic``) are
    excluded, so a subclass of an implementation is never registered against
    that implementation.

    Args:
        candidate: Class whose bases are inspected.

    """
    return tuple(
        base
        for base in candidate.__mro__[1:]
        if base not in _CONTRACT_PLUMBING and is_abstract_class(base)
    )


def has_zero_argument_constructor(candidate: type[Any]) -> bool:
    """Return true when ``candidate()`` can be called without arguments.

    Args:
        candidate: Class whose constructor signature is inspected.

    """
    try:
        signature = inspect.signature(candidate)
    except (TypeError, ValueError):
        return candidate.__init__ is object.__init__  # type: ignore[misc]

    return all(
        parameter.default is not inspect.Parameter.empty
        or parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        for parameter in signature.parameters.values()
    )


def type_name(dependency_type: Any) -> str:
    """Return a readable, fully qualified name for messages and log records."""
    if is_runtime_class(dependency_type):
        return f"{dependency_type.__module__}.{dependency_type.__qualname__}"
    return repr(dependency_type)


__all__ = [
    "declared_contracts",
    "has_zero_argument_constructor",
    "is_abstract_class",
    "is_protocol_class",
    "is_runtime_class",
    "type_name",
]
