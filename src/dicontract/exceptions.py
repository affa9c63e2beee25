from __future__ import annotations

from typing import Any


class DIContractError(Exception):
    """Represent a base class for all dicontract-specific failures.

    Catch this type when you want to handle any dicontract error path without
    matching each concrete exception class individually.
    """


class DIContractInvalidRegistrationError(DIContractError):
    """Signal an invalid argument passed to a registration or resolution API.

    Raised by ``ComponentRegistry`` register methods, the convention scanner,
    the resolvers and the bootstrap orchestrator when a required argument such
    as a dependency type, implementation type, instance or callback is ``None``.
    """


class DIContractDuplicateRegistrationError(DIContractError):
    """Signal a second registration for an already tracked dependency type.

    Raised by ``register``, ``register_open``, ``register_collection`` and
    ``register_instance`` on ``ComponentRegistry``. A dependency type can be
    registered exactly once for the lifetime of a registry.

    Typical fixes include using the ``attempt_register*`` helpers when a
    registration is optional, or removing the overlapping registration from a
    bootstrap hook or the declarative configuration.
    """

    def __init__(self, msg: str, *, dependency_type: Any) -> None:
        super().__init__(msg)
        self.dependency_type = dependency_type


class DIContractResolutionError(DIContractError):
    """Signal that a required dependency type cannot be resolved.

    Engines raise this from ``resolve`` when nothing satisfies the requested
    type. ``resolve_all`` never raises it; an absent collection is an empty
    sequence.

    Use ``attempt_resolve`` to turn this error into ``None``.
    """

    def __init__(self, msg: str, *, dependency_type: Any = None) -> None:
        super().__init__(msg)
        self.dependency_type = dependency_type


class DIContractUnboundResolverError(DIContractResolutionError):
    """Signal use of a ``ComponentResolver`` before a concrete resolver is assigned.

    Typical fix is calling ``wire_resolver(engine)`` (or
    ``resolver.assign(engine)``) once the backing engine has been built.
    """


class DIContractMissingConstructorError(DIContractError):
    """Signal a bootstrap hook that cannot be created without arguments.

    Raised by ``registry_bootstrap`` before any hook of the offending type runs.
    The offending class is available as ``hook_type``.
    """

    def __init__(self, msg: str, *, hook_type: type[Any]) -> None:
        super().__init__(msg)
        self.hook_type = hook_type
