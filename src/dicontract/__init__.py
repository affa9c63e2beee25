from dicontract.bootstrap import ComponentRegistryBootstrap, registry_bootstrap
from dicontract.catalog import TypeDescriptor, class_catalog, module_catalog
from dicontract.conventions import (
    DEFAULT_SUFFIXES,
    register_all,
    register_by_convention,
    register_suffixed,
)
from dicontract.exceptions import (
    DIContractDuplicateRegistrationError,
    DIContractError,
    DIContractInvalidRegistrationError,
    DIContractMissingConstructorError,
    DIContractResolutionError,
    DIContractUnboundResolverError,
)
from dicontract.lifestyle import Lifestyle
from dicontract.registry import (
    ComponentRegistry,
    ComponentRegistryProtocol,
    attempt_register,
    attempt_register_collection,
    attempt_register_instance,
    attempt_register_open,
)
from dicontract.resolvers import (
    ComponentResolver,
    ComponentResolverProtocol,
    DelegatedComponentResolver,
    attempt_resolve,
    resolve_configuration,
    resolve_many,
    wire_resolver,
)

__all__ = [
    "DEFAULT_SUFFIXES",
    "ComponentRegistry",
    "ComponentRegistryBootstrap",
    "ComponentRegistryProtocol",
    "ComponentResolver",
    "ComponentResolverProtocol",
    "DIContractDuplicateRegistrationError",
    "DIContractError",
    "DIContractInvalidRegistrationError",
    "DIContractMissingConstructorError",
    "DIContractResolutionError",
    "DIContractUnboundResolverError",
    "DelegatedComponentResolver",
    "Lifestyle",
    "TypeDescriptor",
    "attempt_register",
    "attempt_register_collection",
    "attempt_register_instance",
    "attempt_register_open",
    "attempt_resolve",
    "class_catalog",
    "module_catalog",
    "register_all",
    "register_by_convention",
    "register_suffixed",
    "registry_bootstrap",
    "resolve_configuration",
    "resolve_many",
    "wire_resolver",
]
