"""Declarative registry, resolver and bootstrap configuration.

Settings are read from keyword arguments or the environment with
pydantic-settings. Type names are dotted import paths resolved by pydantic's
``ImportString``, so an unknown type fails with ``pydantic.ValidationError``
while the settings are loaded, before anything reaches a registry.

Example environment::

    DICONTRACT_REGISTRY_COMPONENTS='[{"dependency_type": "app.ports.ICustomerRepository",
                                     "implementation_type": "app.db.CustomerRepository",
                                     "lifestyle": "transient"}]'
    DICONTRACT_BOOTSTRAP_MODULES='["app.bootstrap"]'

"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Protocol

from pydantic import BaseModel, Field, ImportString, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dicontract.catalog import TypeDescriptor, module_catalog
from dicontract.lifestyle import Lifestyle


class _LifestyleEntry(BaseModel):
    lifestyle: Lifestyle = Lifestyle.SINGLETON

    @field_validator("lifestyle", mode="before")
    @classmethod
    def _normalize_lifestyle(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class ComponentEntry(_LifestyleEntry):
    """A single ``dependency type -> implementation type`` registration."""

    dependency_type: ImportString
    implementation_type: ImportString | None = None
    """Defaults to ``dependency_type`` when omitted."""

    @model_validator(mode="after")
    def _default_implementation_type(self) -> ComponentEntry:
        if self.implementation_type is None:
            self.implementation_type = self.dependency_type
        return self


class CollectionEntry(_LifestyleEntry):
    """Several implementation types registered as one collection."""

    dependency_type: ImportString
    implementation_types: list[ImportString] = Field(default_factory=list)


class ResolverEntry(BaseModel):
    """A dependency type resolved eagerly once the engine is ready."""

    dependency_type: ImportString


class ComponentRegistryConfiguration(Protocol):
    """Declarative registrations applied by ``registry_bootstrap``."""

    @property
    def components(self) -> Sequence[ComponentEntry]: ...

    @property
    def collections(self) -> Sequence[CollectionEntry]: ...


class ComponentResolverConfiguration(Protocol):
    """Dependency types resolved by ``resolve_configuration``."""

    @property
    def components(self) -> Sequence[ResolverEntry]: ...


class BootstrapConfiguration(Protocol):
    """Source of the catalogs scanned for bootstrap hooks."""

    def units(self) -> Iterable[Iterable[TypeDescriptor]]:
        """Return one catalog per code unit, in scan order."""


class ComponentRegistrySettings(BaseSettings):
    """Registry configuration read from ``DICONTRACT_REGISTRY_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="DICONTRACT_REGISTRY_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    components: list[ComponentEntry] = Field(default_factory=list)
    collections: list[CollectionEntry] = Field(default_factory=list)


class ComponentResolverSettings(BaseSettings):
    """Resolver configuration read from ``DICONTRACT_RESOLVER_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="DICONTRACT_RESOLVER_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    components: list[ResolverEntry] = Field(default_factory=list)


class BootstrapSettings(BaseSettings):
    """Bootstrap configuration read from ``DICONTRACT_BOOTSTRAP_*`` variables.

    ``modules`` lists the modules scanned for ``ComponentRegistryBootstrap``
    hooks, as dotted names or module objects.
    """

    model_config = SettingsConfigDict(
        env_prefix="DICONTRACT_BOOTSTRAP_",
        extra="ignore",
    )

    modules: list[ImportString] = Field(default_factory=list)

    def units(self) -> tuple[tuple[TypeDescriptor, ...], ...]:
        """Return the catalog of each configured module, in configuration order."""
        return tuple(module_catalog(module) for module in self.modules)


__all__ = [
    "BootstrapConfiguration",
    "BootstrapSettings",
    "CollectionEntry",
    "ComponentEntry",
    "ComponentRegistryConfiguration",
    "ComponentRegistrySettings",
    "ComponentResolverConfiguration",
    "ComponentResolverSettings",
    "ResolverEntry",
]
