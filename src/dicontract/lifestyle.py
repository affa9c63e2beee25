from __future__ import annotations

from enum import Enum


class Lifestyle(Enum):
    """Select the lifetime policy requested for a registration.

    dicontract never acts on the value. It is forwarded verbatim to the backing
    engine, which owns instance caching.
    """

    SINGLETON = "singleton"
    """One instance is shared for the lifetime of the engine. The default."""

    TRANSIENT = "transient"
    """A new instance is created every time the dependency is resolved."""
