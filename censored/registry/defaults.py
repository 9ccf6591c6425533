# censored/registry/defaults.py
from __future__ import annotations

from functools import lru_cache

from censored.registry.registry import EngineRegistry, RegistryBuilder


def build_registry() -> EngineRegistry:
    """
    Fresh registry holding every built-in family.
    """
    from censored.engines import FAMILY_REGISTRATIONS

    builder = RegistryBuilder()
    for register in FAMILY_REGISTRATIONS:
        register(builder)
    return builder.build()


@lru_cache(maxsize=1)
def default_registry() -> EngineRegistry:
    """
    Process-wide registry, built on first use.
    """
    return build_registry()
