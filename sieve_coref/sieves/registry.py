"""Rule-sieve variant registration and lookup."""

from __future__ import annotations

from typing import Any

from ..errors import ConfigurationError

# Global registry: sieve name -> rule flag class
_VARIANT_REGISTRY: dict[str, type] = {}

# Suffix marking a statistical sieve backed by a pairwise classifier
STATISTICAL_SUFFIX = "-rf"


def sieve_variant(name: str, description: str = "") -> Any:
    """
    Decorator for rule-sieve variant registration.

    Usage:
        @sieve_variant("ExactStringMatch")
        @dataclass(frozen=True)
        class ExactStringMatch(RuleFlags):
            use_exact_string_match: bool = True
    """

    def decorator(cls: type) -> type:
        if name in _VARIANT_REGISTRY:
            raise ValueError(f"Sieve variant already registered: {name}")
        cls._variant_name = name
        cls._description = description or (cls.__doc__ or "").strip()
        _VARIANT_REGISTRY[name] = cls
        return cls

    return decorator


def get_variant(name: str) -> type:
    """Flag class registered under ``name``."""
    try:
        return _VARIANT_REGISTRY[name]
    except KeyError:
        raise ConfigurationError(f"Unknown sieve: {name}") from None


def is_rule_sieve(name: str) -> bool:
    return name in _VARIANT_REGISTRY


def is_statistical_sieve(name: str) -> bool:
    return name.lower().endswith(STATISTICAL_SUFFIX)


def list_registered_variants() -> list[str]:
    """List all rule-sieve names in registration order."""
    return list(_VARIANT_REGISTRY.keys())
