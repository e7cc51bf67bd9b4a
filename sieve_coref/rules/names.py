"""Pluggable name matching for the alias sieve."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..data.mention import Mention


@runtime_checkable
class NameMatcher(Protocol):
    """Decides whether two proper mentions name the same entity."""

    def is_name_match(self, mention: Mention, antecedent: Mention) -> bool:
        ...
