#!/usr/bin/env python3
"""
Source data model.

A stream address paired with the final destination it redirects to.
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Source:
    """
    Immutable (original, resolved) pair.
    
    ``original`` is the identity key and is never normalized. ``resolved``
    stays empty until a resolution succeeds.
    """
    original: str
    resolved: str = ""
    
    @property
    def is_resolved(self) -> bool:
        return bool(self.resolved)
    
    def with_resolved(self, resolved: str) -> "Source":
        """Return a copy carrying the given resolved address."""
        return replace(self, resolved=resolved)
