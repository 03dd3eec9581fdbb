"""
Abstract base classes defining contracts between modules.

Loaders turn stored rows into Match objects; everything downstream is a
pure function over list[Match].
"""

from abc import ABC, abstractmethod

from matchbook.core.schema import Match


class BaseLoader(ABC):
    """Contract: stored match rows → list[Match]."""

    @abstractmethod
    def load(self) -> list[Match]:
        """Load and return validated Match objects."""
        ...

    @abstractmethod
    def validate(self, matches: list[Match]) -> list[str]:
        """Return list of validation warnings (empty = clean)."""
        ...
