"""
Fact Port - Interface for node attributes.

Implementations:
- MemoryFactAdapter: facts held in a dict
- YAMLFactAdapter: YAML facts file
"""

from abc import ABC, abstractmethod
from typing import Optional


class FactPort(ABC):
    """Port: Look up key/value facts describing the managed node."""

    @abstractmethod
    def get_fact(self, key: str) -> Optional[str]:
        """
        Get a fact value.

        Args:
            key: Fact name

        Returns:
            Fact value as a string, or None if the node has no such fact
        """
        pass
