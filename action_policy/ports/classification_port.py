"""
Classification Port - Interface for node class membership.

Implementations:
- MemoryClassificationAdapter: classes held in a set
- ClassesFileAdapter: one class per line (e.g. Puppet classes.txt)
"""

from abc import ABC, abstractmethod
from typing import List


class ClassificationPort(ABC):
    """Port: Answer whether the managed node carries a class."""

    @abstractmethod
    def has_class(self, name: str) -> bool:
        """
        Check class membership.

        Args:
            name: Class name

        Returns:
            True if the node belongs to the class
        """
        pass

    @abstractmethod
    def classes(self) -> List[str]:
        """
        List all classes of the node.

        Used to match /regex/ class tokens.
        """
        pass
