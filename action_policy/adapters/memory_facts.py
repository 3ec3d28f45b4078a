"""
Memory Node Adapters - In-memory facts and classes (testing and embedding).
"""

from typing import Any, Dict, Iterable, List, Optional

from action_policy.ports.classification_port import ClassificationPort
from action_policy.ports.fact_port import FactPort


class MemoryFactAdapter(FactPort):
    """
    Facts held in a dict.

    Values are stringified on read, matching how facts compare against
    key=value tokens in policy files.
    """

    def __init__(self, facts: Optional[Dict[str, Any]] = None):
        self._facts: Dict[str, Any] = dict(facts or {})

    def get_fact(self, key: str) -> Optional[str]:
        value = self._facts.get(key)
        if value is None:
            return None
        return fact_string(value)

    def set_fact(self, key: str, value: Any) -> None:
        self._facts[key] = value


class MemoryClassificationAdapter(ClassificationPort):
    """Classes held in a set."""

    def __init__(self, classes: Optional[Iterable[str]] = None):
        self._classes = set(classes or ())

    def has_class(self, name: str) -> bool:
        return name in self._classes

    def classes(self) -> List[str]:
        return sorted(self._classes)

    def add_class(self, name: str) -> None:
        self._classes.add(name)


def fact_string(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)
