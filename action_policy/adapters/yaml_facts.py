"""
YAML Fact Adapter - Facts read from a YAML file.

Nested mappings are flattened with dots, so

    os:
      family: RedHat

is available as the fact os.family. The file is read on every lookup.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from action_policy.adapters.memory_facts import fact_string
from action_policy.ports.fact_port import FactPort


class YAMLFactAdapter(FactPort):
    """
    YAML facts file.

    A missing or empty file means "no facts". A file that is not a
    mapping at the top level raises ValueError.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize YAML fact adapter.

        Args:
            path: Facts file, e.g. /etc/mcollective/facts.yaml
        """
        self._path = Path(path)

    def get_fact(self, key: str) -> Optional[str]:
        value = self.load().get(key)
        if value is None:
            return None
        return fact_string(value)

    def load(self) -> Dict[str, Any]:
        """Read and flatten the facts file."""
        if not self._path.is_file():
            return {}

        with self._path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if data is None:
            return {}

        if not isinstance(data, dict):
            raise ValueError(f"Facts file {self._path} does not contain a mapping")

        return _flatten(data)


def _flatten(data: Dict[Any, Any], prefix: str = "") -> Dict[str, Any]:
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{name}."))
        else:
            flat[name] = value
    return flat
