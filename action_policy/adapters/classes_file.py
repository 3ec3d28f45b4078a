"""
Classes File Adapter - Node classes from a plain text file.

One class per line, as written by configuration management tools
(Puppet's classes.txt).
"""

from pathlib import Path
from typing import List, Union

from action_policy.ports.classification_port import ClassificationPort


class ClassesFileAdapter(ClassificationPort):
    """
    Classes file, read on every lookup.

    A missing file means the node has no classes.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    def has_class(self, name: str) -> bool:
        return name in self.classes()

    def classes(self) -> List[str]:
        if not self._path.is_file():
            return []

        lines = self._path.read_text(encoding="utf-8").splitlines()
        return [line.strip() for line in lines if line.strip()]
