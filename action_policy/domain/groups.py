"""
Group Registry - Named sets of caller identities.

Group file format, one group per line (a group may span several lines):

    sysadmin cert=sa1 cert=sa2 uid=500
    app_admin uid=600
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

logger = logging.getLogger(__name__)


@dataclass
class GroupTable:
    """
    Mapping of group name to its ordered members.

    Domain rules:
    - members are unioned across lines, first occurrence keeps its position
    - an empty table is valid and simply never matches
    """
    groups: Dict[str, List[str]] = field(default_factory=dict)

    def add(self, name: str, members: List[str]) -> None:
        """Union members into a group."""
        existing = self.groups.setdefault(name, [])
        for member in members:
            if member not in existing:
                existing.append(member)

    def members(self, name: str) -> List[str]:
        return list(self.groups.get(name, []))

    def __contains__(self, name: str) -> bool:
        return name in self.groups

    def __len__(self) -> int:
        return len(self.groups)

    def caller_in_groups(self, groups_field: Optional[str], caller_id: str) -> bool:
        """
        Check whether caller_id belongs to any group named in groups_field.

        Args:
            groups_field: Whitespace separated group names (or caller ids)
            caller_id: Caller to look for

        Returns:
            True on the first group containing the caller
        """
        if not groups_field:
            return False

        for token in groups_field.split():
            if caller_id in self.groups.get(token, ()):
                return True

        return False


def parse_group_file(path: Optional[Union[str, Path]]) -> GroupTable:
    """
    Parse a group file into a GroupTable.

    Group support is optional: an empty path, a missing file or an
    unreadable file all produce an empty table.
    """
    table = GroupTable()

    if not path:
        return table

    path = Path(path)
    if not path.is_file():
        logger.debug("No group file found at %s", path)
        return table

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read group file %s: %s", path, e)
        return table

    for number, line in enumerate(content.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        parts = stripped.split()
        if len(parts) < 2:
            logger.warning(
                "Skipping malformed line %d in group file %s: %r", number, path, stripped
            )
            continue

        table.add(parts[0], parts[1:])

    return table
