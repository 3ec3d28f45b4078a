"""
Policy Rule Domain Model - Parsed lines of a policy file.

Policy file format (tabs between fields):

    # comments and blank lines are ignored
    policy default deny
    allow   uid=500 uid=600   status restart   customer=acme   acme::devserver
    deny    *                 stop             *               *
    allow   uid=700           restart          environment=development and puppet().enabled=false

Fields are separated by tabs, so a field may hold several space separated
tokens. A line without tabs is split on any whitespace. The leading
allow/deny keyword is optional and defaults to allow.

After callers and actions come either a facts field and a classes field,
or a single compound expression standing in for both.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from action_policy.domain.decision import Decision
from action_policy.domain.fields import CONNECTIVES, is_compound

logger = logging.getLogger(__name__)

_DEFAULT_LINE = re.compile(r"^policy\s+default\s+(\w+)\s*$")
_TABS = re.compile(r"\t+")
_SPACED_EFFECT = re.compile(r"^(allow|deny) ")

EFFECTS = {"allow": Decision.ALLOW, "deny": Decision.DENY}


@dataclass(frozen=True)
class PolicyRule:
    """
    One authorization statement.

    Domain rules:
    - classes of None means facts holds a compound expression
    - line_number is 1-based and only used for auditing
    """
    callers: str
    actions: str
    facts: str
    classes: Optional[str] = None
    effect: Decision = Decision.ALLOW
    line_number: int = 0

    @property
    def is_compound_rule(self) -> bool:
        return self.classes is None


@dataclass
class PolicyFile:
    """
    A parsed policy file.

    `default` is the decision when no rule matches; it only changes
    through an explicit "policy default allow" line.
    """
    rules: List[PolicyRule] = field(default_factory=list)
    default: Decision = Decision.DENY
    usable_lines: int = 0
    path: Optional[Path] = None

    @classmethod
    def parse(cls, text: str, path: Optional[Path] = None) -> "PolicyFile":
        """Parse policy file content."""
        policy = cls(path=path)

        for number, line in enumerate(text.splitlines(), start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue

            policy.usable_lines += 1

            default = _DEFAULT_LINE.match(stripped)
            if default:
                policy.default = Decision.ALLOW if default.group(1) == "allow" else Decision.DENY
                continue

            rule = parse_rule(line, number)
            if rule is None:
                logger.debug("Cannot parse policy line %d: %s", number, stripped)
                continue

            policy.rules.append(rule)

        return policy

    @classmethod
    def load(cls, path: Union[str, Path]) -> "PolicyFile":
        """Read and parse a policy file from disk."""
        path = Path(path)
        return cls.parse(path.read_text(encoding="utf-8"), path=path)


def split_fields(line: str) -> List[str]:
    """Split a policy line into top level fields."""
    stripped = line.strip()
    if "\t" in stripped:
        return [part.strip() for part in _TABS.split(stripped) if part.strip()]
    return stripped.split()


def parse_rule(line: str, line_number: int = 0) -> Optional[PolicyRule]:
    """
    Parse one rule line.

    Returns:
        PolicyRule, or None if the line does not have enough fields or
        an allow/deny keyword is not followed by a tab
    """
    tabbed = "\t" in line.strip()
    fields = split_fields(line)

    # "deny uid=500<TAB>..." must not turn into an allow rule for "deny uid=500"
    if tabbed and fields and _SPACED_EFFECT.match(fields[0]):
        return None

    effect = Decision.ALLOW
    if fields and fields[0] in EFFECTS:
        effect = EFFECTS[fields[0]]
        fields = fields[1:]

    if len(fields) < 3:
        return None

    callers, actions, rest = fields[0], fields[1], fields[2:]

    if len(rest) == 1:
        return PolicyRule(callers, actions, rest[0], None, effect, line_number)

    if tabbed:
        if len(rest) != 2:
            return None
        return PolicyRule(callers, actions, rest[0], rest[1], effect, line_number)

    # Without tabs every token is its own field, so a compound expression
    # spills over several of them.
    if len(rest) == 2 and not CONNECTIVES.intersection(rest):
        return PolicyRule(callers, actions, rest[0], rest[1], effect, line_number)

    expression = " ".join(rest)
    if is_compound(expression):
        return PolicyRule(callers, actions, expression, None, effect, line_number)

    return None
