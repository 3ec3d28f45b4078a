"""
Decision Domain Model - Outcome of an authorization check.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Any, Optional


class Decision(Enum):
    """Authorization decision."""
    ALLOW = "allow"
    DENY = "deny"


@dataclass(frozen=True)
class PolicyDecision:
    """
    Authorization decision with its audit trail.
    """
    decision: Decision
    reason: str

    # Audit
    policy_file: Optional[Path] = None
    line_number: Optional[int] = None

    @property
    def allowed(self) -> bool:
        return self.decision is Decision.ALLOW

    @classmethod
    def allow(cls, reason: str, **audit: Any) -> "PolicyDecision":
        return cls(decision=Decision.ALLOW, reason=reason, **audit)

    @classmethod
    def deny(cls, reason: str, **audit: Any) -> "PolicyDecision":
        return cls(decision=Decision.DENY, reason=reason, **audit)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        return {
            "decision": self.decision.value,
            "reason": self.reason,
            "policy_file": str(self.policy_file) if self.policy_file else None,
            "line_number": self.line_number,
        }
