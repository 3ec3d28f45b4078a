"""
Authorization Request Domain Model - What a caller asks an agent to do.
"""

from dataclasses import dataclass
from typing import Dict, Any


@dataclass(frozen=True)
class AuthorizationRequest:
    """
    Request descriptor handed to the authorization engine.

    Domain rules:
    - caller_id is opaque (uid=500, cert=admin, ...) and only compared exactly
    - agent selects the policy file, action is matched against rule actions
    """
    agent: str
    caller_id: str
    action: str

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        return {
            "agent": self.agent,
            "caller_id": self.caller_id,
            "action": self.action,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuthorizationRequest":
        """Deserialize from dict."""
        return cls(
            agent=data["agent"],
            caller_id=data["caller_id"],
            action=data["action"],
        )
