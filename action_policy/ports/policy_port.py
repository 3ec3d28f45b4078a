"""
Policy Decision Point (PDP) Port - Per-request authorization.

Decides whether a caller may run an action on an agent:
- Callers: uid=500, cert=admin, or a named group
- Actions: the agent action being requested
- Node state: facts and classes of the managed node
"""

from abc import ABC, abstractmethod
from typing import List

from action_policy.domain.decision import Decision, PolicyDecision
from action_policy.domain.request import AuthorizationRequest


class PolicyDecisionPoint(ABC):
    """
    Port: Policy Decision Point for agent action authorization.

    Evaluates whether a caller can perform an action on an agent.
    """

    @abstractmethod
    def evaluate(self, request: AuthorizationRequest) -> PolicyDecision:
        """
        Evaluate authorization policy.

        Args:
            request: Agent, caller and action being requested

        Returns:
            PolicyDecision with allow/deny and the audit reason

        Example:
            decision = pdp.evaluate(
                AuthorizationRequest(agent="service", caller_id="uid=500", action="restart")
            )

            if decision.decision == Decision.ALLOW:
                # Proceed with the action
        """
        pass

    def batch_evaluate(self, requests: List[AuthorizationRequest]) -> List[PolicyDecision]:
        """
        Evaluate several requests.

        Returns:
            List of decisions (same order as requests)
        """
        return [self.evaluate(request) for request in requests]


__all__ = ["PolicyDecisionPoint", "Decision", "PolicyDecision"]
