"""
Action Policy - Authorization for agent actions on a fleet message bus

Hexagonal architecture: the engine decides ALLOW or DENY for a caller
running an action on an agent, based on policy files keyed by caller,
action, node facts and node classes. Deny by default.

Usage:
    from action_policy import ActionPolicy, AuthorizationRequest
    from action_policy.adapters import (
        ServerConfigAdapter, YAMLFactAdapter, ClassesFileAdapter,
    )

    policy = ActionPolicy(
        config=ServerConfigAdapter("/etc/mcollective/server.cfg"),
        facts=YAMLFactAdapter("/etc/mcollective/facts.yaml"),
        classes=ClassesFileAdapter("/var/lib/puppet/state/classes.txt"),
    )

    # Raises AuthorizationDenied unless a policy rule allows it
    policy.authorize(AuthorizationRequest("service", "uid=500", "restart"))
"""

__version__ = "0.1.0"

from action_policy.sdk.authorizer import ActionPolicy, authorize
from action_policy.domain.request import AuthorizationRequest
from action_policy.domain.decision import Decision, PolicyDecision
from action_policy.exceptions import AuthorizationDenied

__all__ = [
    "ActionPolicy",
    "authorize",
    "AuthorizationRequest",
    "Decision",
    "PolicyDecision",
    "AuthorizationDenied",
]
