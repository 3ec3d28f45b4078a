"""
Domain Models - Pure authorization entities.

No infrastructure dependencies. Domain logic only.
"""

from action_policy.domain.request import AuthorizationRequest
from action_policy.domain.decision import Decision, PolicyDecision
from action_policy.domain.groups import GroupTable, parse_group_file
from action_policy.domain.rule import PolicyRule, PolicyFile, parse_rule

__all__ = [
    "AuthorizationRequest",
    "Decision",
    "PolicyDecision",
    "GroupTable",
    "parse_group_file",
    "PolicyRule",
    "PolicyFile",
    "parse_rule",
]
