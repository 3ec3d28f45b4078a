"""
Ports - Interfaces for node data, configuration, expressions and authorization.

Hexagonal architecture: These define WHAT we need, not HOW.
Adapters provide the HOW.
"""

from action_policy.ports.config_port import ConfigPort
from action_policy.ports.fact_port import FactPort
from action_policy.ports.classification_port import ClassificationPort
from action_policy.ports.expression_port import ExpressionEngine, StackNode, LeafResolver
from action_policy.ports.policy_port import PolicyDecisionPoint, PolicyDecision, Decision

__all__ = [
    # Node data
    "FactPort",
    "ClassificationPort",
    # Configuration
    "ConfigPort",
    # Compound expressions
    "ExpressionEngine",
    "StackNode",
    "LeafResolver",
    # Authorization (PDP)
    "PolicyDecisionPoint",
    "PolicyDecision",
    "Decision",
]
