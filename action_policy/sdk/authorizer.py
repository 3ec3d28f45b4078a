"""
Action Policy - Authorization façade for agent requests.

The single entry point callers use before running a requested action.
"""

import logging
from typing import Optional

from action_policy.adapters.compound_matcher import CompoundMatcher
from action_policy.adapters.policy_file import PolicyFileAdapter
from action_policy.adapters.policy_locator import is_valid_agent_name, locate_policy_file
from action_policy.domain.config import EngineConfig
from action_policy.domain.decision import PolicyDecision
from action_policy.domain.groups import parse_group_file
from action_policy.domain.request import AuthorizationRequest
from action_policy.exceptions import AuthorizationDenied
from action_policy.ports.classification_port import ClassificationPort
from action_policy.ports.config_port import ConfigPort
from action_policy.ports.expression_port import ExpressionEngine
from action_policy.ports.fact_port import FactPort
from action_policy.ports.policy_port import PolicyDecisionPoint

logger = logging.getLogger(__name__)


class ActionPolicy(PolicyDecisionPoint):
    """
    Policy file based authorization.

    Configuration, the group file and the policy file are all read again
    for every request, so edits take effect immediately and concurrent
    calls share no mutable state.

    Example:
        from action_policy import ActionPolicy, AuthorizationRequest
        from action_policy.adapters import (
            ServerConfigAdapter, YAMLFactAdapter, ClassesFileAdapter,
        )

        policy = ActionPolicy(
            config=ServerConfigAdapter("/etc/mcollective/server.cfg"),
            facts=YAMLFactAdapter("/etc/mcollective/facts.yaml"),
            classes=ClassesFileAdapter("/var/lib/puppet/state/classes.txt"),
        )

        request = AuthorizationRequest(agent="service", caller_id="uid=500", action="restart")
        policy.authorize(request)  # raises AuthorizationDenied
    """

    def __init__(
        self,
        config: ConfigPort,
        facts: FactPort,
        classes: ClassificationPort,
        engine: Optional[ExpressionEngine] = None,
    ):
        """
        Initialize action policy with adapters.

        Args:
            config: Plugin options and configuration directory
            facts: Fact store of the managed node
            classes: Classification store of the managed node
            engine: Compound expression engine (default CompoundMatcher)
        """
        self._config = config
        self._rules = PolicyFileAdapter(facts, classes, engine or CompoundMatcher())

    def engine_config(self) -> EngineConfig:
        """Resolve the current engine configuration."""
        return EngineConfig.from_config(self._config)

    def evaluate(self, request: AuthorizationRequest) -> PolicyDecision:
        """
        Decide a request without raising.

        enable_default is honoured before allow_unconfigured: a default
        policy file, when present, is always evaluated.
        """
        if not is_valid_agent_name(request.agent):
            return PolicyDecision.deny(f"invalid agent name {request.agent!r}")

        config = self.engine_config()
        policy_file = locate_policy_file(request.agent, config)

        if policy_file is None:
            if config.allow_unconfigured:
                return PolicyDecision.allow("no policy configured, fail-open by operator choice")
            return PolicyDecision.deny("no policy configured, fail-closed by default")

        groups = parse_group_file(config.resolve_group_file())
        return self._rules.evaluate_policy_file(policy_file, request, groups)

    def authorize(self, request: AuthorizationRequest) -> bool:
        """
        Authorize a request.

        Returns:
            True if the request is allowed

        Raises:
            AuthorizationDenied: If the request is denied
        """
        decision = self.evaluate(request)

        if not decision.allowed:
            logger.debug(
                "Denying %s calling %s#%s: %s",
                request.caller_id, request.agent, request.action, decision.reason,
            )
            raise AuthorizationDenied(decision.reason)

        logger.info(
            "Authorized %s calling %s#%s: %s",
            request.caller_id, request.agent, request.action, decision.reason,
        )
        return True


def authorize(
    request: AuthorizationRequest,
    config: ConfigPort,
    facts: FactPort,
    classes: ClassificationPort,
    engine: Optional[ExpressionEngine] = None,
) -> bool:
    """Authorize one request with a freshly built ActionPolicy."""
    return ActionPolicy(config, facts, classes, engine).authorize(request)
