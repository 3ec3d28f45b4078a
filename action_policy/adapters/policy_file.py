"""
Policy File Adapter - Evaluate policy file rules against a request.

Rules are scanned top to bottom and the first rule that applies decides.
Within a plain field any token may match; the facts and classes fields
of a rule must both match.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from action_policy.adapters.compound_delegate import CompoundDelegate
from action_policy.adapters.field_lookup import FieldLookup
from action_policy.domain.decision import Decision, PolicyDecision
from action_policy.domain.fields import (
    action_in_actions,
    caller_in_caller_ids,
    is_compound,
    is_wildcard,
)
from action_policy.domain.groups import GroupTable
from action_policy.domain.request import AuthorizationRequest
from action_policy.domain.rule import PolicyFile, PolicyRule
from action_policy.ports.classification_port import ClassificationPort
from action_policy.ports.expression_port import ExpressionEngine
from action_policy.ports.fact_port import FactPort

logger = logging.getLogger(__name__)


class PolicyFileAdapter:
    """
    Rule evaluator for policy files.

    Holds no per-request state, so one instance may serve concurrent
    requests. Files are read on every call.
    """

    def __init__(
        self,
        facts: FactPort,
        classes: ClassificationPort,
        engine: ExpressionEngine,
    ):
        """
        Initialize the rule evaluator.

        Args:
            facts: Fact store of the managed node
            classes: Classification store of the managed node
            engine: Compound expression engine
        """
        self._lookup = FieldLookup(facts, classes)
        self._compound = CompoundDelegate(self._lookup, engine)

    def evaluate_policy_file(
        self,
        path: Union[str, Path],
        request: AuthorizationRequest,
        groups: Optional[GroupTable] = None,
    ) -> PolicyDecision:
        """
        Evaluate a policy file.

        Args:
            path: Policy file to read
            request: Request being authorized
            groups: Caller groups (empty if None)

        Returns:
            Decision of the first applicable rule, else the file's default
        """
        path = Path(path)
        logger.debug("Parsing policyfile for %s: %s", request.agent, path)

        try:
            policy = PolicyFile.load(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read policy file %s: %s", path, e)
            return PolicyDecision.deny(
                f"could not read policy file {path.name}", policy_file=path
            )

        return self.evaluate_policy(policy, request, groups)

    def evaluate_policy(
        self,
        policy: PolicyFile,
        request: AuthorizationRequest,
        groups: Optional[GroupTable] = None,
    ) -> PolicyDecision:
        """Evaluate an already parsed policy file."""
        groups = groups if groups is not None else GroupTable()
        name = policy.path.name if policy.path else "policy"

        if policy.usable_lines == 0:
            return PolicyDecision.deny(
                f"no policy lines matched in {name}", policy_file=policy.path
            )

        for rule in policy.rules:
            if not self.check_rule(rule, request, groups):
                continue

            if rule.effect is Decision.DENY:
                return PolicyDecision.deny(
                    f'explicit "deny" policy rule at line {rule.line_number} of {name}',
                    policy_file=policy.path,
                    line_number=rule.line_number,
                )

            return PolicyDecision.allow(
                f"policy rule at line {rule.line_number} of {name}",
                policy_file=policy.path,
                line_number=rule.line_number,
            )

        if policy.default is Decision.ALLOW:
            return PolicyDecision.allow(
                f"default policy in {name}", policy_file=policy.path
            )

        return PolicyDecision.deny(
            f"no policy lines matched in {name}", policy_file=policy.path
        )

    def check_rule(
        self,
        rule: PolicyRule,
        request: AuthorizationRequest,
        groups: GroupTable,
    ) -> bool:
        """
        Check whether a rule applies to a request.

        A False result only means "try the next rule", never a denial.
        """
        if not (
            caller_in_caller_ids(rule.callers, request.caller_id)
            or groups.caller_in_groups(rule.callers, request.caller_id)
        ):
            return False

        if not action_in_actions(rule.actions, request.action):
            return False

        if rule.is_compound_rule:
            return self.parse_compound(rule.facts)

        return self.parse_facts(rule.facts) and self.parse_classes(rule.classes)

    def parse_facts(self, facts: Optional[str]) -> bool:
        """Any listed fact may match; compound fields go to the engine."""
        return self._parse_field(facts)

    def parse_classes(self, classes: Optional[str]) -> bool:
        """Any listed class may match; compound fields go to the engine."""
        return self._parse_field(classes)

    def parse_compound(self, expression: Optional[str]) -> bool:
        return self._compound.parse_compound(expression)

    def _parse_field(self, field: Optional[str]) -> bool:
        if not field:
            return False

        if is_wildcard(field):
            return True

        if is_compound(field):
            return self.parse_compound(field)

        return any(self._lookup.lookup(token) for token in field.split())
