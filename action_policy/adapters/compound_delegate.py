"""
Compound Delegate - Leaf statements of compound expressions.

The expression engine walks the expression and calls eval_statement()
for each node; this class only resolves leaves against the node.
"""

import logging
from typing import Optional, Union

from action_policy.adapters.field_lookup import FieldLookup
from action_policy.domain.fields import is_wildcard
from action_policy.exceptions import CompoundSyntaxError
from action_policy.ports.expression_port import (
    ExpressionEngine,
    StackNode,
    STATEMENT,
    FSTATEMENT,
)

logger = logging.getLogger(__name__)


class CompoundDelegate:
    """Bridge between rule evaluation and the expression engine."""

    def __init__(self, lookup: FieldLookup, engine: ExpressionEngine):
        self._lookup = lookup
        self._engine = engine

    def eval_statement(self, node: StackNode) -> Union[bool, str]:
        """
        Resolve one node of a compound expression.

        Connectives and parentheses come back as their string for the
        engine to combine. A data function that fails resolves to False.
        """
        if node.kind == STATEMENT:
            return self._lookup.lookup(node.value)

        if node.kind == FSTATEMENT:
            try:
                return self._engine.eval_function_statement(node.value)
            except Exception as e:
                logger.warning("Could not call data function in policy file: %s", e)
                return False

        return node.value

    def parse_compound(self, expression: Optional[str]) -> bool:
        """Evaluate a compound expression; unparseable expressions are False."""
        if not expression:
            return False

        if is_wildcard(expression):
            return True

        try:
            return self._engine.evaluate(expression, self.eval_statement)
        except CompoundSyntaxError as e:
            logger.debug("Could not parse compound statement %r: %s", expression, e)
            return False
