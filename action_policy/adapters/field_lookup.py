"""
Field Lookup Adapter - Resolve fact and class tokens against node data.

Malformed tokens (a class in a fact position or a fact in a class
position) and failing fact or class stores never raise out of here:
they are logged and resolve to False.
"""

import logging
import re
from typing import Tuple

from action_policy.domain.fields import is_fact_token, regex_pattern
from action_policy.exceptions import MalformedFieldError
from action_policy.ports.classification_port import ClassificationPort
from action_policy.ports.fact_port import FactPort

logger = logging.getLogger(__name__)


class FieldLookup:
    """
    Leaf resolver for plain fact and class tokens.

    Tokens:
    - key=value: fact equality
    - name: class membership
    - /pattern/: regex search over the node's classes
    """

    def __init__(self, facts: FactPort, classes: ClassificationPort):
        """
        Initialize field lookup.

        Args:
            facts: Fact store of the managed node
            classes: Classification store of the managed node
        """
        self._facts = facts
        self._classes = classes

    def lookup_fact(self, token: str) -> bool:
        """Compare a key=value token against the node's facts."""
        try:
            key, expected = self._split_fact(token)
        except MalformedFieldError as e:
            logger.warning(str(e))
            return False

        try:
            return self._facts.get_fact(key) == expected
        except Exception as e:
            logger.warning("Could not look up fact %s: %s", key, e)
            return False

    def lookup_class(self, token: str) -> bool:
        """Check a class name or /pattern/ token against the node's classes."""
        try:
            self._require_class(token)
        except MalformedFieldError as e:
            logger.warning(str(e))
            return False

        pattern = regex_pattern(token)
        if pattern is None:
            return self._has_class(token)

        try:
            regex = re.compile(pattern)
        except re.error as e:
            logger.warning("Invalid class pattern %s in policy file: %s", token, e)
            return False

        try:
            return any(regex.search(name) for name in self._classes.classes())
        except Exception as e:
            logger.warning("Could not read node classes: %s", e)
            return False

    def lookup(self, token: str) -> bool:
        """Dispatch a token to the fact or class lookup by its shape."""
        if is_fact_token(token):
            return self.lookup_fact(token)
        return self.lookup_class(token)

    def _has_class(self, name: str) -> bool:
        try:
            return self._classes.has_class(name)
        except Exception as e:
            logger.warning("Could not look up class %s: %s", name, e)
            return False

    @staticmethod
    def _split_fact(token: str) -> Tuple[str, str]:
        if not is_fact_token(token):
            raise MalformedFieldError("Class found where fact was expected")
        key, _, expected = token.partition("=")
        return key, expected

    @staticmethod
    def _require_class(token: str) -> None:
        if is_fact_token(token):
            raise MalformedFieldError("Fact found where class was expected")
