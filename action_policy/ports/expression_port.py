"""
Expression Engine Port - Interface for compound boolean expressions.

The engine owns tokenizing and connective semantics (not, and, or,
parentheses). The caller only supplies a leaf resolver.

Implementations:
- CompoundMatcher: built-in tokenizer and evaluator
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Union

STATEMENT = "statement"
FSTATEMENT = "fstatement"
AND = "and"
OR = "or"
NOT = "not"
LPAREN = "("
RPAREN = ")"


@dataclass(frozen=True)
class StackNode:
    """
    One token of a compound expression.

    kind is STATEMENT (key=value or class name), FSTATEMENT (data function
    call) or a connective/parenthesis, in which case value equals kind.
    """
    kind: str
    value: str

    @property
    def is_leaf(self) -> bool:
        return self.kind in (STATEMENT, FSTATEMENT)


# Leaves resolve to a bool, connectives are handed back as their string
LeafResolver = Callable[[StackNode], Union[bool, str]]


class ExpressionEngine(ABC):
    """Port: Evaluate compound expressions."""

    @abstractmethod
    def evaluate(self, expression: str, resolver: LeafResolver) -> bool:
        """
        Evaluate a compound expression.

        Args:
            expression: e.g. "foo=bar and (rspec or not puppet().enabled=false)"
            resolver: Called for every node of the expression

        Returns:
            Boolean value of the expression

        Raises:
            CompoundSyntaxError: If the expression cannot be parsed
        """
        pass

    @abstractmethod
    def eval_function_statement(self, expression: str) -> bool:
        """
        Evaluate a data function statement such as puppet('x').enabled=true.

        Raises:
            DataFunctionError: If the function is unknown or cannot be called
        """
        pass
