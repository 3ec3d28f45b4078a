"""
Compound Matcher - Built-in expression engine for compound policy fields.

Grammar (lowest to highest precedence):

    expression := term ("or" term)*
    term       := factor ("and" factor)*
    factor     := ("not" | "!") factor | "(" expression ")" | leaf
    leaf       := statement | fstatement

A statement is key=value or a class name. An fstatement calls a
registered data function:

    puppet('agent').enabled=false
    uptime()>=3600
    dns('example.com').ip=~/^10\\./
"""

import re
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from action_policy.exceptions import CompoundSyntaxError, DataFunctionError
from action_policy.ports.expression_port import (
    ExpressionEngine,
    LeafResolver,
    StackNode,
    STATEMENT,
    FSTATEMENT,
    AND,
    OR,
    NOT,
    LPAREN,
    RPAREN,
)

DataFunction = Callable[[Optional[str]], Any]

_FUNCTION_STATEMENT = re.compile(
    r"^(?P<name>\w+)\((?P<argument>.*?)\)"
    r"(?:\.(?P<attribute>\w+))?"
    r"\s*(?P<operator>==|=~|!=|<=|>=|=|<|>)\s*"
    r"(?P<value>.+)$"
)

_IDENTIFIER = re.compile(r"^\w+$")

_CONNECTIVES = {AND, OR, NOT}


class DataFunctionRegistry:
    """
    Named data functions callable from policy files.

    A function receives its (unquoted) argument, or None when called
    without one, and returns a mapping, an object with attributes, or a
    plain value.

    Example:
        functions = DataFunctionRegistry()

        @functions.register("puppet")
        def puppet(resource):
            return {"enabled": True}
    """

    def __init__(self, functions: Optional[Dict[str, DataFunction]] = None):
        self._functions: Dict[str, DataFunction] = dict(functions or {})

    def register(self, name: str, func: Optional[DataFunction] = None):
        """Register a data function, directly or as a decorator."""
        if func is None:
            def decorator(f: DataFunction) -> DataFunction:
                self._functions[name] = f
                return f
            return decorator

        self._functions[name] = func
        return func

    def get(self, name: str) -> DataFunction:
        try:
            return self._functions[name]
        except KeyError:
            raise DataFunctionError(f"Unknown data function '{name}'")

    def names(self) -> List[str]:
        return sorted(self._functions)

    def __contains__(self, name: str) -> bool:
        return name in self._functions


class CompoundMatcher(ExpressionEngine):
    """
    Tokenizes and evaluates compound expressions.

    Every node is handed to the leaf resolver before the expression is
    combined, so all data functions in an expression are called.
    """

    def __init__(self, functions: Optional[DataFunctionRegistry] = None):
        """
        Initialize the matcher.

        Args:
            functions: Data functions available to fstatements
        """
        self._functions = functions or DataFunctionRegistry()

    def evaluate(self, expression: str, resolver: LeafResolver) -> bool:
        """Evaluate an expression, resolving leaves through resolver."""
        stack = self.create_callstack(expression)
        values = [self._resolve(node, resolver) for node in stack]
        return _Evaluator(values).run()

    def create_callstack(self, expression: str) -> List[StackNode]:
        """
        Tokenize an expression.

        Raises:
            CompoundSyntaxError: On unterminated calls or quotes
        """
        nodes: List[StackNode] = []
        i = 0
        length = len(expression)

        while i < length:
            char = expression[i]

            if char.isspace():
                i += 1
            elif char == LPAREN:
                nodes.append(StackNode(LPAREN, LPAREN))
                i += 1
            elif char == RPAREN:
                nodes.append(StackNode(RPAREN, RPAREN))
                i += 1
            elif char == "!":
                nodes.append(StackNode(NOT, NOT))
                i += 1
            else:
                word, i, is_call = self._read_word(expression, i)
                if word in _CONNECTIVES:
                    nodes.append(StackNode(word, word))
                elif is_call:
                    nodes.append(StackNode(FSTATEMENT, word))
                else:
                    nodes.append(StackNode(STATEMENT, word))

        if not nodes:
            raise CompoundSyntaxError("Empty compound statement")

        return nodes

    def eval_function_statement(self, expression: str) -> bool:
        """
        Call a data function and compare its result.

        Raises:
            DataFunctionError: On bad syntax, unknown functions, missing
                attributes or a failing function
        """
        match = _FUNCTION_STATEMENT.match(expression.strip())
        if not match:
            raise DataFunctionError(f"Cannot parse data function statement: {expression}")

        func = self._functions.get(match.group("name"))
        argument = _unquote(match.group("argument").strip()) or None

        try:
            result = func(argument)
        except DataFunctionError:
            raise
        except Exception as e:
            raise DataFunctionError(
                f"Data function '{match.group('name')}' failed: {e}"
            ) from e

        attribute = match.group("attribute")
        if attribute:
            result = _attribute(result, attribute, match.group("name"))
        elif isinstance(result, Mapping):
            raise DataFunctionError(
                f"Data function '{match.group('name')}' needs an attribute to compare"
            )

        return _compare(result, match.group("operator"), _unquote(match.group("value").strip()))

    @staticmethod
    def _resolve(node: StackNode, resolver: LeafResolver) -> Union[bool, str]:
        value = resolver(node)
        if node.is_leaf:
            return bool(value)
        return node.kind

    @staticmethod
    def _read_word(expression: str, start: int) -> Tuple[str, int, bool]:
        """Read a statement token, swallowing data function call parentheses."""
        i = start
        length = len(expression)
        is_call = False

        # a /pattern/ may itself contain parentheses
        if expression[start] == "/":
            close = expression.find("/", start + 1)
            if close > start + 1:
                i = close + 1

        while i < length:
            char = expression[i]

            if char.isspace() or char == RPAREN:
                break

            if char == LPAREN:
                if not _IDENTIFIER.match(expression[start:i]):
                    break
                i = _skip_call(expression, i)
                is_call = True
                continue

            i += 1

        return expression[start:i], i, is_call


class _Evaluator:
    """Recursive descent over resolved values (bools and connectives)."""

    def __init__(self, values: List[Union[bool, str]]):
        self._values = values
        self._pos = 0

    def run(self) -> bool:
        result = self._expression()
        if self._pos != len(self._values):
            raise CompoundSyntaxError(
                f"Unexpected token '{self._values[self._pos]}' in compound statement"
            )
        return result

    def _peek(self) -> Union[bool, str, None]:
        if self._pos < len(self._values):
            return self._values[self._pos]
        return None

    def _next(self) -> Union[bool, str]:
        value = self._peek()
        if value is None:
            raise CompoundSyntaxError("Unexpected end of compound statement")
        self._pos += 1
        return value

    def _expression(self) -> bool:
        result = self._term()
        while self._peek() == OR:
            self._pos += 1
            right = self._term()
            result = result or right
        return result

    def _term(self) -> bool:
        result = self._factor()
        while self._peek() == AND:
            self._pos += 1
            right = self._factor()
            result = result and right
        return result

    def _factor(self) -> bool:
        value = self._next()

        if value == NOT:
            return not self._factor()

        if value == LPAREN:
            result = self._expression()
            if self._next() != RPAREN:
                raise CompoundSyntaxError("Unbalanced parentheses in compound statement")
            return result

        if isinstance(value, bool):
            return value

        raise CompoundSyntaxError(f"Unexpected token '{value}' in compound statement")


def _skip_call(expression: str, start: int) -> int:
    """Return the index just past the parenthesis closing the one at start."""
    depth = 0
    quote = None
    i = start

    while i < len(expression):
        char = expression[i]
        if quote:
            if char == quote:
                quote = None
        elif char in ("'", '"'):
            quote = char
        elif char == LPAREN:
            depth += 1
        elif char == RPAREN:
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1

    raise CompoundSyntaxError(f"Unterminated data function call in: {expression}")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _attribute(result: Any, attribute: str, name: str) -> Any:
    if isinstance(result, Mapping):
        if attribute not in result:
            raise DataFunctionError(f"Data function '{name}' has no attribute '{attribute}'")
        return result[attribute]

    if not hasattr(result, attribute):
        raise DataFunctionError(f"Data function '{name}' has no attribute '{attribute}'")
    return getattr(result, attribute)


def _compare(actual: Any, operator: str, expected: str) -> bool:
    if operator == "=~":
        pattern = expected[1:-1] if len(expected) > 2 and expected.startswith("/") and expected.endswith("/") else expected
        try:
            return re.search(pattern, str(actual)) is not None
        except re.error as e:
            raise DataFunctionError(f"Invalid regular expression {expected}: {e}") from e

    if isinstance(actual, bool):
        if operator in ("=", "=="):
            return str(actual).lower() == expected.lower()
        if operator == "!=":
            return str(actual).lower() != expected.lower()
        raise DataFunctionError(f"Cannot compare a boolean with '{operator}'")

    left: Any = actual
    right: Any = expected
    try:
        left, right = float(actual), float(expected)
    except (TypeError, ValueError):
        left, right = str(actual), expected

    if operator in ("=", "=="):
        return left == right
    if operator == "!=":
        return left != right
    if operator == "<":
        return left < right
    if operator == ">":
        return left > right
    if operator == "<=":
        return left <= right
    return left >= right
