"""
Unit tests for the compound expression engine.
"""

import pytest
from action_policy.adapters.compound_matcher import CompoundMatcher, DataFunctionRegistry
from action_policy.exceptions import CompoundSyntaxError, DataFunctionError
from action_policy.ports.expression_port import StackNode, STATEMENT, FSTATEMENT


def truth_table(values):
    """Resolver answering statements from a dict."""
    def resolver(node):
        if node.kind == STATEMENT:
            return values[node.value]
        if node.kind == FSTATEMENT:
            return values[node.value]
        return node.value
    return resolver


def test_create_callstack():
    """Expressions tokenize into statements, fstatements and connectives."""
    matcher = CompoundMatcher()

    stack = matcher.create_callstack("foo=bar and (!rspec or puppet('agent').enabled=false)")

    assert stack == [
        StackNode("statement", "foo=bar"),
        StackNode("and", "and"),
        StackNode("(", "("),
        StackNode("not", "not"),
        StackNode("statement", "rspec"),
        StackNode("or", "or"),
        StackNode("fstatement", "puppet('agent').enabled=false"),
        StackNode(")", ")"),
    ]


def test_callstack_keeps_quoted_parentheses():
    """Parentheses inside quoted arguments do not end the call."""
    stack = CompoundMatcher().create_callstack("echo('a)b').value=x")

    assert stack == [StackNode("fstatement", "echo('a)b').value=x")]


def test_callstack_keeps_class_patterns_whole():
    """A /pattern/ statement may contain parentheses."""
    stack = CompoundMatcher().create_callstack("!/web(server)?/ and (foo=bar)")

    assert stack == [
        StackNode("not", "not"),
        StackNode("statement", "/web(server)?/"),
        StackNode("and", "and"),
        StackNode("(", "("),
        StackNode("statement", "foo=bar"),
        StackNode(")", ")"),
    ]


@pytest.mark.parametrize("expression,expected", [
    ("a and b", False),
    ("a or b", True),
    ("not b", True),
    ("!a", False),
    ("a and not b", True),
    ("b or a and c", True),
    ("(b or a) and c", True),
    ("b or a and b", False),
    ("not (a and b)", True),
    ("not not a", True),
])
def test_evaluate(expression, expected):
    """Connectives follow not > and > or precedence."""
    resolver = truth_table({"a": True, "b": False, "c": True})

    assert CompoundMatcher().evaluate(expression, resolver) is expected


@pytest.mark.parametrize("expression", [
    "",
    "a and",
    "(a or c",
    "a c",
    "a or )",
    "puppet('x'",
])
def test_evaluate_syntax_errors(expression):
    """Broken expressions raise CompoundSyntaxError."""
    resolver = truth_table({"a": True, "c": True})

    with pytest.raises(CompoundSyntaxError):
        CompoundMatcher().evaluate(expression, resolver)


def test_every_node_is_resolved():
    """Every leaf goes to the resolver, even after the outcome is known."""
    seen = []

    def resolver(node):
        seen.append(node.value)
        return True if node.is_leaf else node.value

    CompoundMatcher().evaluate("a or b", resolver)

    assert seen == ["a", "or", "b"]


@pytest.fixture
def functions():
    registry = DataFunctionRegistry()

    @registry.register("puppet")
    def puppet(resource):
        return {"enabled": False, "resource": resource}

    registry.register("uptime", lambda _: 7200)
    registry.register("hostname", lambda _: "web01.example.com")

    return registry


def test_data_function_attribute(functions):
    """Attributes of a mapping result are compared."""
    matcher = CompoundMatcher(functions)

    assert matcher.eval_function_statement("puppet().enabled=false")
    assert not matcher.eval_function_statement("puppet().enabled=true")
    assert matcher.eval_function_statement("puppet('agent').resource=agent")
    assert matcher.eval_function_statement('puppet("agent").resource==agent')


def test_data_function_numeric(functions):
    """Numeric results compare numerically."""
    matcher = CompoundMatcher(functions)

    assert matcher.eval_function_statement("uptime()>=3600")
    assert matcher.eval_function_statement("uptime()>100")
    assert not matcher.eval_function_statement("uptime()<3600")
    assert matcher.eval_function_statement("uptime()!=1")


def test_data_function_regex(functions):
    """=~ searches with a regular expression."""
    matcher = CompoundMatcher(functions)

    assert matcher.eval_function_statement("hostname()=~/^web\\d+/")
    assert not matcher.eval_function_statement("hostname()=~/^db/")


@pytest.mark.parametrize("statement", [
    "missing().value=1",
    "puppet().nothing=1",
    "puppet()=1",
    "not a statement",
    "puppet().enabled>1",
])
def test_data_function_errors(functions, statement):
    """Unknown functions, attributes and bad syntax raise DataFunctionError."""
    with pytest.raises(DataFunctionError):
        CompoundMatcher(functions).eval_function_statement(statement)


def test_data_function_failure_is_wrapped():
    """Exceptions raised by a data function become DataFunctionError."""
    registry = DataFunctionRegistry({"broken": lambda _: 1 / 0})

    with pytest.raises(DataFunctionError, match="broken"):
        CompoundMatcher(registry).eval_function_statement("broken()=1")
