"""
Unit tests for the compound delegate.
"""

import logging
import pytest
from action_policy.adapters.compound_delegate import CompoundDelegate
from action_policy.adapters.compound_matcher import CompoundMatcher, DataFunctionRegistry
from action_policy.adapters.field_lookup import FieldLookup
from action_policy.adapters.memory_facts import MemoryFactAdapter, MemoryClassificationAdapter
from action_policy.ports.expression_port import StackNode


@pytest.fixture
def delegate():
    functions = DataFunctionRegistry()
    functions.register("rspec", lambda arg: {"value": "result", "arg": arg})

    lookup = FieldLookup(
        MemoryFactAdapter({"foo": "bar", "bar": "foo"}),
        MemoryClassificationAdapter({"rspec"}),
    )
    return CompoundDelegate(lookup, CompoundMatcher(functions))


def test_connectives_are_returned_unevaluated(delegate):
    """Connectives come back as strings."""
    assert delegate.eval_statement(StackNode("and", "and")) == "and"
    assert delegate.eval_statement(StackNode("(", "(")) == "("


def test_statement_uses_lookup(delegate):
    """Statements resolve facts and classes."""
    assert delegate.eval_statement(StackNode("statement", "foo=bar")) is True
    assert delegate.eval_statement(StackNode("statement", "rspec")) is True
    assert delegate.eval_statement(StackNode("statement", "foo=baz")) is False


def test_fstatement_calls_data_function(delegate):
    """fstatements go to the engine's data functions."""
    node = StackNode("fstatement", "rspec('data').value=result")

    assert delegate.eval_statement(node) is True


def test_failed_fstatement_is_false(delegate, caplog):
    """A failing data function is logged and resolves to False."""
    node = StackNode("fstatement", "missing('data').value=result")

    with caplog.at_level(logging.WARNING):
        assert delegate.eval_statement(node) is False

    assert "Could not call data function in policy file" in caplog.text
    assert "Unknown data function 'missing'" in caplog.text


def test_parse_compound(delegate):
    """Whole expressions evaluate through the engine."""
    assert delegate.parse_compound("foo=bar and bar=foo")
    assert delegate.parse_compound("foo=nope or rspec")
    assert not delegate.parse_compound("foo=bar and not rspec")
    assert delegate.parse_compound("rspec('x').arg=x and !missing")


def test_parse_compound_wildcard(delegate):
    """A wildcard compound field matches."""
    assert delegate.parse_compound("*")


def test_parse_compound_broken_expression(delegate):
    """Unparseable expressions never match."""
    assert not delegate.parse_compound("foo=bar and (rspec")
    assert not delegate.parse_compound("")
    assert not delegate.parse_compound(None)


def test_failed_fstatement_inside_expression(delegate):
    """A broken data function only falsifies its own leaf."""
    assert delegate.parse_compound("missing().value=1 or foo=bar")
    assert not delegate.parse_compound("missing().value=1 and foo=bar")
