"""
Integration tests: policy fixture files evaluated end to end.
"""

from pathlib import Path
import pytest
from action_policy.adapters.compound_matcher import CompoundMatcher, DataFunctionRegistry
from action_policy.adapters.memory_facts import MemoryFactAdapter, MemoryClassificationAdapter
from action_policy.adapters.policy_file import PolicyFileAdapter
from action_policy.domain.request import AuthorizationRequest

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"


def evaluate(
    fixture,
    caller_id="rspec_caller",
    action="rspec_action",
    facts=None,
    classes=None,
    functions=None,
):
    evaluator = PolicyFileAdapter(
        MemoryFactAdapter(facts),
        MemoryClassificationAdapter(classes),
        CompoundMatcher(functions),
    )
    request = AuthorizationRequest(agent="rspec_agent", caller_id=caller_id, action=action)
    return evaluator.evaluate_policy_file(FIXTURES / fixture, request).allowed


def test_default_allow():
    assert evaluate("default_allow")


def test_default_deny():
    assert not evaluate("default_deny")


def test_example1_wildcards():
    """allow * * * * allows everything."""
    assert evaluate("example1")
    assert evaluate("example1", caller_id="uid=1", action="anything")


def test_example2_caller():
    assert evaluate("example2", caller_id="uid=500")
    assert not evaluate("example2", caller_id="uid=501")


def test_example3_action():
    assert evaluate("example3", action="rspec")
    assert not evaluate("example3", action="notrspec")


def test_example4_fact():
    assert evaluate("example4", facts={"foo": "bar"})
    assert not evaluate("example4", facts={"foo": "notbar"})


def test_example5_class():
    assert evaluate("example5", classes={"rspec"})
    assert not evaluate("example5")


def test_example6_caller_and_action():
    assert evaluate("example6", caller_id="uid=500", action="rspec")
    assert not evaluate("example6", caller_id="uid=501", action="notrspec")
    assert not evaluate("example6", caller_id="uid=500", action="notrspec")


def test_example7_caller_and_fact():
    assert evaluate("example7", caller_id="uid=500", facts={"foo": "bar"})
    assert not evaluate("example7", caller_id="uid=501", facts={"foo": "notbar"})


def test_example8_caller_and_class():
    assert evaluate("example8", caller_id="uid=500", classes={"rspec"})
    assert not evaluate("example8", caller_id="uid=500")


def test_example9_caller_action_fact():
    assert evaluate("example9", caller_id="uid=500", action="rspec", facts={"foo": "bar"})
    assert not evaluate("example9", caller_id="uid=501", action="notrspec", facts={"foo": "notbar"})


def test_example10_caller_action_class():
    assert evaluate("example10", caller_id="uid=500", action="rspec", classes={"rspec"})
    assert not evaluate("example10", caller_id="uid=501", action="notrspec")


def test_example11_all_fields():
    assert evaluate(
        "example11", caller_id="uid=500", action="rspec", facts={"foo": "bar"}, classes={"rspec"}
    )
    assert not evaluate(
        "example11", caller_id="uid=500", action="rspec", facts={"foo": "notbar"}, classes={"rspec"}
    )


def test_example12_compound_facts():
    assert evaluate(
        "example12",
        caller_id="uid=500",
        action="rspec",
        facts={"foo": "bar", "bar": "foo"},
        classes={"rspec"},
    )
    assert not evaluate(
        "example12",
        caller_id="uid=500",
        action="rspec",
        facts={"foo": "bar", "bar": "bar"},
        classes={"rspec"},
    )


def test_example13_any_class():
    """one and two are set, three is not: any listed class is enough."""
    assert evaluate(
        "example13", caller_id="uid=500", action="rspec", facts={"foo": "bar"}, classes={"one", "two"}
    )


def test_example14_compound_classes():
    assert evaluate(
        "example14", caller_id="uid=500", action="rspec", facts={"foo": "bar"}, classes={"one"}
    )
    assert not evaluate(
        "example14", caller_id="uid=500", action="rspec", facts={"foo": "bar"}, classes={"one", "two"}
    )


@pytest.fixture
def puppet_functions():
    functions = DataFunctionRegistry()
    functions.register("puppet", lambda _: {"enabled": False})
    return functions


def test_example15_first_rule():
    assert evaluate("example15", caller_id="uid=500")


def test_example15_second_rule():
    assert evaluate(
        "example15", caller_id="uid=600", facts={"customer": "acme"}, classes={"acme::devserver"}
    )
    assert not evaluate("example15", caller_id="uid=600", facts={"customer": "acme"})


def test_example15_third_rule():
    assert evaluate("example15", caller_id="uid=600", action="status", facts={"customer": "acme"})


def test_example15_compound_data_function(puppet_functions):
    assert evaluate(
        "example15",
        caller_id="uid=700",
        action="restart",
        facts={"environment": "development"},
        functions=puppet_functions,
    )
    assert not evaluate(
        "example15",
        caller_id="uid=700",
        action="restart",
        facts={"environment": "production"},
        functions=puppet_functions,
    )


def test_example15_missing_data_function_denies():
    """Without the puppet data function the compound rule cannot match."""
    assert not evaluate(
        "example15", caller_id="uid=700", action="restart", facts={"environment": "development"}
    )


def test_space_separated_rule():
    """uid=500 * * * without tabs."""
    assert evaluate("spaces", caller_id="uid=500")
    assert not evaluate("spaces", caller_id="uid=501")
