"""
Unit tests for field matchers.
"""

import pytest
from action_policy.domain.fields import (
    is_wildcard,
    token_list_contains,
    caller_in_caller_ids,
    action_in_actions,
    is_compound,
    regex_pattern,
)


def test_wildcard():
    """Only a bare * is a wildcard."""
    assert is_wildcard("*")
    assert not is_wildcard("**")
    assert not is_wildcard("* rspec")
    assert not is_wildcard(None)


def test_token_list_contains_any_token():
    """A field matches if any of its tokens equals the candidate."""
    assert token_list_contains("status restart stop", "restart")
    assert not token_list_contains("status restart stop", "start")
    assert not token_list_contains("", "start")
    assert not token_list_contains(None, "start")


def test_token_list_contains_is_exact():
    """No prefix or substring matching."""
    assert not token_list_contains("uid=500", "uid=50")
    assert not token_list_contains("uid=5000", "uid=500")


def test_caller_and_action_wildcards():
    """Wildcard fields match any caller or action."""
    assert caller_in_caller_ids("*", "uid=500")
    assert caller_in_caller_ids("uid=500 uid=600", "uid=600")
    assert not caller_in_caller_ids("uid=500", "uid=501")

    assert action_in_actions("*", "anything")
    assert action_in_actions("rspec", "rspec")
    assert not action_in_actions("rspec", "notrspec")


@pytest.mark.parametrize("field", [
    "not",
    "!rspec",
    "and",
    "or",
    "data('field').value=othervalue",
    "foo=bar and bar=foo",
    "uptime()>=3600",
])
def test_is_compound(field):
    """Connectives, negation and data function calls are compound."""
    assert is_compound(field)


@pytest.mark.parametrize("field", [
    "f1=v1 f1=v2",
    "class1 class2 /class*/",
    "*",
    "andrew=1 order",
    "/web(server)?/",
    "one /^(db|web)\\d+$/",
    "",
])
def test_is_not_compound(field):
    """Plain token lists are not compound."""
    assert not is_compound(field)


def test_regex_pattern():
    """Only /pattern/ tokens carry a pattern."""
    assert regex_pattern("/^acme::/") == "^acme::"
    assert regex_pattern("acme") is None
    assert regex_pattern("//") is None
