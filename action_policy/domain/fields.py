"""
Field Matchers - Pure classification and matching of policy fields.

A policy field is a string of whitespace-separated tokens. A request
matches a plain field if it matches any one of its tokens.
"""

import re
from typing import Optional

WILDCARD = "*"

CONNECTIVES = {"and", "or", "not"}

# name('arg') or name() marks a data function call
_FUNCTION_CALL = re.compile(r"^\w+\(.*\)")


def is_wildcard(field: Optional[str]) -> bool:
    """True iff the field is the bare wildcard."""
    return field == WILDCARD


def token_list_contains(field: Optional[str], candidate: str) -> bool:
    """True if any whitespace-separated token of field equals candidate."""
    if not field:
        return False
    return candidate in field.split()


def caller_in_caller_ids(callers: Optional[str], caller_id: str) -> bool:
    """Check a callers field against a caller id (wildcard matches all)."""
    return is_wildcard(callers) or token_list_contains(callers, caller_id)


def action_in_actions(actions: Optional[str], action: str) -> bool:
    """Check an actions field against a requested action (wildcard matches all)."""
    return is_wildcard(actions) or token_list_contains(actions, action)


def is_fact_token(token: str) -> bool:
    """Facts are key=value; anything else is a class."""
    return "=" in token


def regex_pattern(token: str) -> Optional[str]:
    """Return the pattern of a /pattern/ token, or None for a plain token."""
    if len(token) > 2 and token.startswith("/") and token.endswith("/"):
        return token[1:-1]
    return None


def is_compound(field: Optional[str]) -> bool:
    """
    Classify a field as a compound expression or a plain token list.

    A field is compound if any token is a connective (and, or, not),
    starts with "!", or is a data function call. /pattern/ tokens are
    never calls, whatever they contain.
    """
    if not field:
        return False

    for token in field.split():
        if token in CONNECTIVES or token.startswith("!"):
            return True
        if regex_pattern(token) is None and _FUNCTION_CALL.match(token):
            return True

    return False
