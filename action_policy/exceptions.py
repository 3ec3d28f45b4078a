"""
Exceptions raised by the authorization engine.

Only AuthorizationDenied ever reaches callers of ActionPolicy.authorize().
The others are raised internally and absorbed into a False match.
"""


class ActionPolicyError(Exception):
    """Base class for all action policy errors."""


class AuthorizationDenied(ActionPolicyError):
    """
    Raised when a request is not authorized.

    Callers must treat this as "reject the request", never as a retryable
    condition. The audit reason is kept in `reason`.
    """

    message = "You are not authorized to call this agent or action."

    def __init__(self, reason: str):
        super().__init__(f"{self.message} ({reason})")
        self.reason = reason


class MalformedFieldError(ActionPolicyError):
    """A fact was found where a class was expected, or the other way round."""


class CompoundSyntaxError(ActionPolicyError):
    """A compound expression could not be tokenized or evaluated."""


class DataFunctionError(ActionPolicyError):
    """A data function statement could not be evaluated."""
