"""
SDK - High-level authorization entry points.
"""

from action_policy.sdk.authorizer import ActionPolicy, authorize

__all__ = ["ActionPolicy", "authorize"]
