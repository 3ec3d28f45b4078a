"""
Policy Locator - Find the policy file that applies to an agent.
"""

import logging
import re
from pathlib import Path
from typing import Optional

from action_policy.domain.config import EngineConfig

logger = logging.getLogger(__name__)

POLICY_SUFFIX = ".policy"

# no path separators, no leading dot, so names stay inside policies/
_AGENT_NAME = re.compile(r"^\w[\w.-]*$")


def is_valid_agent_name(agent: str) -> bool:
    """True if agent can safely name a file under policies/."""
    return bool(agent) and _AGENT_NAME.match(agent) is not None


def locate_policy_file(agent: str, config: EngineConfig) -> Optional[Path]:
    """
    Look up the policy file for an agent.

    Tries policies/<agent>.policy, then, if enable_default is set,
    policies/<default_name>.policy.

    Returns:
        Path of the policy file, or None if neither exists or the agent
        name is not a plain file name
    """
    if not is_valid_agent_name(agent):
        logger.warning("Refusing to look up policy for agent name %r", agent)
        return None

    policy_file = config.policy_dir / f"{agent}{POLICY_SUFFIX}"

    logger.debug("Looking for policy in %s", policy_file)

    if policy_file.exists():
        return policy_file

    if config.enable_default:
        default_policy = config.policy_dir / f"{config.default_name}{POLICY_SUFFIX}"
        logger.debug("Looking for default policy in %s", default_policy)

        if default_policy.exists():
            return default_policy

    return None
