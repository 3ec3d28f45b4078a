"""
Environment Variable Config Adapter - Plugin options from the environment.

actionpolicy.allow_unconfigured is read from ACTIONPOLICY_ALLOW_UNCONFIGURED,
the configuration directory from ACTIONPOLICY_CONFIGDIR.
"""

import os
from pathlib import Path
from typing import Optional

from action_policy.ports.config_port import ConfigPort

DEFAULT_CONFIGDIR = "/etc/mcollective"


class EnvConfigAdapter(ConfigPort):
    """
    Environment variable-based configuration.

    Reads on every call, so changes to os.environ are picked up.
    """

    def __init__(self, prefix: str = "ACTIONPOLICY_", default_configdir: str = DEFAULT_CONFIGDIR):
        """
        Initialize env config adapter.

        Args:
            prefix: Prefix for environment variables (default ACTIONPOLICY_)
            default_configdir: Used when <prefix>CONFIGDIR is unset
        """
        self._prefix = prefix
        self._default_configdir = default_configdir

    def _env_key(self, key: str) -> str:
        """Convert an option name to its env var name."""
        name = key.split(".", 1)[1] if "." in key else key
        return f"{self._prefix}{name.upper().replace('.', '_')}"

    @property
    def configdir(self) -> Path:
        return Path(os.environ.get(f"{self._prefix}CONFIGDIR", self._default_configdir))

    def plugin_option(self, key: str) -> Optional[str]:
        return os.environ.get(self._env_key(key))
