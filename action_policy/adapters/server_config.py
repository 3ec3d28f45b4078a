"""
Server Config Adapter - Options from a server.cfg style file.

    # /etc/mcollective/server.cfg
    plugin.actionpolicy.allow_unconfigured = 1
    plugin.actionpolicy.enable_default = 1
    plugin.actionpolicy.default_name = fleet

Keys under "plugin." are plugin options. The configuration directory is
the file's directory unless a "configdir" key says otherwise.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from action_policy.ports.config_port import ConfigPort

logger = logging.getLogger(__name__)

PLUGIN_PREFIX = "plugin."


class ServerConfigAdapter(ConfigPort):
    """
    File-backed configuration, parsed once on construction.

    Raises:
        FileNotFoundError: If the config file does not exist
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize server config adapter.

        Args:
            path: Config file path
        """
        self._path = Path(path)
        self._settings: Dict[str, str] = {}
        self._options: Dict[str, str] = {}
        self._load()

    @property
    def configdir(self) -> Path:
        configdir = self._settings.get("configdir")
        if configdir:
            return Path(configdir)
        return self._path.parent

    def plugin_option(self, key: str) -> Optional[str]:
        return self._options.get(key)

    def setting(self, key: str) -> Optional[str]:
        """Read a top level (non-plugin) setting."""
        return self._settings.get(key)

    def _load(self) -> None:
        content = self._path.read_text(encoding="utf-8")

        for number, line in enumerate(content.splitlines(), start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue

            key, sep, value = stripped.partition("=")
            if not sep:
                logger.warning("Ignoring line %d of %s: %r", number, self._path, stripped)
                continue

            key, value = key.strip(), value.strip()
            if key.startswith(PLUGIN_PREFIX):
                self._options[key[len(PLUGIN_PREFIX):]] = value
            else:
                self._settings[key] = value
