"""
Memory Config Adapter - Plugin options held in a dict.
"""

from pathlib import Path
from typing import Dict, Optional, Union

from action_policy.ports.config_port import ConfigPort


class MemoryConfigAdapter(ConfigPort):
    """
    In-memory configuration.

    Example:
        config = MemoryConfigAdapter(
            "/etc/mcollective",
            {"actionpolicy.allow_unconfigured": "1"},
        )
    """

    def __init__(
        self,
        configdir: Union[str, Path],
        options: Optional[Dict[str, str]] = None,
    ):
        self._configdir = Path(configdir)
        self._options: Dict[str, str] = dict(options or {})

    @property
    def configdir(self) -> Path:
        return self._configdir

    def plugin_option(self, key: str) -> Optional[str]:
        return self._options.get(key)

    def set_option(self, key: str, value: str) -> None:
        self._options[key] = value
