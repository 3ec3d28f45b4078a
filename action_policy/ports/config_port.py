"""
Configuration Port - Interface for reading plugin options.

Implementations:
- MemoryConfigAdapter: options held in a dict
- ServerConfigAdapter: server.cfg style key = value file
- EnvConfigAdapter: environment variables
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional


class ConfigPort(ABC):
    """Port: Read plugin options and the configuration directory."""

    @property
    @abstractmethod
    def configdir(self) -> Path:
        """
        Base directory holding the policies/ subdirectory.
        """
        pass

    @abstractmethod
    def plugin_option(self, key: str) -> Optional[str]:
        """
        Read a plugin option.

        Args:
            key: Option name, e.g. actionpolicy.allow_unconfigured

        Returns:
            Raw option string, or None if unset
        """
        pass
