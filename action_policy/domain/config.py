"""
Engine Configuration - Plugin options resolved once per authorization.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from action_policy.ports.config_port import ConfigPort

TRUTHY_VALUES = {"1", "y", "yes", "true"}

OPTION_PREFIX = "actionpolicy"


def is_truthy(value: Optional[str]) -> bool:
    """Interpret a plugin option string as a boolean."""
    if value is None:
        return False
    return value.strip().lower() in TRUTHY_VALUES


@dataclass(frozen=True)
class EngineConfig:
    """
    Resolved engine configuration.

    Domain rules:
    - enable_default takes precedence over allow_unconfigured: when both are
      set the default policy file is always tried first
    - group_file of None means "use policies/groups under configdir"
    """
    configdir: Path
    allow_unconfigured: bool = False
    enable_default: bool = False
    default_name: str = "default"
    group_file: Optional[Path] = None

    @property
    def policy_dir(self) -> Path:
        return self.configdir / "policies"

    def resolve_group_file(self) -> Path:
        """Return the configured group file, or the conventional location."""
        if self.group_file is not None:
            return self.group_file
        return self.policy_dir / "groups"

    @classmethod
    def from_config(cls, config: ConfigPort) -> "EngineConfig":
        """Build from a configuration source."""
        def option(name: str) -> Optional[str]:
            return config.plugin_option(f"{OPTION_PREFIX}.{name}")

        default_name = option("default_name")
        group_file = option("groupfile")

        return cls(
            configdir=Path(config.configdir),
            allow_unconfigured=is_truthy(option("allow_unconfigured")),
            enable_default=is_truthy(option("enable_default")),
            default_name=default_name.strip() if default_name else "default",
            group_file=Path(group_file.strip()) if group_file else None,
        )
