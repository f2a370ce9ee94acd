"""
Configuration loader with priority: CLI > env > TOML > defaults
"""
import os
import tomllib
from pathlib import Path
from typing import Dict, Any, Optional

from ...core.config import ConnectionConfig
from ...core.constants import (
    DEFAULT_SSH_HOST,
    DEFAULT_SSH_PORT,
    DEFAULT_SSH_USER,
    ENV_PREFIX,
)
from ...core.exceptions import ConfigError
from ...core.keys import load_private_key
from ...core.utils import load_ssh_config

CONFIG_KEYS = ("host", "port", "user", "key", "timeout", "ssh_config")


class ConfigLoader:
    """Configuration loader with priority support"""

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        self._environ = os.environ if environ is None else environ

    def defaults(self) -> Dict[str, Any]:
        return {
            "host": DEFAULT_SSH_HOST,
            "port": DEFAULT_SSH_PORT,
            "user": DEFAULT_SSH_USER,
        }

    def load_toml(self, path: Path) -> Dict[str, Any]:
        """
        Load TOML configuration file.

        Settings may sit at the top level or in a [snips] table.
        """
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            data = tomllib.loads(path.read_text(encoding='utf-8'))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Failed to parse TOML configuration: {e}") from e

        table = data.get("snips", data)
        return {key: table[key] for key in CONFIG_KEYS if key in table}

    def load_env(self) -> Dict[str, Any]:
        """Load configuration from SNIPS_* environment variables"""
        config = {}
        for key in CONFIG_KEYS:
            value = self._environ.get(ENV_PREFIX + key.upper())
            if value:
                config[key] = value
        return config

    def merge_configs(self, *configs: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge multiple configurations with priority.
        Later configs override earlier ones; None values never override.
        """
        result: Dict[str, Any] = {}
        for config in configs:
            result.update({k: v for k, v in config.items() if v is not None})
        return result

    def load(
        self,
        toml_path: Optional[Path] = None,
        cli_overrides: Optional[Dict[str, Any]] = None,
        use_env: bool = True,
    ) -> Dict[str, Any]:
        """
        Load configuration with priority: CLI > env > TOML > defaults

        Args:
            toml_path: Path to TOML configuration file
            cli_overrides: CLI parameter overrides
            use_env: Whether to load from environment variables

        Returns:
            Merged configuration dictionary
        """
        configs = [self.defaults()]

        if toml_path:
            configs.append(self.load_toml(toml_path))

        if use_env:
            configs.append(self.load_env())

        if cli_overrides:
            configs.append(cli_overrides)

        merged = self.merge_configs(*configs)

        # Explicit settings still win over the ssh_config alias
        if merged.get("ssh_config"):
            alias = load_ssh_config(merged["ssh_config"])
            resolved = {
                "host": alias["host"],
                "user": alias["user"],
                "port": alias["port"],
                "key": alias["key_file"],
            }
            explicit = self.merge_configs(*configs[1:])
            merged = self.merge_configs(self.defaults(), resolved, explicit)

        return merged


def build_connection_config(params: Dict[str, Any]) -> ConnectionConfig:
    """
    Build a ConnectionConfig from merged parameters.

    Raises:
        ConfigError: On a bad port/timeout or an unreadable key file
    """
    try:
        port = int(params.get("port", DEFAULT_SSH_PORT))
        timeout = float(params["timeout"]) if params.get("timeout") is not None else None
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid port or timeout: {e}") from e

    if not (1 <= port <= 65535):
        raise ConfigError(f"Invalid port: {port}")

    private_key = load_private_key(params["key"]) if params.get("key") else None

    return ConnectionConfig(
        host=params.get("host", DEFAULT_SSH_HOST),
        port=port,
        username=params.get("user", DEFAULT_SSH_USER),
        private_key=private_key,
        timeout=timeout,
    )
