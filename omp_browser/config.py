"""
Configuration management for omp-browser.

Loads the YAML configuration file, merges it over the built-in defaults
and exposes the result as a BrowserConfig dataclass.
"""

import os
import copy
import yaml
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field
from pathlib import Path

from .exceptions import ConfigError


CONFIG_ENV_VAR = "OMP_BROWSER_CONFIG"
DEFAULT_SERVERS_URL = "https://api.open.mp/servers"


def get_config_dir() -> Path:
    """Directory holding the config file, favorites and log."""
    return Path.home() / ".config" / "omp-browser"


def get_config_path() -> Path:
    """Default config file location, overridable through the environment."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return get_config_dir() / "config.yaml"


@dataclass
class BrowserConfig:
    """Main configuration for omp-browser."""
    servers_url: str = DEFAULT_SERVERS_URL
    servers_path: Optional[str] = None
    favorites_file: Path = field(default_factory=lambda: get_config_dir() / "openmp.json")
    blacklist: List[str] = field(default_factory=list)
    timeout: float = 30.0
    refresh_cooldown: float = 0.0
    game_executable: Optional[str] = None
    log_file: Optional[Path] = None
    debug: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Plain representation, suitable for yaml.safe_dump."""
        return {
            "servers_url": self.servers_url,
            "servers_path": self.servers_path,
            "favorites_file": str(self.favorites_file),
            "blacklist": list(self.blacklist),
            "timeout": self.timeout,
            "refresh_cooldown": self.refresh_cooldown,
            "game_executable": self.game_executable,
            "log_file": str(self.log_file) if self.log_file else None,
            "debug": self.debug,
        }


class ConfigLoader:
    """Loads and manages omp-browser configuration."""

    DEFAULT_CONFIG = {
        "servers_url": DEFAULT_SERVERS_URL,
        "servers_path": None,
        "favorites_file": "openmp.json",
        "blacklist": [
            "107.175.134.251:7778",  # LS City
            "107.175.134.251:7777",  # LS City
        ],
        "timeout": 30.0,
        "refresh_cooldown": 0.0,
        "game_executable": None,
        "log_file": "omp-browser.log",
        "debug": False,
    }

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = Path(config_path) if config_path else get_config_path()
        self._config: Optional[BrowserConfig] = None

    def load(self) -> BrowserConfig:
        """Load configuration from file or use defaults."""
        if self._config:
            return self._config

        config_data = copy.deepcopy(self.DEFAULT_CONFIG)

        if self.config_path.exists():
            try:
                with open(self.config_path) as f:
                    file_config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

            if file_config is not None and not isinstance(file_config, dict):
                raise ConfigError(f"{self.config_path} must contain a mapping")
            if file_config:
                self._merge_configs(config_data, file_config)

        self._config = self._build(config_data)
        return self._config

    def _build(self, data: Dict[str, Any]) -> BrowserConfig:
        base_dir = self.config_path.parent

        blacklist = data.get("blacklist") or []
        if not isinstance(blacklist, list) or not all(isinstance(a, str) for a in blacklist):
            raise ConfigError("'blacklist' must be a list of addresses")

        try:
            timeout = float(data.get("timeout", 30.0))
            refresh_cooldown = float(data.get("refresh_cooldown") or 0.0)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid numeric setting: {e}") from e

        debug = data.get("debug") or False
        if not isinstance(debug, bool):
            raise ConfigError("'debug' must be true or false")

        return BrowserConfig(
            servers_url=str(data.get("servers_url") or DEFAULT_SERVERS_URL),
            servers_path=data.get("servers_path"),
            favorites_file=self._resolve(base_dir, data.get("favorites_file") or "openmp.json"),
            blacklist=blacklist,
            timeout=timeout,
            refresh_cooldown=refresh_cooldown,
            game_executable=data.get("game_executable"),
            log_file=self._resolve(base_dir, data["log_file"]) if data.get("log_file") else None,
            debug=debug,
        )

    @staticmethod
    def _resolve(base_dir: Path, value: Any) -> Path:
        path = Path(str(value)).expanduser()
        if not path.is_absolute():
            path = base_dir / path
        return path

    def _merge_configs(self, base: Dict[str, Any], override: Dict[str, Any]):
        """Merge override config into base config."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_configs(base[key], value)
            else:
                base[key] = value
