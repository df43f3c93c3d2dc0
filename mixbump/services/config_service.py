"""
Configuration Service

Loads the optional per-project ``.mixbump.json`` file. Every key is
optional; command-line flags override whatever the file says.
"""

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from mixbump.core.errors import ConfigError
from mixbump.core.precommit import DEFAULT_ALIAS, default_steps

logger = logging.getLogger("MixBump.ConfigService")

CONFIG_FILENAME = ".mixbump.json"


@dataclass
class MixbumpConfig:
    file: str = "mix.exs"
    alias: str = DEFAULT_ALIAS
    steps: List[str] = field(default_factory=default_steps)
    against: str = "HEAD"
    color: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


class ConfigService:
    """
    Service class for configuration management.

    Provides:
    - Configuration loading with defaults
    - Type validation
    - Configuration saving
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config service.

        Args:
            config_path: Path to config file (default: ./.mixbump.json)
        """
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILENAME
        self.config_path = Path(config_path)

    def load(self) -> MixbumpConfig:
        """
        Load configuration from file.

        Returns:
            Defaults when the file does not exist

        Raises:
            ConfigError: If the file is not valid JSON or a value has the wrong type
        """
        if not self.config_path.exists():
            logger.debug(f"No config file at {self.config_path}, using defaults")
            return MixbumpConfig()

        try:
            with self.config_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Error parsing {self.config_path}: {e}")
            raise ConfigError(
                f"Error parsing {self.config_path}: {e}\n"
                "Please ensure it is valid JSON."
            ) from e
        except OSError as e:
            raise ConfigError(f"Could not read {self.config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"{self.config_path} must contain a JSON object")

        config = self._from_dict(data)
        logger.info(f"Configuration loaded from {self.config_path}")
        return config

    def save(self, config: MixbumpConfig) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with self.config_path.open("w", encoding="utf-8") as f:
            json.dump(config.to_dict(), f, indent=4)
        logger.info(f"Configuration saved to {self.config_path}")

    def _from_dict(self, data: Dict[str, Any]) -> MixbumpConfig:
        config = MixbumpConfig()
        known = {f.name for f in fields(MixbumpConfig)}

        for key, value in data.items():
            if key not in known:
                logger.warning(f"Ignoring unknown config key {key!r} in {self.config_path}")
                continue
            if key == "steps":
                if not isinstance(value, list) or not value or not all(isinstance(s, str) for s in value):
                    raise ConfigError(f"'steps' in {self.config_path} must be a non-empty list of strings")
            elif key == "color":
                if not isinstance(value, bool):
                    raise ConfigError(f"'color' in {self.config_path} must be true or false")
            elif not isinstance(value, str) or not value.strip():
                raise ConfigError(f"{key!r} in {self.config_path} must be a non-empty string")
            setattr(config, key, value)

        return config
