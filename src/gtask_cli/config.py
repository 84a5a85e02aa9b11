"""Configuration management for gtask-cli."""

import json
from pathlib import Path
from typing import Any, Literal, Optional

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, Field

APP_DIR_NAME = "gtask-cli"


class APIConfig(BaseModel):
    """API configuration."""

    endpoint: str = Field(default="https://tasks.googleapis.com/tasks/v1")
    timeout: int = Field(default=30)


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["table", "json", "yaml"] = Field(default="table")


class CacheConfig(BaseModel):
    """Local mirror configuration."""

    enabled: bool = Field(default=True)
    ttl: int = Field(default=300)


class Config(BaseModel):
    """Main configuration."""

    api: APIConfig = Field(default_factory=APIConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)


def _lookup(config: Config, key: str) -> Any:
    value: Any = config
    for k in key.split("."):
        if not isinstance(value, BaseModel) or k not in type(value).model_fields:
            return None
        value = getattr(value, k)
    return value


class ConfigManager:
    """Manages gtask-cli configuration and stored credentials."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir(APP_DIR_NAME))
        self.data_dir = Path(user_data_dir(APP_DIR_NAME))
        self.config_file = self.config_dir / f"{profile}.json"
        self.credentials_file = self.data_dir / f"{profile}.credentials.json"

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Load configuration from file, falling back to defaults."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r") as f:
                    data = json.load(f)
                return Config(**data)
            except Exception:
                # Corrupted config behaves like no config
                return Config()
        return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        with open(self.config_file, "w") as f:
            json.dump(config.model_dump(), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key, or None if unknown."""
        return _lookup(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name a configuration value
            pydantic.ValidationError: If the value has the wrong type
        """
        if _lookup(Config(), key) is None:
            raise KeyError(key)

        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            current = current[k]
        current[keys[-1]] = value

        self._config = Config(**config_dict)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset one key, or the whole configuration, to defaults."""
        if key is None:
            self._config = Config()
            self.save_config()
            return
        default = _lookup(Config(), key)
        if isinstance(default, BaseModel):
            default = default.model_dump()
        self.set(key, default)

    def save_credentials(self, token: str, refresh_token: Optional[str] = None) -> None:
        """Save authentication credentials."""
        credentials = {"token": token}
        if refresh_token:
            credentials["refresh_token"] = refresh_token

        with open(self.credentials_file, "w") as f:
            json.dump(credentials, f, indent=2)

        # Readable only by owner
        self.credentials_file.chmod(0o600)

    def load_credentials(self) -> Optional[dict[str, str]]:
        """Load authentication credentials."""
        if self.credentials_file.exists():
            try:
                with open(self.credentials_file, "r") as f:
                    return json.load(f)
            except Exception:
                return None
        return None

    def has_credentials(self) -> bool:
        credentials = self.load_credentials()
        return bool(credentials and credentials.get("token"))

    def clear_credentials(self) -> None:
        """Clear authentication credentials."""
        if self.credentials_file.exists():
            self.credentials_file.unlink()


_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager
