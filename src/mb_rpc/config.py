"""Centralized application configuration."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

DEFAULT_DATA_DIR = Path.home() / ".local" / "mb-rpc"


class Config(BaseModel):
    """Application-wide configuration: target server, credentials, and timeout."""

    model_config = ConfigDict(frozen=True)

    data_dir: Path = Field(description="Base directory for configuration and logs")
    url: str | None = Field(default=None, description="JSON-RPC server URL")
    timeout: float = Field(default=60.0, gt=0, description="Per-call timeout in seconds")
    username: str | None = Field(default=None, description="HTTP basic auth username")
    password: str | None = Field(default=None, description="HTTP basic auth password")

    @computed_field(description="Optional TOML configuration file")
    @property
    def config_path(self) -> Path:
        """Optional TOML configuration file."""
        return self.data_dir / "config.toml"

    @computed_field(description="Log file")
    @property
    def log_path(self) -> Path:
        """Log file."""
        return self.data_dir / "rpc.log"

    @property
    def has_auth(self) -> bool:
        """Check if both basic auth credentials are set."""
        return self.username is not None and self.password is not None

    @staticmethod
    def build(data_dir: Path | None = None, **overrides: Any) -> "Config":  # noqa: ANN401
        """Build a Config from defaults, optional config.toml, and non-None overrides (e.g. CLI options)."""
        resolved_dir = data_dir if data_dir is not None else DEFAULT_DATA_DIR
        config_path = resolved_dir / "config.toml"

        kwargs: dict[str, Any] = {"data_dir": resolved_dir}
        if config_path.is_file():
            with config_path.open("rb") as f:
                toml_data = tomllib.load(f)
            for key in ("url", "username", "password"):
                if isinstance(toml_data.get(key), str):
                    kwargs[key] = toml_data[key]
            if isinstance(toml_data.get("timeout"), int | float):
                kwargs["timeout"] = toml_data["timeout"]

        kwargs.update({key: value for key, value in overrides.items() if value is not None})
        return Config(**kwargs)
