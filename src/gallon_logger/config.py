"""Configuration management for Gallon Logger."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 600.0
DEFAULT_APP_ID = "default-app-id"


def _find_repo_root(start_dir: Path) -> Path:
    """Find repository root by walking upward looking for .git or pyproject.toml."""
    current_dir = start_dir

    while True:
        if (current_dir / ".git").exists() or (current_dir / "pyproject.toml").exists():
            return current_dir

        parent_dir = current_dir.parent

        # Stop at filesystem root
        if parent_dir == current_dir:
            return start_dir

        current_dir = parent_dir


def _load_repo_config_data(repo_root: Path) -> Optional[dict]:
    """Load .gallon_logger/config.toml from the repo root if it exists."""
    config_file = repo_root / ".gallon_logger" / "config.toml"

    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        # If config file is malformed, ignore it
        logger.warning(f"Ignoring unreadable config {config_file}: {e}")
        return None


def _env_float(name: str, fallback: float) -> float:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return fallback
    try:
        return float(value)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got: {value}")


def _env_int(name: str, fallback: int) -> int:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return fallback
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} must be a whole number, got: {value}")


class GallonLoggerConfig(BaseModel):
    """Configuration for the ledger, its store and the CLI defaults."""

    data_path: Path = Field(default_factory=lambda: Path("./gallon_data"))
    app_id: str = Field(default=DEFAULT_APP_ID)
    operator_id: Optional[str] = Field(default=None)

    # Tank and precision settings; defaults keep the stored records compatible
    default_capacity: float = Field(default=DEFAULT_CAPACITY, gt=0)
    refill_tolerance: float = Field(default=0.01, ge=0)
    volume_decimals: int = Field(default=2, ge=0)
    ratio_decimals: int = Field(default=4, ge=0)

    # Prefilled environmental conditions
    default_temperature: float = Field(default=70)
    default_wind_direction: str = Field(default="South West")
    default_wind_speed: float = Field(default=5)

    @classmethod
    def from_env(
        cls,
        cli_data_path: Optional[str] = None,
        cli_operator_id: Optional[str] = None,
    ) -> "GallonLoggerConfig":
        """Load configuration with the following precedence:

        1. CLI options (--data, --operator)
        2. repo-local .gallon_logger/config.toml (walk upward from CWD)
        3. GALLON_LOGGER_* environment variables
        4. Defaults

        Args:
            cli_data_path: Data directory from CLI --data option
            cli_operator_id: Operator id from CLI --operator option

        Raises:
            ConfigError: If an environment variable or config value is invalid
        """
        repo_config = _load_repo_config_data(_find_repo_root(Path.cwd())) or {}
        ledger_section = repo_config.get("ledger") if isinstance(repo_config.get("ledger"), dict) else {}
        defaults_section = repo_config.get("defaults") if isinstance(repo_config.get("defaults"), dict) else {}

        data_path = (
            cli_data_path
            or repo_config.get("data_path")
            or os.environ.get("GALLON_LOGGER_DATA_PATH")
            or "./gallon_data"
        )
        operator_id = (
            cli_operator_id
            or repo_config.get("operator_id")
            or os.environ.get("GALLON_LOGGER_OPERATOR")
        )

        try:
            return cls(
                data_path=Path(str(data_path)).expanduser(),
                app_id=repo_config.get("app_id") or os.environ.get("GALLON_LOGGER_APP_ID", DEFAULT_APP_ID),
                operator_id=operator_id,
                default_capacity=ledger_section.get(
                    "default_capacity", _env_float("GALLON_LOGGER_DEFAULT_CAPACITY", DEFAULT_CAPACITY)
                ),
                refill_tolerance=ledger_section.get(
                    "refill_tolerance", _env_float("GALLON_LOGGER_REFILL_TOLERANCE", 0.01)
                ),
                volume_decimals=ledger_section.get("volume_decimals", _env_int("GALLON_LOGGER_VOLUME_DECIMALS", 2)),
                ratio_decimals=ledger_section.get("ratio_decimals", _env_int("GALLON_LOGGER_RATIO_DECIMALS", 4)),
                default_temperature=defaults_section.get("temperature", 70),
                default_wind_direction=defaults_section.get("wind_direction", "South West"),
                default_wind_speed=defaults_section.get("wind_speed", 5),
            )
        except PydanticValidationError as e:
            fields = ", ".join(".".join(str(part) for part in err["loc"]) for err in e.errors())
            raise ConfigError(f"Invalid configuration value for: {fields}") from e

    def to_toml_str(self) -> str:
        """Generate a starter .gallon_logger/config.toml."""
        operator_line = f'operator_id = "{self.operator_id}"\n' if self.operator_id else ""
        return f"""# Gallon Logger configuration

data_path = "{self.data_path}"
app_id = "{self.app_id}"
{operator_line}
[ledger]
default_capacity = {self.default_capacity}
refill_tolerance = {self.refill_tolerance}
volume_decimals = {self.volume_decimals}
ratio_decimals = {self.ratio_decimals}

[defaults]
temperature = {self.default_temperature}
wind_direction = "{self.default_wind_direction}"
wind_speed = {self.default_wind_speed}
"""
