"""Application configuration.

The defaults suit the shipped lessons; a JSON file and command-line flags
can override them.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).parent / "data" / "lessons"
DEFAULT_CONFIG_PATH = Path(__file__).parent / "tutor.json"


class TutorConfig(BaseModel):
    """Top-level configuration for the tutor."""

    data_dir: Path = DEFAULT_DATA_DIR
    total_days: int = Field(default=21, ge=1)  # planned course length
    log_level: str = "WARNING"
    log_file: Path | None = None
    countdown_interval: float = Field(default=1.0, gt=0.0)  # seconds per tick

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level


def load_config(path: Path | None = None) -> TutorConfig:
    """Load configuration from a JSON file, or defaults if it doesn't exist.

    Args:
        path: Path to the JSON file. Defaults to tutor.json next to this module.

    Returns:
        The validated configuration.
    """
    config_path = path or DEFAULT_CONFIG_PATH
    if not config_path.exists():
        if path is not None:
            logger.warning("Config file %s not found, using defaults", config_path)
        return TutorConfig()

    config = TutorConfig.model_validate_json(config_path.read_text(encoding="utf-8"))
    logger.info("Loaded configuration from %s", config_path)
    return config
