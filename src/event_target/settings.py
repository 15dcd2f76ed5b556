from __future__ import annotations

import logging
import os
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import SettingsError
from .registry import ErrorPolicy

logger = logging.getLogger(__name__)

ENV_ERROR_POLICY = "EVENT_TARGET_ERROR_POLICY"
ENV_LOG_LEVEL = "EVENT_TARGET_LOG_LEVEL"

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class Settings(BaseModel):
    """Runtime settings for registries created by the CLI and demo.

    Values come from the packaged ``config/default_settings.yaml``, an optional
    user YAML file and finally the ``EVENT_TARGET_*`` environment variables.
    """

    error_policy: ErrorPolicy = Field(ErrorPolicy.ISOLATE, description="Listener failure handling in dispatch")
    log_level: str = Field("INFO", description="Name of a standard logging level")

    @field_validator("error_policy", mode="before")
    @classmethod
    def normalise_policy(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("log_level")
    @classmethod
    def known_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LEVELS:
            raise ValueError(f"unknown log level '{v}'")
        return level

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)

    @staticmethod
    def _load_yaml(path: Path) -> Dict[str, Any]:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise SettingsError(f"Could not read settings from {path}: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise SettingsError(f"Settings file {path} must contain a mapping")
        return data

    @staticmethod
    def _load_defaults() -> Dict[str, Any]:
        try:
            with resources.files("event_target.config").joinpath("default_settings.yaml").open("r", encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Default settings not found; falling back to model defaults.")
            return {}

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "Settings":
        """Load defaults, overlay the optional user file, then apply env overrides.

        Raises:
            SettingsError: If a file is unreadable or a value is invalid.
        """
        data = cls._load_defaults()

        if user_path is not None:
            if user_path.exists():
                data.update(cls._load_yaml(user_path))
                logger.info("Loaded user settings from %s", user_path)
            else:
                logger.warning("User settings file not found: %s", user_path)

        if os.getenv(ENV_ERROR_POLICY):
            data["error_policy"] = os.environ[ENV_ERROR_POLICY]
        if os.getenv(ENV_LOG_LEVEL):
            data["log_level"] = os.environ[ENV_LOG_LEVEL]

        try:
            settings = cls(**data)
        except ValidationError as exc:
            raise SettingsError(f"Invalid settings: {exc}") from exc
        logger.debug("Settings loaded: %s", settings)
        return settings

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(self.model_dump(mode="json"), f, sort_keys=False)
        logger.info("Saved settings to %s", path)
