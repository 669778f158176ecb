# gemini_chat/config.py
"""
Client Configuration
====================

Type-safe Pydantic settings, loaded from the environment (and ``.env``).
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from gemini_chat.core import ChatCompleteModel

logger = logging.getLogger(__name__)

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "GOOGLE_KEY")


class ClientConfig(BaseModel):
    """Settings for a Gemini client."""

    api_key: str = Field(..., min_length=1, description="Google API key")
    default_model: str = Field(
        default=ChatCompleteModel.GEMINI_2_5_FLASH.value,
        description="Model used when a completer is created without one",
    )
    timeout: float | None = Field(
        default=None, gt=0, description="Stream deadline in seconds"
    )
    log_level: str | None = Field(default=None, description="Package log level")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_env(cls, **overrides: Any) -> ClientConfig:
        """
        Build settings from environment variables.

        Explicit, non-None ``overrides`` win over the environment.

        Raises:
            ValueError: if no API key is available
        """
        load_dotenv()

        api_key = overrides.pop("api_key", None)
        if not api_key:
            api_key = next(
                (os.environ[name] for name in API_KEY_ENV_VARS if os.getenv(name)),
                None,
            )
        if not api_key:
            raise ValueError("GEMINI_API_KEY / GOOGLE_API_KEY env var not set")

        values: dict[str, Any] = {"api_key": api_key}
        if model := os.getenv("GEMINI_CHAT_MODEL"):
            values["default_model"] = model
        if timeout := os.getenv("GEMINI_CHAT_TIMEOUT"):
            values["timeout"] = timeout
        if level := os.getenv("LOGLEVEL"):
            values["log_level"] = level.upper()

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: str | Path) -> ClientConfig:
        """
        Build settings from a YAML file.

        The file holds a ``gemini`` section (or the settings at top level)::

            gemini:
              api_key_env: GEMINI_API_KEY
              default_model: models/gemini-2.5-pro
              timeout: 30

        ``api_key_env`` names the variable holding the key; without it the
        usual environment variables are consulted.
        """
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping")

        section = (data["gemini"] if "gemini" in data else data) or {}
        if not isinstance(section, dict):
            raise ValueError(f"{path}: expected a mapping in the gemini section")
        settings = {k: v for k, v in section.items() if k != "api_key_env"}
        if key_env := section.get("api_key_env"):
            settings.setdefault("api_key", os.getenv(key_env))

        logger.info("Loaded configuration from %s", path)
        return cls.from_env(**settings)
