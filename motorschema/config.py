"""Configuration loading from YAML + environment variables."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict


class MotorSchemaConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MOTORSCHEMA_")

    # Server
    host: str = "0.0.0.0"
    port: int = 8350
    log_level: str = "INFO"

    # Optional shared key for the HTTP API (X-API-Key header)
    api_key: str = ""

    # HTML -> PDF service; empty disables PDF generation
    pdf_renderer_url: str = ""
    pdf_renderer_timeout: float = 60.0
    pdf_min_bytes: int = 1000

    # Rendering
    png_scale: int = 2

    @classmethod
    def from_yaml(cls, path: str | Path = "motorschema.yaml") -> MotorSchemaConfig:
        """Load config from YAML file, with env vars taking precedence."""
        yaml_path = Path(path)
        yaml_data: dict[str, Any] = {}

        if yaml_path.exists():
            with yaml_path.open("r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
            yaml_data = _flatten_yaml(raw.get("motorschema", {}))

        # Init kwargs outrank env vars in pydantic-settings, so drop the keys
        # the environment already sets.
        env_set = {name for name in cls.model_fields if _env_name(name) in _environ()}
        return cls(**{k: v for k, v in yaml_data.items() if k not in env_set})


def _environ() -> dict[str, str]:
    return {k.upper(): v for k, v in os.environ.items()}


def _env_name(field_name: str) -> str:
    return f"MOTORSCHEMA_{field_name}".upper()


def _flatten_yaml(data: dict, prefix: str = "") -> dict:
    """Flatten nested YAML into flat key-value pairs for Pydantic."""
    flat: dict[str, Any] = {}
    for key, value in data.items():
        full_key = f"{prefix}_{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(_flatten_yaml(value, full_key))
        else:
            flat[full_key] = value
    return flat
