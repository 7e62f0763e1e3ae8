"""
Settings for Sooner (args/sooner.yaml + environment).

The YAML file provides defaults for a deployment; environment variables
(optionally loaded from .env by python-dotenv) override individual values.
Every field has a default, so a missing or invalid file still yields a
usable configuration.

Usage:
    from sooner.config import load_settings

    settings = load_settings()
    settings.tasks.page_size  # 9
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sooner import CONFIG_PATH, DATA_DIR

logger = logging.getLogger(__name__)

DEV_JWT_SECRET = "dev-secret-change-me"


# =============================================================================
# Settings models (args/sooner.yaml)
# =============================================================================


class ServerConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3000, ge=1, le=65535)
    allowed_origins: list[str] = Field(default_factory=lambda: ["*"])


class StoreConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    data_file: str = Field(default=str(DATA_DIR / "users.json"))
    strict: bool = Field(default=True)


class AuthConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    mode: Literal["token", "header"] = Field(default="token")
    token_ttl_hours: int = Field(default=24, ge=1)
    jwt_algorithm: str = Field(default="HS256")
    jwt_secret: str = Field(default="", repr=False)


class TasksConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    page_size: int = Field(default=9, ge=1)
    pagination_mode: Literal["cumulative", "window"] = Field(default="cumulative")


class AssistantConfig(BaseModel):
    model_config = ConfigDict(extra="allow")
    provider: Literal["canned", "openai"] = Field(default="canned")
    model: str = Field(default="gpt-4o")
    delay_seconds: float = Field(default=2.0, ge=0)
    timeout_seconds: float = Field(default=30.0, gt=0)
    api_key: str = Field(default="", repr=False)


class Settings(BaseModel):
    model_config = ConfigDict(extra="allow")
    server: ServerConfig = Field(default_factory=ServerConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    tasks: TasksConfig = Field(default_factory=TasksConfig)
    assistant: AssistantConfig = Field(default_factory=AssistantConfig)

    def public_view(self) -> dict:
        """Settings safe to show to an admin (no secrets, no paths)."""
        return {
            "auth": {"mode": self.auth.mode, "token_ttl_hours": self.auth.token_ttl_hours},
            "tasks": self.tasks.model_dump(),
            "assistant": {
                "provider": self.assistant.provider,
                "model": self.assistant.model,
                "timeout_seconds": self.assistant.timeout_seconds,
            },
        }


# =============================================================================
# Loading
# =============================================================================

# env var -> (section, field)
ENV_OVERRIDES = {
    "SOONER_DATA_FILE": ("store", "data_file"),
    "SOONER_STORE_STRICT": ("store", "strict"),
    "SOONER_AUTH_MODE": ("auth", "mode"),
    "SOONER_JWT_SECRET": ("auth", "jwt_secret"),
    "SOONER_PAGINATION_MODE": ("tasks", "pagination_mode"),
    "SOONER_ASSISTANT_PROVIDER": ("assistant", "provider"),
    "SOONER_ASSISTANT_MODEL": ("assistant", "model"),
    "OPENAI_API_KEY": ("assistant", "api_key"),
    "SOONER_HOST": ("server", "host"),
    "SOONER_PORT": ("server", "port"),
}


SECTION_MODELS: dict[str, type[BaseModel]] = {
    "server": ServerConfig,
    "store": StoreConfig,
    "auth": AuthConfig,
    "tasks": TasksConfig,
    "assistant": AssistantConfig,
}


def _validate_section(name: str, model: type[BaseModel], values: dict) -> BaseModel:
    """Validate one section, dropping only the fields that are invalid."""
    try:
        return model.model_validate(values)
    except ValidationError as e:
        bad = {str(err["loc"][0]) for err in e.errors() if err["loc"]}
        logger.warning(f"Invalid {name} settings ({', '.join(sorted(bad))}), using defaults for those fields")
        return model.model_validate({k: v for k, v in values.items() if k not in bad})


def _read_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a mapping at the top level")
    return raw


def _apply_env(raw: dict, env: Mapping[str, str]) -> dict:
    merged = {section: dict(values or {}) for section, values in raw.items() if isinstance(values, dict)}
    for name, (section, key) in ENV_OVERRIDES.items():
        value = env.get(name)
        if value is None or value.strip() == "":
            continue
        merged.setdefault(section, {})[key] = value.strip()
    return merged


def load_settings(path: str | Path | None = None, env: Mapping[str, str] | None = None) -> Settings:
    """
    Load settings from YAML, then apply environment overrides.

    Args:
        path: YAML file; defaults to $SOONER_CONFIG or args/sooner.yaml
        env: Environment mapping; defaults to os.environ

    Returns:
        Validated Settings. An unreadable file counts as empty; an invalid
        value falls back to its default without touching the others.
    """
    if env is None:
        env = os.environ
    if path is None:
        path = env.get("SOONER_CONFIG") or CONFIG_PATH
    path = Path(path)

    try:
        raw = _read_yaml(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning(f"Could not read config {path}: {e}, using defaults")
        raw = {}

    merged = _apply_env(raw, env)
    sections = {name: _validate_section(name, model, merged.pop(name, {})) for name, model in SECTION_MODELS.items()}
    settings = Settings(**merged, **sections)

    if not settings.auth.jwt_secret:
        if settings.auth.mode == "token":
            logger.warning("SOONER_JWT_SECRET not set, using development secret")
        settings.auth.jwt_secret = DEV_JWT_SECRET

    return settings


__all__ = [
    "AssistantConfig",
    "AuthConfig",
    "ServerConfig",
    "Settings",
    "StoreConfig",
    "TasksConfig",
    "load_settings",
]
