# file: opencnam/config.py
"""
Configuration loader.

Design goals:
- No credentials committed to the repo.
- Support `.env` for local development.
- Support YAML for non-secret defaults.
- Validate configuration with pydantic.

Precedence (highest to lowest):
1. OS environment variables
2. `.env` values
3. YAML config file values
4. Code defaults
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import dotenv_values
from pydantic import BaseModel, field_validator
from pydantic import ConfigDict as PydanticConfigDict

from opencnam.net.http import DEFAULT_USER_AGENT, HttpClientConfig
from opencnam.net.tls import build_ssl_context
from opencnam.request import OutputFormat, coerce_format


class OpenCNAMSettings(BaseModel):
    model_config = PydanticConfigDict(extra="ignore")

    # Credentials (professional accounts)
    account_sid: str | None = None
    auth_token: str | None = None

    # Request defaults
    default_format: OutputFormat = OutputFormat.TEXT

    # Logging
    log_level: str = "INFO"
    json_logging: bool = False

    # HTTP
    http_timeout_seconds: float = 10.0
    http_user_agent: str = DEFAULT_USER_AGENT

    # TLS trust store
    ca_bundle: Path | None = None
    ca_include_default_roots: bool = False

    @field_validator("default_format", mode="before")
    @classmethod
    def _validate_format(cls, value: Any) -> OutputFormat:
        if isinstance(value, str):
            value = value.strip().lower()
        return coerce_format(value)

    @field_validator("account_sid", "auth_token", mode="before")
    @classmethod
    def _empty_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def http_config(self) -> HttpClientConfig:
        ssl_context = None
        if self.ca_bundle is not None:
            ssl_context = build_ssl_context(
                self.ca_bundle, include_default_roots=self.ca_include_default_roots
            )
        return HttpClientConfig(
            timeout_seconds=self.http_timeout_seconds,
            user_agent=self.http_user_agent,
            ssl_context=ssl_context,
        )


_ENV_MAP: dict[str, str] = {
    "OPENCNAM_ACCOUNT_SID": "account_sid",
    "OPENCNAM_AUTH_TOKEN": "auth_token",
    "OPENCNAM_FORMAT": "default_format",
    "OPENCNAM_LOG_LEVEL": "log_level",
    "OPENCNAM_JSON_LOGGING": "json_logging",
    "OPENCNAM_HTTP_TIMEOUT_SECONDS": "http_timeout_seconds",
    "OPENCNAM_HTTP_USER_AGENT": "http_user_agent",
    "OPENCNAM_CA_BUNDLE": "ca_bundle",
    "OPENCNAM_CA_INCLUDE_DEFAULT_ROOTS": "ca_include_default_roots",
}


def _read_yaml(path: Path) -> dict[str, Any]:
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    return raw if isinstance(raw, dict) else {}


def _read_dotenv(path: Path) -> dict[str, str]:
    # dotenv_values does not mutate os.environ; it just parses the file.
    values = dotenv_values(path)
    out: dict[str, str] = {}
    for k, v in values.items():
        if isinstance(k, str) and isinstance(v, str):
            out[k] = v
    return out


def _overlay_env(target: dict[str, Any], env: dict[str, str]) -> None:
    for env_key, field_name in _ENV_MAP.items():
        if env_key in env:
            target[field_name] = env[env_key]


def load_settings(
    *, yaml_path: Path | None = None, env_path: Path | None = None
) -> OpenCNAMSettings:
    """
    Load settings from YAML and .env, with OS env overrides.

    Args:
        yaml_path: Optional YAML config path.
        env_path: Optional .env path (default: `.env` if present).

    Raises:
        pydantic.ValidationError: if a value fails validation (e.g. an unknown format).
    """

    data: dict[str, Any] = {}

    if env_path is None:
        maybe = Path(".env")
        env_path = maybe if maybe.exists() else None

    dotenv = _read_dotenv(env_path) if env_path is not None and env_path.exists() else {}

    # YAML path resolution:
    # - explicit yaml_path wins
    # - else OPENCNAM_CONFIG from OS env wins
    # - else OPENCNAM_CONFIG from .env
    if yaml_path is None:
        cfg = os.environ.get("OPENCNAM_CONFIG") or dotenv.get("OPENCNAM_CONFIG")
        if cfg:
            yaml_path = Path(cfg)

    if yaml_path is not None and yaml_path.exists():
        data.update(_read_yaml(yaml_path))

    if dotenv:
        _overlay_env(data, dotenv)

    os_env: dict[str, str] = {k: v for k, v in os.environ.items() if k in _ENV_MAP}
    _overlay_env(data, os_env)

    return OpenCNAMSettings.model_validate(data)
