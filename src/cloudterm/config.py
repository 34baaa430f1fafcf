"""XDG config loading/saving."""

from __future__ import annotations

import os
import sys
from contextlib import suppress
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover
    import tomli as tomllib

from cloudterm.errors import CloudTermError, ExitCode
from cloudterm.logging import LOG_LEVELS, normalize_level

DEFAULT_CONFIG_PATH = Path("~/.config/cloudterm/config.toml").expanduser()
DEFAULT_USERNAME = "cloud-user"
DEFAULT_HOSTNAME = "cloud-terminal"
DEFAULT_PROMPT_PATH = "~"
DEFAULT_REGION = "us-east-1"
DEFAULT_TIMESTAMP_FORMAT = "%H:%M:%S"
DEFAULT_CLONE_DELAY_TICKS = 1
SEED_ENV = "CLOUDTERM_SEED"

_NAME_CHARS = set("abcdefghijklmnopqrstuvwxyz0123456789-_.")


class AppConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    username: str = DEFAULT_USERNAME
    hostname: str = DEFAULT_HOSTNAME
    prompt_path: str = DEFAULT_PROMPT_PATH
    region: str = DEFAULT_REGION
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT
    clone_delay_ticks: int = Field(default=DEFAULT_CLONE_DELAY_TICKS, ge=0, le=10)
    seed: int | None = None
    log_level: str = "WARN"

    @field_validator("username", "hostname", "region")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned or not set(cleaned.lower()) <= _NAME_CHARS:
            raise ValueError(f"Invalid name: {value!r}")
        return cleaned

    @field_validator("prompt_path")
    @classmethod
    def _validate_prompt_path(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned or any(char.isspace() for char in cleaned):
            raise ValueError(f"Invalid prompt path: {value!r}")
        return cleaned

    @field_validator("timestamp_format")
    @classmethod
    def _validate_timestamp_format(cls, value: str) -> str:
        if "%" not in value:
            raise ValueError(f"Timestamp format has no directives: {value!r}")
        datetime(2000, 1, 1).strftime(value)
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        if value.strip().upper() not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {value}")
        return normalize_level(value)

    @property
    def home_path(self) -> str:
        return f"/home/{self.username}"


def get_config_path(path: str | Path | None = None) -> Path:
    if path is None:
        return DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _toml_scalar(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return f'"{_escape(value)}"'
    raise TypeError(f"Unsupported TOML scalar type: {type(value)!r}")


def _env_seed() -> int | None:
    raw = os.getenv(SEED_ENV, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _sanitize(raw: dict[str, object]) -> AppConfig:
    """Apply each recognised key on its own so one bad value keeps the rest."""
    cfg = AppConfig()
    for field_name in AppConfig.model_fields:
        if field_name not in raw:
            continue
        value = raw[field_name]
        if isinstance(value, bool) and field_name in {"clone_delay_ticks", "seed"}:
            continue
        try:
            setattr(cfg, field_name, value)
        except ValidationError:
            continue

    env_seed = _env_seed()
    if env_seed is not None:
        cfg.seed = env_seed
    return cfg


def load_config(path: str | Path | None = None, *, strict: bool = False) -> AppConfig:
    """Load config, falling back to defaults.

    With ``strict=True`` an unreadable or malformed file raises a
    ``CloudTermError`` instead; the CLI uses this for an explicit ``--config``.
    """
    resolved = get_config_path(path)
    if not resolved.exists():
        if strict:
            raise CloudTermError(
                f"Config file not found: {resolved}",
                code=ExitCode.CONFIG_ERROR,
                hint="Check the --config path.",
            )
        return _sanitize({})
    try:
        with resolved.open("rb") as handle:
            raw = tomllib.load(handle)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        if strict:
            raise CloudTermError(
                f"Config file could not be read: {resolved}",
                code=ExitCode.CONFIG_ERROR,
                hint=str(exc),
            ) from exc
        return _sanitize({})
    return _sanitize(raw)


def save_config(config: AppConfig, path: str | Path | None = None) -> Path:
    resolved = get_config_path(path)
    resolved.parent.mkdir(parents=True, exist_ok=True)

    lines = [
        f"username = {_toml_scalar(config.username)}",
        f"hostname = {_toml_scalar(config.hostname)}",
        f"prompt_path = {_toml_scalar(config.prompt_path)}",
        f"region = {_toml_scalar(config.region)}",
        f"timestamp_format = {_toml_scalar(config.timestamp_format)}",
        f"clone_delay_ticks = {_toml_scalar(config.clone_delay_ticks)}",
        f"log_level = {_toml_scalar(config.log_level)}",
    ]
    if config.seed is not None:
        lines.append(f"seed = {_toml_scalar(config.seed)}")

    resolved.write_text("\n".join(lines) + "\n", encoding="utf-8")
    with suppress(OSError):
        resolved.chmod(0o600)
    return resolved
