from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator
from zoneinfo import ZoneInfoNotFoundError

from tracker.errors import ConfigurationError
from tracker.timeutil import get_timezone

ENV_PREFIX = "DAYCOUNT_"


def _parse_bool(value: str | bool | None, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    return str(value).strip().lower() in {"1", "true", "yes", "y", "on"}


class SettingsModel(BaseModel):
    birthdate: Optional[str] = None
    home_dir: Optional[Path] = None
    dir_name: str = Field(default=".daycount", min_length=1)
    file_name: str = Field(default="events.csv", min_length=1)
    timezone: Optional[str] = None
    milestone_days: int = Field(default=1000, ge=0)
    log_level: str = Field(default="WARNING")
    log_json: bool = Field(default=False)

    @field_validator("home_dir", mode="before")
    @classmethod
    def _parse_home_dir(cls, value):
        if value is None or isinstance(value, Path):
            return value
        return Path(str(value)).expanduser()

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value):
        if value is None:
            return value
        try:
            get_timezone(value)
        except (ZoneInfoNotFoundError, OSError, ValueError) as exc:
            raise ValueError(f"unknown timezone {value!r}") from exc
        return value


@dataclass(frozen=True)
class Settings:
    birthdate: Optional[str]
    home_dir: Path
    dir_name: str
    file_name: str
    timezone: Optional[str]
    milestone_days: int
    log_level: str
    log_json: bool

    @property
    def store_dir(self) -> Path:
        return self.home_dir / self.dir_name

    @property
    def store_path(self) -> Path:
        return self.store_dir / self.file_name


BOOL_FIELDS = {"log_json"}


def _resolve_home(configured: Optional[Path]) -> Path:
    if configured is not None:
        return configured
    try:
        return Path.home()
    except RuntimeError as exc:
        raise ConfigurationError(f"cannot determine the home directory: {exc}") from exc


def load_settings(environ: Optional[Mapping[str, str]] = None, *, use_dotenv: bool = True) -> Settings:
    """Build :class:`Settings` from ``DAYCOUNT_*`` environment variables.

    Empty variables count as unset. ``environ`` defaults to ``os.environ``, after
    a ``.env`` file in the working directory has been merged into it.
    """
    if environ is None:
        if use_dotenv:
            load_dotenv(find_dotenv(usecwd=True))
        environ = os.environ

    raw: dict[str, object] = {}
    for name in SettingsModel.model_fields:
        env_key = f"{ENV_PREFIX}{name.upper()}"
        if env_key in environ and environ[env_key] != "":
            raw[name] = environ[env_key]

    for name in BOOL_FIELDS:
        if name in raw:
            raw[name] = _parse_bool(raw[name])

    try:
        model = SettingsModel(**raw)
    except ValidationError as exc:
        raise ConfigurationError(f"invalid configuration: {exc}") from exc

    return Settings(
        birthdate=model.birthdate,
        home_dir=_resolve_home(model.home_dir),
        dir_name=model.dir_name,
        file_name=model.file_name,
        timezone=model.timezone,
        milestone_days=model.milestone_days,
        log_level=model.log_level.upper(),
        log_json=model.log_json,
    )
