"""Configuration and credentials for jira-tui."""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING

import tomlkit
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from tomlkit.exceptions import TOMLKitError

from jiratui.errors import ExitCode, StartupError
from jiratui.paths import get_config_path

if TYPE_CHECKING:
    from collections.abc import Mapping

log = logging.getLogger(__name__)

JIRA_HOST_ENV = "JIRA_HOST"
JIRA_USER_ENV = "JIRA_USER"
JIRA_PASS_ENV = "JIRA_PASS"


class Config(BaseModel):
    """Persisted user preferences that shape the ticket query."""

    model_config = ConfigDict(validate_assignment=True)

    default_project_key: str = Field(default="", description="Project filter; empty = all")
    filter_in_progress: bool = Field(
        default=True, description="Only In Progress tickets (otherwise Prioritised)"
    )
    filter_mine: bool = Field(default=True, description="Only tickets assigned to me")

    @field_validator("default_project_key")
    @classmethod
    def _strip_project_key(cls, value: str) -> str:
        return value.strip()


class JiraCredentials(BaseModel):
    """Issue tracker connection settings, read from the environment."""

    model_config = ConfigDict(frozen=True)

    host: str
    user: str
    password: str = Field(repr=False)

    @field_validator("host")
    @classmethod
    def _normalize_host(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value and "://" not in value:
            value = f"https://{value}"
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> JiraCredentials:
        env = os.environ if environ is None else environ
        names = (JIRA_HOST_ENV, JIRA_USER_ENV, JIRA_PASS_ENV)
        missing = [name for name in names if not env.get(name)]
        if missing:
            raise StartupError(
                "Missing Jira credentials",
                code=ExitCode.MISSING_CREDENTIALS,
                hint=f"set {', '.join(missing)} in the environment",
            )
        return cls(host=env[JIRA_HOST_ENV], user=env[JIRA_USER_ENV], password=env[JIRA_PASS_ENV])


def _write_atomically(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


class ConfigStore:
    """Loads and saves ``Config`` as a TOML file.

    Loading never fails: a missing, unreadable or invalid file yields the
    defaults. Saving preserves comments and unknown keys already in the file.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path if path is not None else get_config_path()

    def load(self) -> Config:
        try:
            with self.path.open("rb") as f:
                data = tomllib.load(f)
            return Config.model_validate(data)
        except FileNotFoundError:
            return Config()
        except (OSError, tomllib.TOMLDecodeError, ValidationError) as exc:
            log.warning("Ignoring unreadable config %s: %s", self.path, exc)
            return Config()

    def _render(self, config: Config) -> str:
        try:
            doc = tomlkit.parse(self.path.read_text(encoding="utf-8"))
        except (OSError, TOMLKitError):
            doc = tomlkit.document()
        for key, value in config.model_dump().items():
            doc[key] = value
        return tomlkit.dumps(doc)

    def save_sync(self, config: Config) -> None:
        _write_atomically(self.path, self._render(config))

    async def save(self, config: Config) -> None:
        await asyncio.to_thread(self.save_sync, config)
        log.debug("Config saved to %s", self.path)
