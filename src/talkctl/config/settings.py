"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``TALKCTL_*`` prefix
  3. TOML file    — ``talkctl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from talkctl.config.discovery import ConfigNotFound, find_config
from talkctl.config.models import AccountPolicyConfig, DatabaseConfig, SetupDefaultsConfig

DATA_DIRNAME = ".talk"
DB_FILENAME = "talk.db"


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``talkctl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class TalkSettings(BaseSettings):
    """Unified settings for the talkctl CLI.

    Attributes:
        root: Installation directory (parent of ``talkctl.toml``,
            or CWD if no config found).
        config_path: Discovered or explicit config file, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "TALKCTL_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False

    # --- TOML sections ---
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    setup: SetupDefaultsConfig = Field(default_factory=SetupDefaultsConfig)
    accounts: AccountPolicyConfig = Field(default_factory=AccountPolicyConfig)

    @property
    def database_url(self) -> str:
        """Configured database URL, or the SQLite file under :attr:`root`."""
        if self.database.url:
            return self.database.url
        return f"sqlite:///{self.root / DATA_DIRNAME / DB_FILENAME}"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        database_url: str | None = None,
        **cli_flags: Any,
    ) -> TalkSettings:
        """Construct settings from a CLI invocation.

        Discovers ``talkctl.toml`` via walk-up (or explicit *config_path*),
        resolves *root* from the config file's parent directory, and merges
        CLI flags as highest-priority overrides.  *database_url* replaces the
        whole ``[database]`` section for this invocation.

        Raises:
            click.ClickException: The named config file is missing or is
                not valid TOML.
        """
        try:
            toml_path = find_config(root, explicit=config_path)
        except ConfigNotFound as exc:
            import click

            raise click.ClickException(str(exc)) from exc

        resolved_root = root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        if database_url:
            cli_flags["database"] = DatabaseConfig(url=database_url)

        _tls.toml_path = toml_path
        try:
            return cls(
                root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None
