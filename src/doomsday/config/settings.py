"""Unified settings: CLI flags and env vars in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``DOOMSDAY_*`` prefix
  3. Code defaults

The session file itself (targets, tokens) is not a settings source; it is
state owned by :mod:`doomsday.infrastructure.session_store`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from doomsday.infrastructure.session_store import default_session_path


class DoomsdaySettings(BaseSettings):
    """Settings for one CLI invocation, frozen after construction.

    Attributes:
        config_path: Session file holding targets and tokens.
        trace: Dump raw HTTP traffic to stderr.
        http_timeout: Seconds before a request is abandoned; None waits forever.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "DOOMSDAY_",
    }

    config_path: Path = Field(default_factory=default_session_path)
    trace: bool = False
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False
    http_timeout: float | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Only CLI flags and the environment; no dotenv or secrets dirs."""
        return (init_settings, env_settings)

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> DoomsdaySettings:
        """Construct settings from CLI invocation.

        Flags left unset (``None``) are dropped so they do not shadow env
        vars. Boolean flags only override when switched on.
        """
        overrides = {
            key: value
            for key, value in cli_flags.items()
            if value is not None and value is not False
        }
        if "config_path" in overrides:
            overrides["config_path"] = Path(overrides["config_path"]).expanduser()
        return cls(**overrides)
