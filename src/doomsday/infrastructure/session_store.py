"""Session file persistence (``~/.doomsdayrc`` by default).

The file is YAML. Unknown keys survive a load/save cycle because the
session models allow extra fields.

INVARIANT: save is idempotent. Saving an unchanged config leaves the file
untouched, and an empty config never creates a file.
"""

from __future__ import annotations

import logging
import os
import tempfile
from io import StringIO
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from doomsday.domain.errors import ConfigLoadError, ConfigSaveError
from doomsday.domain.session import SessionConfig

DEFAULT_SESSION_FILENAME = ".doomsdayrc"

logger = logging.getLogger(__name__)


def default_session_path() -> Path:
    return Path.home() / DEFAULT_SESSION_FILENAME


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML emitter (ruamel's YAML object is stateful)."""
    y = YAML()
    y.default_flow_style = False
    return y


def load_session(path: Path) -> SessionConfig:
    """Read the session file at *path*.

    A missing or empty file is a first run and yields an empty config.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No session file at %s, starting empty", path)
        return SessionConfig()
    except (OSError, UnicodeError) as exc:
        raise ConfigLoadError(path, exc) from exc

    try:
        data: Any = YAML(typ="safe").load(raw)
    except YAMLError as exc:
        raise ConfigLoadError(path, exc) from exc

    if data is None:
        return SessionConfig()
    if not isinstance(data, dict):
        raise ConfigLoadError(path, "expected a mapping at the top level")

    try:
        return SessionConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigLoadError(path, exc) from exc


def render_session(config: SessionConfig) -> str:
    """Serialize *config* to the YAML text written to disk."""
    data: dict[str, Any] = config.model_dump(mode="json")
    if data.get("current") is None:
        data.pop("current", None)
    buf = StringIO()
    _new_yaml().dump(data, buf)
    return buf.getvalue()


def save_session(config: SessionConfig, path: Path) -> bool:
    """Persist *config* to *path*. Returns whether the file was written."""
    rendered = render_session(config)

    try:
        existing: str | None = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        existing = None
    except (OSError, UnicodeError) as exc:
        raise ConfigSaveError(path, exc) from exc

    if existing == rendered or (existing is None and config.is_empty()):
        return False

    try:
        _write_atomic(path, rendered)
    except OSError as exc:
        raise ConfigSaveError(path, exc) from exc
    logger.debug("Saved session file %s", path)
    return True


def _write_atomic(path: Path, text: str) -> None:
    """Write *text* to a sibling temp file readable only by the owner, then
    rename it over *path*.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(text)
        os.chmod(tmp_name, 0o600)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
