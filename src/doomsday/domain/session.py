"""Session models and target-store operations.

A SessionConfig holds the named targets known to this CLI and which of them
is current. All mutation happens in memory; persistence lives in
:mod:`doomsday.infrastructure.session_store`.

INVARIANT: A ``current`` name with no matching target means "no target
selected", never an error. Manual edits of the session file must not brick
the CLI.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from doomsday.domain.errors import UnknownTargetError


class TargetRecord(BaseModel):
    """One remote doomsday server plus its trust and auth settings.

    ``name`` is the key of the record in ``SessionConfig.targets`` and is not
    written inside the record itself.
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(default="", exclude=True)
    address: str
    token: str = ""
    skip_verify: bool = False


class SessionConfig(BaseModel):
    """Persisted CLI session: known targets and the current selection."""

    model_config = ConfigDict(extra="allow")

    current: str | None = None
    targets: dict[str, TargetRecord] = Field(default_factory=dict)

    @field_validator("targets", mode="before")
    @classmethod
    def _accept_target_list(cls, value: Any) -> Any:
        """Accept the legacy ``targets: [{name: ..., ...}]`` layout."""
        if value is None:
            return {}
        if isinstance(value, list):
            converted: dict[str, Any] = {}
            for entry in value:
                if not isinstance(entry, dict) or not entry.get("name"):
                    msg = "target list entries must be mappings with a name"
                    raise ValueError(msg)
                body = {k: v for k, v in entry.items() if k != "name"}
                converted[str(entry["name"])] = body
            return converted
        return value

    @model_validator(mode="after")
    def _bind_names(self) -> SessionConfig:
        for name, record in self.targets.items():
            record.name = name
        return self

    def is_empty(self) -> bool:
        return not self.targets and self.current is None and not self.model_extra


def current_target(config: SessionConfig) -> TargetRecord | None:
    """Return the current target, or None if unset or dangling."""
    if not config.current:
        return None
    return config.targets.get(config.current)


def set_target(
    config: SessionConfig,
    name: str,
    address: str,
    skip_verify: bool = False,
) -> TargetRecord:
    """Create or update *name* and make it the current target.

    An existing token survives unless the address changes: the token belongs
    to the server identity, not to the record.
    """
    record = config.targets.get(name)
    if record is None:
        record = TargetRecord(name=name, address=address, skip_verify=skip_verify)
        config.targets[name] = record
    else:
        if record.address != address:
            record.token = ""
        record.address = address
        record.skip_verify = skip_verify
    config.current = name
    return record


def select_target(config: SessionConfig, name: str) -> TargetRecord:
    """Make an existing target current without editing it."""
    record = config.targets.get(name)
    if record is None:
        raise UnknownTargetError(name)
    config.current = name
    return record


def delete_target(config: SessionConfig, name: str) -> bool:
    """Forget *name*. Deleting an unknown target is a no-op.

    Deleting the current target leaves no target selected; nothing else is
    promoted in its place.
    """
    if config.targets.pop(name, None) is None:
        return False
    if config.current == name:
        config.current = None
    return True


def set_token(config: SessionConfig, name: str, token: str) -> None:
    record = config.targets.get(name)
    if record is None:
        raise UnknownTargetError(name)
    record.token = token
