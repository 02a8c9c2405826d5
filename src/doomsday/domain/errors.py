"""Error taxonomy for the doomsday CLI.

Every exception carries a stable ``code`` tag. The dispatcher converts raised
errors into a failed ServiceResult keyed by that tag, so presentation
decisions (e.g. the login hint for UNAUTHORIZED) look at the tag only.
"""

from __future__ import annotations

from pathlib import Path


class DoomsdayError(Exception):
    """Base class for all errors surfaced to the operator."""

    code = "ERROR"


class ConfigLoadError(DoomsdayError):
    code = "CONFIG_LOAD"

    def __init__(self, path: Path | str, reason: object) -> None:
        super().__init__(f"Could not load CLI config from `{path}': {reason}")
        self.path = Path(path)


class ConfigSaveError(DoomsdayError):
    code = "CONFIG_SAVE"

    def __init__(self, path: Path | str, reason: object) -> None:
        super().__init__(f"Could not save config: {reason}")
        self.path = Path(path)


class NoTargetSelectedError(DoomsdayError):
    code = "NO_TARGET"

    def __init__(self, message: str = "No doomsday server is currently targeted") -> None:
        super().__init__(message)


class UnknownTargetError(DoomsdayError):
    code = "UNKNOWN_TARGET"

    def __init__(self, name: str) -> None:
        super().__init__(f"No such target exists: {name}")
        self.name = name


class UnknownCommandError(DoomsdayError):
    """Dispatch table miss. Indicates a registration bug, not operator error."""

    code = "UNKNOWN_COMMAND"

    def __init__(self, verb: str) -> None:
        super().__init__(f"Unregistered command {verb}")
        self.verb = verb


class AddressParseError(DoomsdayError):
    code = "ADDRESS_PARSE"

    def __init__(self, address: str) -> None:
        super().__init__("Could not parse target address as URL")
        self.address = address


class InvalidDurationError(DoomsdayError):
    code = "INVALID_DURATION"

    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid duration '{text}' (expected e.g. 1y2d3h4m)")
        self.text = text


class UnauthorizedError(DoomsdayError):
    """The remote rejected the credential (HTTP 401)."""

    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class APIError(DoomsdayError):
    """Any non-2xx, non-401 response from the remote."""

    code = "API_ERROR"

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code


class UsageError(DoomsdayError):
    """Flags or arguments that make no sense together."""

    code = "USAGE"


class MissingCredentialsError(DoomsdayError):
    code = "MISSING_CREDENTIALS"

    def __init__(self, field: str) -> None:
        super().__init__(f"missing {field} (pass it as a flag or drop --no-interact)")
        self.field = field


class ManifestNotFoundError(DoomsdayError):
    code = "MANIFEST_NOT_FOUND"

    def __init__(self, path: Path | str) -> None:
        super().__init__(f"Server manifest not found: {path}")
        self.path = Path(path)


class ServerUnavailableError(DoomsdayError):
    code = "SERVER_UNAVAILABLE"

    def __init__(self) -> None:
        super().__init__(
            "No doomsday server implementation is installed "
            "(install a package providing the 'doomsday.plugins' entry point)"
        )


class ServerFailedError(DoomsdayError):
    """The server plugin stopped with a non-zero status or raised."""

    code = "SERVER_EXIT"

    def __init__(self, reason: str, exit_code: int = 1) -> None:
        super().__init__(f"doomsday server failed: {reason}")
        self.exit_code = exit_code
