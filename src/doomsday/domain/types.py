"""Verb and handler-kind enums."""

from __future__ import annotations

from enum import StrEnum


class Verb(StrEnum):
    """Top-level CLI verbs, aliases included."""

    SERVER = "server"
    TARGET = "target"
    TARGETS = "targets"
    LOGIN = "login"
    AUTH = "auth"
    LIST = "list"
    DASHBOARD = "dashboard"
    DASH = "dash"
    SCHEDULER = "scheduler"
    SCHED = "sched"
    REFRESH = "refresh"
    INFO = "info"


class HandlerKind(StrEnum):
    """What a handler needs from the dispatcher before it can run.

    * ``server``: nothing; the session file is never touched.
    * ``session``: the loaded session config only.
    * ``remote``: the session config plus a client bound to the current target.
    """

    SERVER = "server"
    SESSION = "session"
    REMOTE = "remote"
