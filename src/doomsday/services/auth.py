"""``login`` (alias ``auth``): obtain a session token for the current target."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from doomsday.domain.errors import APIError, MissingCredentialsError
from doomsday.domain.session import set_token
from doomsday.domain.types import Verb
from doomsday.services.base import Handler
from doomsday.services.result import success

if TYPE_CHECKING:
    from doomsday.services.base import SessionContext
    from doomsday.services.result import ServiceResult

logger = logging.getLogger(__name__)

AUTH_NONE = "none"
AUTH_USERPASS = "userpass"


class LoginHandler(Handler):
    """Authenticate against the current target and remember the token.

    The server's ``auth_type`` decides the flow: ``none`` needs nothing,
    ``userpass`` exchanges a username and password for a token. Missing
    credentials are prompted for unless ``--no-interact`` is set.
    """

    op = Verb.LOGIN.value

    def execute(self, ctx: SessionContext) -> ServiceResult:
        target = ctx.require_target()
        client = ctx.require_client()

        auth_type = str(client.info().get("auth_type", AUTH_NONE)).lower()
        logger.debug("Target %s reports auth type %s", target.name, auth_type)

        if auth_type == AUTH_NONE:
            return success(
                self.op,
                {"target": target.name, "auth_type": auth_type, "authenticated": False},
                warnings=["This doomsday server does not require authentication"],
            )
        if auth_type != AUTH_USERPASS:
            raise APIError(200, f"Unsupported auth type '{auth_type}'")

        username = self._credential(ctx, "username", hide_input=False)
        password = self._credential(ctx, "password", hide_input=True)
        token = client.authenticate(username, password)
        set_token(ctx.require_config(), target.name, token)
        return success(
            self.op,
            {
                "target": target.name,
                "auth_type": auth_type,
                "username": username,
                "authenticated": True,
            },
        )

    @staticmethod
    def _credential(ctx: SessionContext, name: str, *, hide_input: bool) -> str:
        value: str | None = ctx.option(name)
        if value:
            return value
        if ctx.settings.no_interact:
            raise MissingCredentialsError(name)
        return ctx.prompt(name.capitalize(), hide_input)
