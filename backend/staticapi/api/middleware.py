import logging

from fastapi import Request
from fastapi.responses import PlainTextResponse
from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)

SECRET_HEADER = "secretkey"


class LowercasePathMiddleware:
    """Routes are matched on the lower-cased path: /Static == /static."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            scope = dict(scope)
            scope["path"] = scope["path"].lower()
        await self.app(scope, receive, send)


async def secret_gate(request: Request, call_next):
    settings = request.app.state.settings
    if not settings.enforce_secret:
        return await call_next(request)

    provided = request.headers.get(SECRET_HEADER, "")
    if not settings.secret_key or provided != settings.secret_key:
        logger.warning(
            "Unauthorized request: secret key mismatch or missing. Provided: '%s'",
            provided,
        )
        return PlainTextResponse("Unauthorized", status_code=401)

    return await call_next(request)
