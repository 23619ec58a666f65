"""Request pipeline: error boundary -> auth gate -> access log -> dispatch.

Each stage is a Starlette ``http`` middleware callable,
``stage(request, call_next) -> Response``. A stage either returns a response
on its own (short-circuit) or awaits ``call_next`` exactly once and returns
what it got back.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Iterable, List

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from user_api.auth import extract_bearer_token, is_public_path, is_valid_token
from user_api.settings import Settings

CallNext = Callable[[Request], Awaitable[Response]]
Stage = Callable[[Request, CallNext], Awaitable[Response]]

INTERNAL_ERROR_MESSAGE = "Internal server error."
MISSING_TOKEN_MESSAGE = "Unauthorized: Missing or invalid token."
INVALID_TOKEN_MESSAGE = "Unauthorized: Invalid token."

logger = logging.getLogger("user_api.pipeline")
access_logger = logging.getLogger("user_api.access")


async def error_boundary(request: Request, call_next: CallNext) -> Response:
    try:
        return await call_next(request)
    except Exception:
        # Details stay in the logs; the caller only sees a generic message.
        logger.exception("Unhandled exception occurred.", extra={"method": request.method, "path": request.url.path})
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})


def make_auth_gate(valid_tokens: Iterable[str], public_paths: Iterable[str] = ()) -> Stage:
    tokens = frozenset(valid_tokens)
    public = tuple(public_paths)

    async def auth_gate(request: Request, call_next: CallNext) -> Response:
        if is_public_path(request.url.path, public):
            return await call_next(request)

        token = extract_bearer_token(request.headers.get("authorization"))
        if token is None:
            return JSONResponse(status_code=401, content={"error": MISSING_TOKEN_MESSAGE})
        if not is_valid_token(token, tokens):
            return JSONResponse(status_code=401, content={"error": INVALID_TOKEN_MESSAGE})

        return await call_next(request)

    return auth_gate


async def access_log(request: Request, call_next: CallNext) -> Response:
    method = request.method
    path = request.url.path

    response = await call_next(request)

    access_logger.info("HTTP %s %s responded %s", method, path, response.status_code)
    return response


def build_pipeline(settings: Settings) -> List[Stage]:
    """Return the middleware stages, outermost first."""
    return [
        error_boundary,
        make_auth_gate(settings.api_tokens, settings.public_paths),
        access_log,
    ]


def install_pipeline(app: FastAPI, stages: List[Stage]) -> None:
    # Starlette wraps the most recently added middleware around the others,
    # so register innermost first to keep list order == execution order.
    for stage in reversed(stages):
        app.middleware("http")(stage)
