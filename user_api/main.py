from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from user_api.deps import bearer_scheme, get_settings_dep, get_user_store
from user_api.logging_config import configure_logging
from user_api.middleware import build_pipeline, install_pipeline
from user_api.routers.users import router as users_router
from user_api.settings import Settings, get_settings
from user_api.user_store import InMemoryUserStore
from user_api.validation import REQUIRED_FIELDS_MESSAGE

logger = logging.getLogger("user_api")

APP_VERSION = "1.0.0"

API_DESCRIPTION = (
    "In-memory user management API.\n\n"
    "Every endpoint except the documentation requires an "
    "`Authorization: Bearer <token>` header with one of the configured API tokens."
)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Routes only accept integer ids, so a malformed id can't name a user.
    for err in exc.errors():
        loc = err.get("loc") or ()
        if loc and loc[0] == "path":
            raw_id = err.get("input", request.path_params.get("user_id", ""))
            return JSONResponse(status_code=404, content={"message": f"User with ID {raw_id} not found."})

    logger.info("Rejected malformed request body", extra={"path": request.url.path})
    return JSONResponse(status_code=400, content={"message": REQUIRED_FIELDS_MESSAGE})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build an application with its own user registry and request pipeline."""
    s = settings or get_settings()

    app = FastAPI(title="UserManagement API", version=APP_VERSION, description=API_DESCRIPTION)
    app.state.settings = s
    app.state.user_store = InMemoryUserStore(enforce_unique_email=s.enforce_unique_email)

    app.include_router(users_router)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    @app.get("/healthz", tags=["health"], dependencies=[Depends(bearer_scheme)])
    def healthz(
        store: InMemoryUserStore = Depends(get_user_store),
        settings: Settings = Depends(get_settings_dep),
    ):
        return JSONResponse(
            {
                "ok": True,
                "service": "user-api",
                "version": APP_VERSION,
                "users": store.count(),
                "enforce_unique_email": settings.enforce_unique_email,
            }
        )

    install_pipeline(app, build_pipeline(s))

    # Added last so it wraps the pipeline: preflight requests never hit the auth gate.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=s.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


_settings = get_settings()
configure_logging(_settings.log_level)

app = create_app(_settings)
