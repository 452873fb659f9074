# This file loads env variables and must thus be imported before anything else.
from . import env_loader  # noqa: F401
from .env_loader import get_current_environment, get_cors_origins, get_log_level

import logging

from fastapi import FastAPI, Depends, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from knowledge.access import AuthorizationDenied
from knowledge.models.user import User
from .routers import (
    documents_router,
    search_router,
    files_router,
    notes_router,
    email_templates_router,
    tools_router,
    users_router,
    analytics_router,
)
from .models import EnvironmentResponse
from .auth import get_current_user, require_reader

"""FastAPI application setup for the knowledge base API.

Exposes routes for documents and their versions, search, file transfer URLs,
personal notes, shared email templates and tools, and user administration.
Every denied permission check surfaces as a 403 through one exception handler.
"""

logger = logging.getLogger(__name__)

app = FastAPI()
app.include_router(documents_router)
app.include_router(search_router)
app.include_router(files_router)
app.include_router(notes_router)
app.include_router(email_templates_router)
app.include_router(tools_router)
app.include_router(users_router)
app.include_router(analytics_router)
app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Configure basic logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s - %(filename)s:%(lineno)d",
    datefmt="%Y-%m-%d %H:%M:%S",
)
# LOG_LEVEL only affects this API's own loggers.
log_level = get_log_level()
if log_level is not None:
    logging.getLogger("knowledge").setLevel(log_level)


@app.exception_handler(AuthorizationDenied)
async def authorization_denied_handler(
    request: Request, exc: AuthorizationDenied
) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} denied: {exc.message}")
    return JSONResponse(
        status_code=403,
        content={"detail": exc.message, "capability": exc.capability},
    )


@app.get("/health")
@app.options("/health")
def health_check(response: Response) -> dict[str, str]:
    """Health check endpoint that returns 200 status with CORS from anywhere."""
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "*"
    return {"status": "healthy"}


@app.get("/environment", response_model=EnvironmentResponse)
def get_environment(_user: User = Depends(require_reader)) -> EnvironmentResponse:
    """Get the current environment configuration."""
    environment = get_current_environment()
    return EnvironmentResponse(environment=environment)


@app.get("/auth/verify")
def verify_auth(user: User = Depends(get_current_user)) -> dict[str, str]:
    """Verify authentication credentials.

    This endpoint does nothing except validate credentials. It's used by the
    frontend to test a session without triggering any side effects.

    Raises:
        HTTPException 401 if credentials are invalid.
    """
    return {
        "status": "authenticated",
        "user_id": str(user.id),
        "email": user.email or "",
        "role": user.role,
    }
