"""
FastAPI app assembly: logging, middleware and router wiring.
"""
import logging
import os

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

from bitbinder.api.deps import NOT_AUTHENTICATED
from bitbinder.api.auth import router as auth_router
from bitbinder.api.jokes import router as jokes_router
from bitbinder.api.folders import router as folders_router
from bitbinder.api.set_lists import router as set_lists_router
from bitbinder.api.recordings import router as recordings_router
from bitbinder.api.notebook import router as notebook_router
from bitbinder.api.notepad import router as notepad_router
from bitbinder.api.user_files import router as user_files_router
from bitbinder.api.jokebook import router as jokebook_router
from bitbinder.api.assistant import router as assistant_router
from bitbinder.api.audits import router as audits_router
from bitbinder.api.support import router as support_router

# Non-SQLite database schema is managed by Alembic migrations.

app = FastAPI(
    title="Bit Binder Service",
    description="API for organizing jokes into set lists, recording performances and writing new material.",
    version="1.0.0",
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

DEFAULT_ORIGINS = [
    "http://localhost",
    "http://localhost:3000",
    "http://localhost:8000",
]


def _cors_origins() -> list:
    raw = os.getenv("CORS_ORIGINS", "")
    configured = [o.strip() for o in raw.split(",") if o.strip()]
    return configured or DEFAULT_ORIGINS


app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

PUBLIC_WRITE_PATHS = ("/auth/register", "/auth/login")


# Middleware: reject writes that carry no session token at all
@app.middleware("http")
async def require_session_for_writes(request: Request, call_next):
    if request.method in ("POST", "PUT", "PATCH", "DELETE"):
        path = request.url.path or ""
        if path not in PUBLIC_WRITE_PATHS:
            h = request.headers
            token_present = h.get("authorization") or h.get("x-session-token")
            if not token_present:
                return JSONResponse(
                    {"detail": NOT_AUTHENTICATED},
                    status_code=status.HTTP_401_UNAUTHORIZED,
                )
    return await call_next(request)


app.include_router(auth_router)
app.include_router(jokes_router)
app.include_router(folders_router)
app.include_router(set_lists_router)
app.include_router(recordings_router)
app.include_router(notebook_router)
app.include_router(notepad_router)
app.include_router(user_files_router)
app.include_router(jokebook_router)
app.include_router(assistant_router)
app.include_router(audits_router)
app.include_router(support_router)
