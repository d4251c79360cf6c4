from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
import os
from typing import Any, Dict, List
import logging

from .auth import extract_bearer_token, get_token_verifier
from .config import load_settings, configure_logging
from .constants import BEARER_SCHEME, PEOPLE_PATH, STATIC_PREFIX, TASKS_PATH
from . import handlers
from .models import NewTaskRequest, Person, TaskResponse
from .security import Decision, evaluate

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    """Manage application lifecycle (startup and shutdown events)."""
    settings = load_settings()
    configure_logging(settings)
    logger.info("Starting task_widget_api FastAPI app")
    app_instance.state.settings = settings
    get_token_verifier()

    yield

    logger.info("Shutting down task_widget_api FastAPI app")


app = FastAPI(title="task_widget_api", description="People and task API for the task widget", version="0.0.1", lifespan=lifespan)

static_dir = os.path.join(os.path.dirname(__file__), 'static')
if os.path.isdir(static_dir):
    app.mount(STATIC_PREFIX, StaticFiles(directory=static_dir), name='static')


@app.middleware("http")
async def security_filter(request: Request, call_next):
    """Verify the bearer token (if any) and apply the authorization rules before routing."""
    token = extract_bearer_token(request.headers.get('authorization'))
    claims = get_token_verifier().verify_token(token) if token else None
    request.state.user = claims

    path = request.url.path
    decision = evaluate(path, request.method, claims is not None)
    if decision is Decision.DENY:
        logger.info("Rejected unauthenticated %s %s", request.method, path)
        challenge = BEARER_SCHEME
        if token:
            challenge += ' error="invalid_token"'
        return JSONResponse(
            status_code=401,
            content={"detail": "Not authenticated"},
            headers={"WWW-Authenticate": challenge},
        )
    return await call_next(request)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _field_name(loc) -> str:
    parts = list(loc)
    if parts and parts[0] in ('body', 'query', 'path', 'header'):
        parts = parts[1:]
    return '.'.join(str(p) for p in parts) or 'body'


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": _field_name(err.get('loc', ())), "message": err.get('msg', 'Invalid value')}
        for err in exc.errors()
    ]
    logger.debug("Validation failed for %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(status_code=400, content={"detail": "Validation failed", "errors": errors})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/health", tags=["health"])
def health() -> Dict[str, Any]:
    return {"status": "ok"}


@app.get(PEOPLE_PATH, response_model=List[Person], tags=["people"])
def list_people():
    return handlers.list_people()


@app.post(TASKS_PATH, response_model=TaskResponse, tags=["tasks"])
def create_task(task: NewTaskRequest):
    return handlers.create_task(task)


def run():
    """Serve the app with uvicorn using host and port from settings."""
    import uvicorn

    settings = load_settings()
    configure_logging(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
