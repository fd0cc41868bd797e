"""HTTP route definitions for the exercise tracker."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import JSONResponse

from ..domain.errors import ConflictError, StoreError, ValidationError
from ..domain.service import ActivityLogger, IdentityService, LogQueryEngine
from .schemas import ErrorResponse, ExerciseResponse, LogResponse, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

USER_NOT_FOUND = "User not found"

STORE_FAILURE = {500: {"model": ErrorResponse, "description": "Record store failure"}}
BAD_INPUT = {400: {"model": ErrorResponse, "description": "Missing or malformed input"}}


def get_identity_service(request: Request) -> IdentityService:
    """Resolve the `IdentityService` stored on the FastAPI application state."""
    service: IdentityService = request.app.state.identity_service
    return service


def get_activity_logger(request: Request) -> ActivityLogger:
    service: ActivityLogger = request.app.state.activity_logger
    return service


def get_log_query_engine(request: Request) -> LogQueryEngine:
    service: LogQueryEngine = request.app.state.log_query_engine
    return service


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _user_not_found() -> JSONResponse:
    # Unknown ids answer 200 with an error body; clients depend on it.
    return _error(status.HTTP_200_OK, USER_NOT_FOUND)


@router.get("/users", response_model=list[UserResponse], responses=STORE_FAILURE)
def list_users(
    service: IdentityService = Depends(get_identity_service),
) -> list[UserResponse] | JSONResponse:
    """Return every registered user as ``{_id, username}``."""
    try:
        users = service.list_users()
    except StoreError:
        logger.exception("listing users failed")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error retrieving users")
    return [UserResponse.from_domain(user) for user in users]


@router.post(
    "/users",
    response_model=UserResponse,
    responses={
        **BAD_INPUT,
        409: {"model": ErrorResponse, "description": "Username already exists"},
        **STORE_FAILURE,
    },
)
def create_user(
    username: str | None = Form(default=None),
    service: IdentityService = Depends(get_identity_service),
) -> UserResponse | JSONResponse:
    """Register a new user from the ``username`` form field."""
    try:
        user = service.create_user(username)
    except ValidationError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    except ConflictError as exc:
        return _error(status.HTTP_409_CONFLICT, str(exc))
    except StoreError:
        logger.exception("saving user failed")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error saving user")
    return UserResponse.from_domain(user)


@router.post(
    "/users/{user_id}/exercises",
    response_model=ExerciseResponse,
    responses={**BAD_INPUT, **STORE_FAILURE},
)
def add_exercise(
    user_id: str,
    description: str | None = Form(default=None),
    duration: str | None = Form(default=None),
    date: str | None = Form(default=None),
    service: ActivityLogger = Depends(get_activity_logger),
) -> ExerciseResponse | JSONResponse:
    """Log an exercise for ``user_id`` and echo it merged with the user."""
    try:
        logged = service.add_exercise(user_id, description, duration, date)
    except ValidationError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    except StoreError:
        logger.exception("saving exercise for user %s failed", user_id)
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "There was an error saving the exercise",
        )
    if logged is None:
        return _user_not_found()
    return ExerciseResponse.from_domain(logged)


@router.get(
    "/users/{user_id}/logs",
    response_model=LogResponse,
    responses={**BAD_INPUT, **STORE_FAILURE},
)
def get_logs(
    user_id: str,
    date_from: str | None = Query(default=None, alias="from"),
    date_to: str | None = Query(default=None, alias="to"),
    limit: str | None = Query(default=None),
    service: LogQueryEngine = Depends(get_log_query_engine),
) -> LogResponse | JSONResponse:
    """Return the user's exercise log filtered by ``from``/``to`` and capped by ``limit``."""
    try:
        log = service.get_logs(user_id, date_from, date_to, limit)
    except ValidationError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    except StoreError:
        logger.exception("retrieving log for user %s failed", user_id)
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Error retrieving exercise log",
        )
    if log is None:
        return _user_not_found()
    return LogResponse.from_domain(log)
