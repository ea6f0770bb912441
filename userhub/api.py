"""FastAPI application exposing the user directory endpoints."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .config import Settings, load_settings
from .database import Database
from .errors import (
    DuplicateEmailError,
    InvalidEmailFormatError,
    InvalidInputError,
    InvalidStatusTransitionError,
    UserNotFoundError,
    UserServiceError,
)
from .models import User
from .notifications import build_notifier
from .ports import Notifier, UserStore
from .service import UserService

logger = logging.getLogger("userhub.api")

_ERROR_STATUS: Dict[type, int] = {
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    InvalidEmailFormatError: status.HTTP_400_BAD_REQUEST,
    DuplicateEmailError: status.HTTP_409_CONFLICT,
    UserNotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidStatusTransitionError: status.HTTP_409_CONFLICT,
}


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    age: int
    status: str
    created_at: datetime


def user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        age=user.age,
        status=user.status.value,
        created_at=user.created_at,
    )


def status_for_error(exc: UserServiceError) -> int:
    for error_type, code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def register_user_routes(app: FastAPI, service: UserService) -> None:
    """Expose the user lifecycle operations under ``/api/users``.

    Handlers are plain functions: FastAPI runs them in its threadpool, which
    keeps SQLite access and webhook notifications off the event loop.
    """

    router = APIRouter(prefix="/api/users", tags=["users"])

    def get_service() -> UserService:
        return service

    @router.post("", status_code=status.HTTP_201_CREATED, response_model=UserResponse)
    def create_user(
        name: Optional[str] = None,
        email: Optional[str] = None,
        age: Optional[int] = None,
        users: UserService = Depends(get_service),
    ) -> UserResponse:
        return user_to_response(users.create_user(name, email, age))

    @router.get("", response_model=List[UserResponse])
    def list_active_users(users: UserService = Depends(get_service)) -> List[UserResponse]:
        return [user_to_response(user) for user in users.list_active_users()]

    # Static paths are declared before "/{user_id}" so they are not parsed as identifiers.
    @router.get("/search", response_model=List[UserResponse])
    def search_users(
        name: Optional[str] = None,
        users: UserService = Depends(get_service),
    ) -> List[UserResponse]:
        return [user_to_response(user) for user in users.search_users_by_name(name)]

    @router.get("/count")
    def count_active_users(users: UserService = Depends(get_service)) -> int:
        return users.count_active_users()

    @router.get("/adults", response_model=List[UserResponse])
    def list_adult_users(users: UserService = Depends(get_service)) -> List[UserResponse]:
        return [user_to_response(user) for user in users.list_adult_users()]

    @router.get("/adults/active", response_model=List[UserResponse])
    def list_adult_active_users(users: UserService = Depends(get_service)) -> List[UserResponse]:
        return [user_to_response(user) for user in users.list_adult_active_users()]

    @router.get("/email/{email}", response_model=UserResponse)
    def read_user_by_email(email: str, users: UserService = Depends(get_service)) -> UserResponse:
        return user_to_response(users.get_user_by_email(email))

    @router.get("/{user_id}", response_model=UserResponse)
    def read_user(user_id: int, users: UserService = Depends(get_service)) -> UserResponse:
        return user_to_response(users.get_user_by_id(user_id))

    @router.put("/{user_id}", response_model=UserResponse)
    def update_user(
        user_id: int,
        name: Optional[str] = None,
        age: Optional[int] = None,
        users: UserService = Depends(get_service),
    ) -> UserResponse:
        return user_to_response(users.update_user(user_id, name=name, age=age))

    @router.put("/{user_id}/deactivate", status_code=status.HTTP_204_NO_CONTENT)
    def deactivate_user(user_id: int, users: UserService = Depends(get_service)) -> Response:
        users.deactivate_user(user_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.put("/{user_id}/reactivate", status_code=status.HTTP_204_NO_CONTENT)
    def reactivate_user(user_id: int, users: UserService = Depends(get_service)) -> Response:
        users.reactivate_user(user_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_user(user_id: int, users: UserService = Depends(get_service)) -> Response:
        users.delete_user(user_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    app.include_router(router)


def create_app(
    *,
    store: UserStore | None = None,
    notifier: Notifier | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Instantiate the FastAPI application for the user directory."""

    if store is None or notifier is None:
        settings = settings or load_settings()
    if store is None:
        database = Database(settings.database_path)
        database.initialize()
        store = database
    if notifier is None:
        notifier = build_notifier(settings)

    service = UserService(store, notifier)

    app = FastAPI(
        title="userhub",
        description="User directory with lifecycle management",
        version="0.1.0",
    )
    app.state.store = store
    app.state.service = service

    @app.get("/health")
    async def healthcheck() -> Dict[str, str]:
        return {"status": "ok"}

    register_user_routes(app, service)

    @app.exception_handler(UserServiceError)
    async def handle_user_service_error(request: Request, exc: UserServiceError):
        code = status_for_error(exc)
        logger.info("%s %s failed with %s: %s", request.method, request.url.path, exc.code, exc.message)
        return JSONResponse(status_code=code, content={"detail": exc.message, "code": exc.code})

    return app


__all__ = ["UserResponse", "create_app", "register_user_routes", "status_for_error", "user_to_response"]
