from __future__ import annotations

from typing import List

from fastapi import APIRouter, Body, Depends, Response
from fastapi.responses import JSONResponse

from user_api.deps import bearer_scheme, get_user_store
from user_api.models import ErrorResponse, MessageResponse, UserPayload, UserResponse
from user_api.outcomes import ConflictError, NotFound, ValidationError
from user_api.user_store import InMemoryUserStore
from user_api.user_types import User

router = APIRouter(
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(bearer_scheme)],
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)

_ERROR_RESPONSES = {
    400: {"model": MessageResponse},
    404: {"model": MessageResponse},
    409: {"model": MessageResponse},
}


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def _failure(outcome) -> JSONResponse:
    if isinstance(outcome, NotFound):
        return _message(404, outcome.message)
    if isinstance(outcome, ValidationError):
        return _message(400, outcome.message)
    if isinstance(outcome, ConflictError):
        return _message(409, outcome.message)
    # Anything else is a programming error; let the error boundary deal with it.
    raise TypeError(f"Unexpected store outcome: {type(outcome).__name__}")


def _user_json(user: User, status_code: int = 200, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=UserResponse.from_user(user).model_dump(), headers=headers)


@router.get("", response_model=List[UserResponse], operation_id="GetAllUsers")
def list_users(store: InMemoryUserStore = Depends(get_user_store)) -> JSONResponse:
    return JSONResponse([UserResponse.from_user(u).model_dump() for u in store.list()])


@router.get("/{user_id}", response_model=UserResponse, responses=_ERROR_RESPONSES, operation_id="GetUserById")
def get_user(user_id: int, store: InMemoryUserStore = Depends(get_user_store)) -> JSONResponse:
    result = store.get(user_id)
    if not isinstance(result, User):
        return _failure(result)
    return _user_json(result)


@router.post(
    "", response_model=UserResponse, status_code=201, responses=_ERROR_RESPONSES, operation_id="CreateUser"
)
def create_user(
    payload: UserPayload = Body(...),
    store: InMemoryUserStore = Depends(get_user_store),
) -> JSONResponse:
    result = store.create(name=payload.name, email=payload.email)
    if not isinstance(result, User):
        return _failure(result)
    return _user_json(result, status_code=201, headers={"Location": f"/users/{result.id}"})


@router.put("/{user_id}", response_model=UserResponse, responses=_ERROR_RESPONSES, operation_id="UpdateUser")
def update_user(
    user_id: int,
    payload: UserPayload = Body(...),
    store: InMemoryUserStore = Depends(get_user_store),
) -> JSONResponse:
    result = store.update(user_id, name=payload.name, email=payload.email)
    if not isinstance(result, User):
        return _failure(result)
    return _user_json(result)


@router.delete("/{user_id}", status_code=204, responses=_ERROR_RESPONSES, operation_id="DeleteUser")
def delete_user(user_id: int, store: InMemoryUserStore = Depends(get_user_store)) -> Response:
    result = store.delete(user_id)
    if isinstance(result, NotFound):
        return _failure(result)
    return Response(status_code=204)
