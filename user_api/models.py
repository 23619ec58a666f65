from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from user_api.user_types import User


class UserPayload(BaseModel):
    # Both fields are optional at the schema level; blank/missing values are
    # rejected by user_api.validation so clients get a 400 with a message.
    name: Optional[str] = Field(default=None, description="Display name")
    email: Optional[str] = Field(default=None, description="Email address, unique (case-insensitive)")


class UserResponse(BaseModel):
    id: int
    name: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id, name=user.name, email=user.email)


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
