from __future__ import annotations

from dataclasses import dataclass

from user_api.user_types import User


@dataclass(frozen=True)
class NotFound:
    user_id: int

    @property
    def message(self) -> str:
        return f"User with ID {self.user_id} not found."


@dataclass(frozen=True)
class ValidationError:
    message: str


@dataclass(frozen=True)
class ConflictError:
    message: str


@dataclass(frozen=True)
class Deleted:
    user: User
