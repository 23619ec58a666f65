from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional, Union

from user_api.identity import IdentityGenerator
from user_api.outcomes import ConflictError, Deleted, NotFound, ValidationError
from user_api.user_types import User
from user_api.validation import validate_user_fields

logger = logging.getLogger("user_api.store")

EMAIL_EXISTS_MESSAGE = "Email already exists."


def _email_key(email: str) -> str:
    return email.lower()


class InMemoryUserStore:
    """Thread-safe in-memory user registry.

    Storage semantics:
    - Stored only in the API process memory (cleared on restart).
    - Records are frozen ``User`` values, so callers can't mutate what's stored.
    - Emails are unique under case-insensitive comparison (when enforced).

    All mutations run their check-then-write under one lock, so concurrent
    creates/updates racing on the same email produce exactly one winner.
    """

    def __init__(self, *, id_generator: Optional[IdentityGenerator] = None, enforce_unique_email: bool = True):
        self._lock = threading.Lock()
        self._ids = id_generator or IdentityGenerator()
        self._enforce_unique_email = enforce_unique_email
        self._users: Dict[int, User] = {}
        # normalized email -> id; only maintained when uniqueness is enforced
        self._by_email: Dict[str, int] = {}

    def list(self) -> List[User]:
        with self._lock:
            return [self._users[k] for k in sorted(self._users)]

    def count(self) -> int:
        with self._lock:
            return len(self._users)

    def get(self, user_id: int) -> Union[User, NotFound]:
        with self._lock:
            user = self._users.get(user_id)
        return user if user is not None else NotFound(user_id)

    def create(self, *, name: str, email: str) -> Union[User, ValidationError, ConflictError]:
        invalid = validate_user_fields(name, email)
        if invalid is not None:
            return invalid

        with self._lock:
            if self._email_taken(email, exclude_id=None):
                logger.info("Rejected duplicate email on create")
                return ConflictError(EMAIL_EXISTS_MESSAGE)
            user = User(id=self._ids.next(), name=name, email=email)
            self._users[user.id] = user
            if self._enforce_unique_email:
                self._by_email[_email_key(email)] = user.id

        logger.info("User created: %s", user)
        return user

    def update(
        self, user_id: int, *, name: str, email: str
    ) -> Union[User, NotFound, ValidationError, ConflictError]:
        invalid = validate_user_fields(name, email)
        if invalid is not None:
            return invalid

        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                return NotFound(user_id)
            if self._email_taken(email, exclude_id=user_id):
                logger.info("Rejected duplicate email on update of id=%d", user_id)
                return ConflictError(EMAIL_EXISTS_MESSAGE)
            user = User(id=user_id, name=name, email=email)
            self._users[user_id] = user
            if self._enforce_unique_email:
                self._by_email.pop(_email_key(current.email), None)
                self._by_email[_email_key(email)] = user_id

        logger.info("User updated: %s", user)
        return user

    def delete(self, user_id: int) -> Union[Deleted, NotFound]:
        with self._lock:
            removed = self._users.pop(user_id, None)
            if removed is None:
                return NotFound(user_id)
            if self._enforce_unique_email and self._by_email.get(_email_key(removed.email)) == user_id:
                del self._by_email[_email_key(removed.email)]

        logger.info("User deleted: %s", removed)
        return Deleted(user=removed)

    def _email_taken(self, email: str, *, exclude_id: Optional[int]) -> bool:
        # Caller must hold self._lock.
        if not self._enforce_unique_email:
            return False
        owner = self._by_email.get(_email_key(email))
        return owner is not None and owner != exclude_id
