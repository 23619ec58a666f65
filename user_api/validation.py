from __future__ import annotations

from typing import Any, Optional

from user_api.outcomes import ValidationError

REQUIRED_FIELDS_MESSAGE = "Name and Email are required."


def is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def validate_user_fields(name: Any, email: Any) -> Optional[ValidationError]:
    """Check a create/update payload. Returns None when it is acceptable."""
    if is_blank(name) or is_blank(email):
        return ValidationError(REQUIRED_FIELDS_MESSAGE)
    return None
