from __future__ import annotations

import hmac
from typing import Iterable, Optional

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Pull the token out of an ``Authorization: Bearer <token>`` header.

    Returns None when the header is missing or isn't a bearer credential.
    A duplicated prefix ("Bearer Bearer abc", a common copy/paste slip from
    the docs UI) is tolerated.
    """
    if authorization is None or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX) :].strip()
    if token.lower().startswith(BEARER_PREFIX.lower()):
        token = token[len(BEARER_PREFIX) :].strip()
    return token or None


def is_valid_token(token: str, valid_tokens: Iterable[str]) -> bool:
    return any(hmac.compare_digest(token.encode("utf-8"), t.encode("utf-8")) for t in valid_tokens)


def is_public_path(path: str, public_paths: Iterable[str]) -> bool:
    return any(path.startswith(prefix) for prefix in public_paths)
