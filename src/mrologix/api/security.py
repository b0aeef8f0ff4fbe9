"""Session security helpers for the FastAPI service.

Login issues an HttpOnly cookie holding a random session token; only the
SHA-256 of that token is stored in ``auth_session``.

Passwords use PBKDF2-HMAC-SHA256 with a per-user random salt and an optional
server-side pepper from env (``MROLOGIX_PASSWORD_PEPPER``).
"""

from __future__ import annotations

import base64
from datetime import UTC, datetime, timedelta
import hashlib
import os
import secrets

from fastapi import Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from mrologix.db.connect import get_session_dep
from mrologix.db.models import AuthSession, AuthUser

_DEFAULT_SESSION_COOKIE = "mrologix_session"


def _is_truthy(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _password_pepper_bytes() -> bytes:
    raw = os.getenv("MROLOGIX_PASSWORD_PEPPER") or ""
    if not raw.strip():
        return b""
    return hashlib.sha256(raw.encode("utf-8")).digest()


def _password_iterations() -> int:
    raw = os.getenv("MROLOGIX_PASSWORD_ITERATIONS")
    if not raw:
        return 250_000
    try:
        return max(50_000, int(raw))
    except ValueError:
        return 250_000


def hash_password(
    password: str,
    *,
    salt: bytes | None = None,
    iterations: int | None = None,
) -> tuple[str, str, int]:
    """Return (salt_b64, hash_b64, iterations) for the supplied password."""

    if iterations is None:
        iterations = _password_iterations()
    if salt is None:
        salt = secrets.token_bytes(16)
    derived = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8") + _password_pepper_bytes(),
        salt,
        iterations,
        dklen=32,
    )
    return (
        base64.b64encode(salt).decode("ascii"),
        base64.b64encode(derived).decode("ascii"),
        iterations,
    )


def verify_password(
    password: str,
    *,
    salt_b64: str,
    hash_b64: str,
    iterations: int,
) -> bool:
    try:
        salt = base64.b64decode(salt_b64.encode("ascii"))
        expected = base64.b64decode(hash_b64.encode("ascii"))
    except ValueError:
        return False

    derived = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8") + _password_pepper_bytes(),
        salt,
        iterations,
        dklen=len(expected),
    )
    return secrets.compare_digest(derived, expected)


def session_cookie_name() -> str:
    name = (os.getenv("MROLOGIX_SESSION_COOKIE_NAME") or _DEFAULT_SESSION_COOKIE).strip()
    return name or _DEFAULT_SESSION_COOKIE


def _session_ttl_seconds() -> int:
    raw = os.getenv("MROLOGIX_SESSION_TTL_SECONDS")
    if not raw:
        return 60 * 60 * 12  # 12 hours
    try:
        return max(60, int(raw))
    except ValueError:
        return 60 * 60 * 12


def _cookie_samesite() -> str:
    raw = (os.getenv("MROLOGIX_SESSION_COOKIE_SAMESITE") or "lax").strip().lower()
    if raw in {"lax", "strict", "none"}:
        return raw
    return "lax"


def _hash_session_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def create_session(db: Session, *, user: AuthUser) -> str:
    """Create a DB-backed session token and return the **raw** token."""

    token = secrets.token_urlsafe(32)
    now = datetime.now(UTC)
    db.add(
        AuthSession(
            user_id=user.id,
            token_hash=_hash_session_token(token),
            created_at=now,
            expires_at=now + timedelta(seconds=_session_ttl_seconds()),
        )
    )
    db.commit()
    return token


def delete_session(db: Session, *, token: str) -> None:
    token_hash = _hash_session_token(token)
    db.query(AuthSession).filter(AuthSession.token_hash == token_hash).delete()
    db.commit()


def set_session_cookie(response: Response, *, token: str) -> None:
    response.set_cookie(
        session_cookie_name(),
        token,
        httponly=True,
        samesite=_cookie_samesite(),
        secure=_is_truthy(os.getenv("MROLOGIX_SESSION_COOKIE_SECURE")),
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(session_cookie_name(), path="/")


def get_current_user(
    request: Request,
    db: Session = Depends(get_session_dep),
) -> AuthUser | None:
    """Resolve the session cookie to an active user, or ``None``."""

    token = request.cookies.get(session_cookie_name())
    if not token:
        return None

    row = (
        db.query(AuthSession)
        .join(AuthUser, AuthSession.user_id == AuthUser.id)
        .filter(AuthSession.token_hash == _hash_session_token(token))
        .filter(AuthSession.expires_at > datetime.now(UTC))
        .first()
    )
    if row is None or not row.user.is_active:
        return None
    return row.user


def require_user(user: AuthUser | None = Depends(get_current_user)) -> AuthUser:
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated.")
    return user
