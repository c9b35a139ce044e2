"""
JWT helpers.

Tokens carry the principal as ``{"user": {"id": "<user id>"}}``.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import JWTError, jwt

from .config import Settings


def create_access_token(user_id: str, settings: Settings, expires_minutes: int = 60) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    claims = {"user": {"id": str(user_id)}, "exp": expire}
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> Dict[str, Any]:
    """
    Verify signature and expiry, then return the embedded principal.

    Raises:
        ValueError: if the token is invalid, expired, or has no user claim.
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise ValueError("Invalid token") from exc

    user = payload.get("user")
    if not isinstance(user, dict) or not user.get("id"):
        raise ValueError("Token missing user claim")
    return {"id": str(user["id"])}
