import logging

from fastapi import HTTPException, Request, status

from .config import Settings
from .security import decode_access_token

logger = logging.getLogger(__name__)

TOKEN_HEADER = "x-auth-token"


class AuthGate:
    """
    Per-route dependency guarding private endpoints.

    Reads the ``x-auth-token`` header, verifies it against the shared secret
    and stores the principal on ``request.state.user``. Any failure raises 401
    before the handler runs.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def __call__(self, request: Request) -> dict:
        token = (request.headers.get(TOKEN_HEADER) or "").strip()
        if not token:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="No token, authorization denied",
            )

        try:
            user = decode_access_token(token, self.settings)
        except ValueError as e:
            logger.info("Rejected token on %s: %s", request.url.path, e)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token is not valid",
            ) from None

        request.state.user = user
        return user


def current_user_id(request: Request) -> str:
    # set by AuthGate
    user = getattr(request.state, "user", None)
    return str(user["id"]) if user and "id" in user else ""
