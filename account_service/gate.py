"""
Authorization gate for protected routes.

Protected routes declare their stages as dependencies: ``get_current_user``
always runs first and either returns the resolved user (also stored on
``request.state.user``) or short-circuits by raising an ``AccountError``.
``require_role`` builds an optional second stage on top of it.
"""
from typing import Callable, Optional
import logging

from fastapi import Depends, Header, Request

from .auth import TokenIssuer
from .deps import get_account_service, get_token_issuer
from .errors import Forbidden, TokenExpired, Unauthorized
from .schemas import UserOut
from .service import AccountService

logger = logging.getLogger(__name__)

NO_TOKEN_MESSAGE = "Not authorized, no token"
TOKEN_FAILED_MESSAGE = "Not authorized, token failed"


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token of an ``Authorization: Bearer <token>`` header, or None."""
    if not authorization or not authorization.lower().startswith("bearer "):
        return None
    token = authorization.split(" ", 1)[1].strip()
    return token or None


def authenticate(authorization: Optional[str], tokens: TokenIssuer, service: AccountService) -> UserOut:
    token = extract_bearer_token(authorization)
    if token is None:
        raise Unauthorized(NO_TOKEN_MESSAGE)

    try:
        user_id = tokens.verify(token)
    except TokenExpired:
        logger.debug("Rejected expired token")
        raise
    except Unauthorized as exc:
        logger.debug(f"Rejected token: {exc.message}")
        raise Unauthorized(TOKEN_FAILED_MESSAGE) from exc

    # NotFound when the token outlived its user
    return service.get_profile(user_id)


def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    tokens: TokenIssuer = Depends(get_token_issuer),
    service: AccountService = Depends(get_account_service),
) -> UserOut:
    user = authenticate(authorization, tokens, service)
    request.state.user = user
    return user


def require_role(*roles: str) -> Callable[..., UserOut]:
    """Dependency factory: the gate, then a check that the user holds one of ``roles``."""
    allowed = frozenset(roles)

    def dependency(user: UserOut = Depends(get_current_user)) -> UserOut:
        if user.role not in allowed:
            logger.info(f"Role check failed: user_id={user.id}, role={user.role}")
            raise Forbidden()
        return user

    return dependency
