import secrets
import logging
from typing import Callable, Optional, Tuple

from fastapi import Request
from fastapi.responses import JSONResponse, RedirectResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware

from superagent.config import IS_PRODUCTION, USER_ID_COOKIE_MAX_AGE, USER_ID_COOKIE_NAME

logger = logging.getLogger(__name__)

SIGNIN_PATH = "/signin"
PUBLIC_PATH_PREFIXES = (
    SIGNIN_PATH,
    "/api/connecting-email",
    "/api/connection",
    "/health",
    "/docs",
    "/redoc",
    "/openapi.json",
)

class AuthRequiredError(Exception):
    """A request that needs a user identity arrived without one."""
    pass

def generate_user_id() -> str:
    """Random 10-digit numeric identity, used as the platform's end-user key."""
    return str(1_000_000_000 + secrets.randbelow(9_000_000_000))

def get_user_id_from_cookie(request: Request) -> Optional[str]:
    return request.cookies.get(USER_ID_COOKIE_NAME) or None

def resolve_user_id(request: Request, body_user_id: Optional[str] = None) -> Tuple[str, bool]:
    """Returns (user_id, is_new). The cookie wins over the body; a new id is minted when neither is set."""
    user_id = get_user_id_from_cookie(request)
    if user_id:
        return user_id, False
    if body_user_id:
        return body_user_id, True
    return generate_user_id(), True

def set_identity_cookie(response: Response, user_id: str) -> None:
    # Readable from client script so the UI can skip re-initiating a connection.
    response.set_cookie(
        key=USER_ID_COOKIE_NAME,
        value=user_id,
        max_age=USER_ID_COOKIE_MAX_AGE,
        path="/",
        samesite="lax",
        secure=IS_PRODUCTION,
        httponly=False,
    )

def is_public_path(path: str) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in PUBLIC_PATH_PREFIXES)

class IdentityCookieMiddleware(BaseHTTPMiddleware):
    """
    Gates the application on the identity cookie.
    Unauthenticated page requests are sent to the sign-in page and API requests get a 401;
    authenticated visitors of the sign-in page are sent home.
    """
    async def dispatch(self, request: Request, call_next: Callable):
        path = request.url.path
        is_authenticated = USER_ID_COOKIE_NAME in request.cookies

        if not is_authenticated and not is_public_path(path):
            if path.startswith("/api/"):
                return JSONResponse({"error": "Authentication required. Please sign in."}, status_code=401)
            logger.info(f"Redirecting unauthenticated request for {path} to {SIGNIN_PATH}")
            return RedirectResponse(url=SIGNIN_PATH, status_code=307)

        if is_authenticated and path == SIGNIN_PATH:
            return RedirectResponse(url="/", status_code=307)

        return await call_next(request)
