# server/api/auth.py

import logging
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse
from sqlalchemy.orm import Session

from core.errors import DuplicateUsername, InvalidCredentials, InvalidInput, Unauthorized
from core.security import UserIdentity
from core.state import SESSION_COOKIE
from core.utils import read_payload
from database import get_db


logger = logging.getLogger(__name__)

router = APIRouter()


# -------------------------------
# Authorization gate
# -------------------------------

def _resolve_user(request: Request, json_body: bool) -> UserIdentity:
    identity = request.app.state.sessions.resolve_session(request.cookies.get(SESSION_COOKIE))
    if identity is None:
        raise Unauthorized(json_body=json_body)
    return identity


def get_current_user(request: Request) -> UserIdentity:
    """
    Resolves the session cookie for page routes.
    Declare it before any database dependency so a missing session is
    rejected before a connection is taken.
    """
    return _resolve_user(request, json_body=False)


def get_current_api_user(request: Request) -> UserIdentity:
    return _resolve_user(request, json_body=True)


# -------------------------------
# Register / Login
# -------------------------------

@router.post("/register")
def register(request: Request, payload: dict = Depends(read_payload), db: Session = Depends(get_db)):
    username = payload.get("username")
    password = payload.get("password")

    try:
        request.app.state.auth.register(db, username, password)
    except InvalidInput as e:
        logger.warning("Registration rejected: %s", e.message)
        return PlainTextResponse(e.message, status_code=status.HTTP_400_BAD_REQUEST)
    except DuplicateUsername as e:
        logger.error("Error registering user: %s", e.message)
        return PlainTextResponse("Internal Server Error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    except Exception:
        logger.exception("Error registering user %s", username)
        return PlainTextResponse("Internal Server Error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return RedirectResponse("/login", status_code=status.HTTP_302_FOUND)


@router.post("/login")
def login(request: Request, payload: dict = Depends(read_payload), db: Session = Depends(get_db)):
    username = payload.get("username")
    password = payload.get("password")

    try:
        identity = request.app.state.auth.login(db, username, password)
    except InvalidCredentials as e:
        logger.info("Failed login for %s", username)
        return PlainTextResponse(e.message, status_code=status.HTTP_401_UNAUTHORIZED)
    except Exception:
        logger.exception("Error logging in user %s", username)
        return PlainTextResponse("Internal Server Error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    sessions = request.app.state.sessions
    settings = request.app.state.settings
    sessions.purge_expired()
    cookie_value = sessions.create_session(identity)
    logger.info("User %s logged in", identity.username)

    response = RedirectResponse("/", status_code=status.HTTP_302_FOUND)
    response.set_cookie(
        SESSION_COOKIE,
        cookie_value,
        max_age=int(sessions.lifetime.total_seconds()),
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return response
