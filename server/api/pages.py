# server/api/pages.py

from pathlib import Path
from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from api.auth import get_current_user
from core.security import UserIdentity


router = APIRouter()

STATIC_DIR = Path(__file__).resolve().parent / "static"


def _page(name: str) -> FileResponse:
    return FileResponse(path=STATIC_DIR / name, media_type="text/html")


@router.get("/")
def landing_page():
    return _page("index.html")


@router.get("/login")
def login_page():
    return _page("login.html")


@router.get("/register")
def register_page():
    return _page("register.html")


@router.get("/home")
def home_page(user: UserIdentity = Depends(get_current_user)):
    return _page("index.html")
