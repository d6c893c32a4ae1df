from typing import Optional

from fastapi import Cookie, Request

from .config import settings
from .session import SessionManager
from .storage import MemoryStorage


def get_storage(request: Request) -> MemoryStorage:
    return request.app.state.storage


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.sessions


def get_session_id(
    session_id: Optional[str] = Cookie(None, alias=settings.SESSION_COOKIE_NAME)
) -> Optional[str]:
    return session_id
