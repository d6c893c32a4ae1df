import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from .config import settings
from .dependencies import get_session_id, get_session_manager, get_storage
from .globals import templates
from .session import SessionEntry, SessionManager, SessionUpdate
from .storage import MemoryStorage

logger = logging.getLogger(__name__)

router = APIRouter()


def _session_view(entry: SessionEntry, update: Optional[SessionUpdate] = None) -> dict:
    view = entry.session.snapshot()
    view["notices"] = [n.model_dump() for n in update.notices] if update else []
    view["recordId"] = entry.record_id
    return view


def _invalid_session() -> JSONResponse:
    return JSONResponse({"message": "Session invalid"}, status_code=401)


@router.get("/", response_class=HTMLResponse)
async def home(request: Request, storage: MemoryStorage = Depends(get_storage)):
    return templates.TemplateResponse(
        request, "home.html", {"quizzes": storage.list_quizzes()}
    )


@router.get("/game/{quiz_id}", response_class=HTMLResponse)
async def game_page(
    request: Request,
    quiz_id: int,
    storage: MemoryStorage = Depends(get_storage),
    sessions: SessionManager = Depends(get_session_manager),
    session_id: Optional[str] = Depends(get_session_id),
):
    quiz = storage.get_quiz(quiz_id)
    if quiz is None:
        return RedirectResponse(url="/", status_code=302)

    entry = sessions.get(session_id)
    if entry is None or entry.session.quiz.id != quiz_id:
        sessions.discard(session_id)
        session_id = sessions.start(quiz)

    response = templates.TemplateResponse(request, "game.html", {"quiz": quiz})
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session_id,
        httponly=True,
        samesite="Lax",
    )
    return response


@router.get("/api/session")
async def get_session(
    sessions: SessionManager = Depends(get_session_manager),
    session_id: Optional[str] = Depends(get_session_id),
):
    entry = sessions.get(session_id)
    if entry is None:
        return _invalid_session()
    return _session_view(entry)


@router.post("/api/session/select")
async def select_word(
    word: str = Form(...),
    sessions: SessionManager = Depends(get_session_manager),
    session_id: Optional[str] = Depends(get_session_id),
):
    entry = sessions.get(session_id)
    if entry is None:
        return _invalid_session()
    return _session_view(entry, entry.session.select_word(word))


@router.post("/api/session/submit")
async def submit_group(
    storage: MemoryStorage = Depends(get_storage),
    sessions: SessionManager = Depends(get_session_manager),
    session_id: Optional[str] = Depends(get_session_id),
):
    entry = sessions.get(session_id)
    if entry is None:
        return _invalid_session()

    update = entry.session.submit()
    if update.record is not None:
        entry.record_id = storage.create_game_record(update.record).id
    return _session_view(entry, update)


@router.post("/api/session/reset")
async def reset_session(
    sessions: SessionManager = Depends(get_session_manager),
    session_id: Optional[str] = Depends(get_session_id),
):
    entry = sessions.get(session_id)
    if entry is None:
        return _invalid_session()
    update = entry.session.reset()
    entry.record_id = None
    return _session_view(entry, update)
