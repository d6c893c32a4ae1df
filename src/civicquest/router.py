import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .dependencies import get_storage
from .errors import NotFoundError
from .models import GameRecord, GameRecordCreate, GameRecordUpdate, Quiz
from .storage import MemoryStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Civics Word Quest"])


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.get("/word-sets", response_model=List[Quiz])
async def list_word_sets(storage: MemoryStorage = Depends(get_storage)):
    return storage.list_quizzes()


def _parse_id(raw: str) -> Optional[int]:
    try:
        return int(raw)
    except ValueError:
        return None


@router.get("/word-sets/{quiz_id}", response_model=Quiz)
async def get_word_set(quiz_id: str, storage: MemoryStorage = Depends(get_storage)):
    parsed = _parse_id(quiz_id)
    quiz = storage.get_quiz(parsed) if parsed is not None else None
    if quiz is None:
        return JSONResponse({"message": "Word set not found"}, status_code=404)
    return quiz


@router.post("/game-states", response_model=GameRecord)
async def create_game_state(
    payload: GameRecordCreate, storage: MemoryStorage = Depends(get_storage)
):
    return storage.create_game_record(payload)


@router.get("/game-states/{record_id}", response_model=GameRecord)
async def get_game_state(record_id: str, storage: MemoryStorage = Depends(get_storage)):
    parsed = _parse_id(record_id)
    record = storage.get_game_record(parsed) if parsed is not None else None
    if record is None:
        return JSONResponse({"message": "Game state not found"}, status_code=404)
    return record


def _invalid_game_state(errors: list) -> JSONResponse:
    return JSONResponse(
        {"message": "Invalid game state data", "errors": errors},
        status_code=400,
    )


@router.patch("/game-states/{record_id}", response_model=GameRecord)
async def update_game_state(
    record_id: str,
    payload: Any = Body(None),
    storage: MemoryStorage = Depends(get_storage),
):
    # The id is checked before the body so an unknown id is always a 404
    parsed = _parse_id(record_id)
    if parsed is None or storage.get_game_record(parsed) is None:
        logger.warning(f"Update of missing game state {record_id}")
        return JSONResponse({"message": "Game state not found"}, status_code=404)

    try:
        update = GameRecordUpdate.model_validate(payload if payload is not None else {})
        return storage.update_game_record(parsed, update.model_dump(exclude_unset=True))
    except NotFoundError as e:
        return JSONResponse({"message": str(e)}, status_code=404)
    except ValidationError as e:
        return _invalid_game_state(e.errors(include_url=False, include_context=False))
