import logging
from typing import Any, Dict, List, Optional

from .errors import NotFoundError
from .models import GameRecord, GameRecordCreate, Quiz, QuizCreate

logger = logging.getLogger(__name__)


class MemoryStorage:
    """Process-lifetime store for quizzes and game records.

    Ids come from one counter per entity type, start at 1 and are never
    reused. Nothing survives a restart.
    """

    def __init__(self):
        self.quizzes: Dict[int, Quiz] = {}
        self.game_records: Dict[int, GameRecord] = {}
        self.next_quiz_id = 1
        self.next_game_record_id = 1

    # --- Quizzes ---
    def list_quizzes(self) -> List[Quiz]:
        return list(self.quizzes.values())

    def get_quiz(self, quiz_id: int) -> Optional[Quiz]:
        return self.quizzes.get(quiz_id)

    def create_quiz(self, data: QuizCreate) -> Quiz:
        quiz_id = self.next_quiz_id
        self.next_quiz_id += 1
        quiz = Quiz(id=quiz_id, **data.model_dump())
        self.quizzes[quiz_id] = quiz
        logger.info(f"Created quiz {quiz_id}: {quiz.name}")
        return quiz

    # --- Game records ---
    def list_game_records(self) -> List[GameRecord]:
        return list(self.game_records.values())

    def get_game_record(self, record_id: int) -> Optional[GameRecord]:
        return self.game_records.get(record_id)

    def create_game_record(self, data: GameRecordCreate) -> GameRecord:
        record_id = self.next_game_record_id
        self.next_game_record_id += 1
        record = GameRecord(id=record_id, **data.model_dump())
        self.game_records[record_id] = record
        logger.info(
            f"Created game record {record_id} [Quiz: {record.quiz_id}, "
            f"Score: {record.score}, Completed: {record.completed}]"
        )
        return record

    def update_game_record(self, record_id: int, partial: Dict[str, Any]) -> GameRecord:
        """Shallow-merges ``partial`` (snake_case field names) into a record."""
        existing = self.game_records.get(record_id)
        if existing is None:
            raise NotFoundError("Game state", record_id)
        merged = {**existing.model_dump(), **partial, "id": record_id}
        updated = GameRecord.model_validate(merged)
        self.game_records[record_id] = updated
        logger.info(f"Updated game record {record_id}: {sorted(partial)}")
        return updated
