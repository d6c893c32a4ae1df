import logging
import random
import uuid
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from .errors import UserInputRejected
from .models import GROUP_SIZE, GameRecordCreate, Quiz, SubmittedGroup
from .scoring import compute_score, is_quiz_complete, quiz_words, solved_words, validate_group

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    SELECTING = "selecting"
    READY = "ready"
    FINISHED = "finished"


class Notice(BaseModel):
    """A message for the player, rendered as a toast by the page."""

    level: str  # info, success, warning, error
    title: str
    description: str = ""


class SessionUpdate(BaseModel):
    status: SessionStatus
    notices: List[Notice] = []
    record: Optional[GameRecordCreate] = None


class GameSession:
    """Play state for one quiz in one browser tab.

    Every mutating method returns a SessionUpdate with the new status and the
    notices to show. A rejected action returns a warning notice and leaves the
    pool, selection and history untouched.
    """

    def __init__(self, quiz: Quiz, rng: Optional[random.Random] = None):
        self.quiz = quiz
        self.rng = rng or random.Random()
        self.all_words = quiz_words(quiz)
        self.pool: List[str] = []
        self.selection: List[str] = []
        self.submissions: List[SubmittedGroup] = []
        self.finished = False
        self._shuffle()

    def _shuffle(self):
        self.pool = self.quiz.all_words()
        self.rng.shuffle(self.pool)

    @property
    def status(self) -> SessionStatus:
        if self.finished:
            return SessionStatus.FINISHED
        if len(self.selection) == GROUP_SIZE:
            return SessionStatus.READY
        return SessionStatus.SELECTING

    @property
    def score(self) -> int:
        return compute_score(self.submissions)

    def _update(self, *notices: Notice, record: Optional[GameRecordCreate] = None) -> SessionUpdate:
        return SessionUpdate(status=self.status, notices=list(notices), record=record)

    def _rejected(self, e: UserInputRejected) -> SessionUpdate:
        return self._update(Notice(level="warning", title=e.title, description=e.description))

    def _check_playable(self):
        if self.finished:
            raise UserInputRejected("Game complete", "Reset to play again.")

    def select_word(self, word: str) -> SessionUpdate:
        try:
            self._check_playable()
            if word in self.selection:
                self.selection.remove(word)
                return self._update()
            if word not in self.all_words:
                raise UserInputRejected("Unknown word", f"{word} is not part of this quiz.")
            if len(self.selection) >= GROUP_SIZE:
                raise UserInputRejected(
                    "Maximum reached",
                    f"You can only select {GROUP_SIZE} words at a time.",
                )
        except UserInputRejected as e:
            return self._rejected(e)

        self.selection.append(word)
        return self._update()

    def submit(self) -> SessionUpdate:
        try:
            self._check_playable()
            if len(self.selection) != GROUP_SIZE:
                raise UserInputRejected(
                    "Select more words",
                    f"Pick exactly {GROUP_SIZE} words before submitting.",
                )
        except UserInputRejected as e:
            return self._rejected(e)

        verdict = validate_group(self.selection, self.quiz)
        submitted = SubmittedGroup(
            words=list(self.selection),
            is_correct=verdict.is_correct,
            explanation=verdict.explanation,
        )
        self.submissions.append(submitted)
        self.selection = []

        if verdict.is_correct:
            notices = [Notice(level="success", title="Correct!", description=verdict.explanation or "")]
        else:
            notices = [
                Notice(level="error", title="Not quite", description="Those words do not form a group. Try again.")
            ]

        if not is_quiz_complete(self.all_words, solved_words(self.submissions)):
            return self._update(*notices)

        self.finished = True
        record = GameRecordCreate(
            quiz_id=self.quiz.id,
            submitted_groups=self.submissions,
            score=self.score,
            completed=True,
        )
        notices.append(Notice(level="info", title="Game Complete!", description=f"Your final score is {record.score}%"))
        logger.info(f"Quiz {self.quiz.id} finished with score {record.score} after {len(self.submissions)} submissions")
        return self._update(*notices, record=record)

    def reset(self) -> SessionUpdate:
        self.selection = []
        self.submissions = []
        self.finished = False
        self._shuffle()
        return self._update()

    def snapshot(self) -> Dict[str, Any]:
        solved = [s for s in self.submissions if s.is_correct]
        return {
            "quizId": self.quiz.id,
            "quizName": self.quiz.name,
            "status": self.status.value,
            "pool": list(self.pool),
            "selection": list(self.selection),
            "submissions": [s.model_dump(by_alias=True) for s in self.submissions],
            "solvedGroups": [s.model_dump(by_alias=True) for s in solved],
            "solvedWords": sorted(solved_words(self.submissions)),
            "totalGroups": len(self.quiz.word_groups),
            "score": self.score,
            "definitions": {w: self.quiz.definitions[w] for w in self.pool if w in self.quiz.definitions},
        }


class SessionEntry:
    def __init__(self, session: GameSession):
        self.session = session
        self.created_at = datetime.now()
        self.record_id: Optional[int] = None


class SessionManager:
    """In-memory sessions keyed by the browser's session cookie."""

    def __init__(self, timeout_minutes: int):
        self.timeout = timedelta(minutes=timeout_minutes)
        self.sessions: Dict[str, SessionEntry] = {}

    def _expired(self, entry: SessionEntry) -> bool:
        return datetime.now() - entry.created_at > self.timeout

    def sweep(self) -> int:
        """Drops every expired session, returning how many were dropped."""
        expired = [sid for sid, entry in self.sessions.items() if self._expired(entry)]
        for sid in expired:
            del self.sessions[sid]
        if expired:
            logger.info(f"Swept {len(expired)} expired session(s)")
        return len(expired)

    def start(self, quiz: Quiz, rng: Optional[random.Random] = None) -> str:
        self.sweep()
        session_id = str(uuid.uuid4())
        self.sessions[session_id] = SessionEntry(GameSession(quiz, rng=rng))
        logger.info(f"New session: {session_id} [Quiz: {quiz.id}]")
        return session_id

    def get(self, session_id: Optional[str]) -> Optional[SessionEntry]:
        if not session_id or session_id not in self.sessions:
            return None
        entry = self.sessions[session_id]
        if self._expired(entry):
            del self.sessions[session_id]
            logger.info(f"Session expired: {session_id}")
            return None
        return entry

    def discard(self, session_id: Optional[str]):
        self.sessions.pop(session_id, None)
