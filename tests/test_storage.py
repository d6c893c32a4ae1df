"""Tests for the in-memory storage service."""

import pytest

from civicquest.catalog import CIVICS_QUIZZES
from civicquest.errors import NotFoundError
from civicquest.models import GameRecordCreate, QuizCreate, SubmittedGroup

from conftest import EXECUTIVE


def record_data(**overrides):
    data = {
        "quiz_id": 1,
        "submitted_groups": [SubmittedGroup(words=EXECUTIVE, is_correct=True, explanation="Executive")],
        "score": 100,
        "completed": False,
    }
    data.update(overrides)
    return GameRecordCreate(**data)


class TestQuizzes:
    def test_ids_increase_and_list_keeps_order(self, storage):
        first = storage.create_quiz(QuizCreate(**CIVICS_QUIZZES[0]))
        second = storage.create_quiz(QuizCreate(**CIVICS_QUIZZES[1]))
        assert (first.id, second.id) == (1, 2)
        assert [q.name for q in storage.list_quizzes()] == [first.name, second.name]

    def test_get_quiz(self, storage):
        created = storage.create_quiz(QuizCreate(**CIVICS_QUIZZES[0]))
        assert storage.get_quiz(created.id) == created
        assert storage.get_quiz(99) is None


class TestGameRecords:
    def test_create_and_get(self, storage):
        record = storage.create_game_record(record_data())
        assert record.id == 1
        assert storage.get_game_record(1) == record
        assert storage.get_game_record(2) is None

    def test_ids_are_not_reused_after_update(self, storage):
        first = storage.create_game_record(record_data())
        storage.update_game_record(first.id, {"completed": True})
        second = storage.create_game_record(record_data())
        assert second.id == 2

    def test_update_merges_fields(self, storage):
        record = storage.create_game_record(record_data())
        updated = storage.update_game_record(record.id, {"score": 40, "completed": True})
        assert updated.id == record.id
        assert updated.score == 40
        assert updated.completed is True
        assert updated.submitted_groups == record.submitted_groups
        assert storage.get_game_record(record.id) == updated

    def test_update_missing_raises_and_creates_nothing(self, storage):
        with pytest.raises(NotFoundError):
            storage.update_game_record(5, {"score": 10})
        assert storage.list_game_records() == []
