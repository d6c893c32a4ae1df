import random

import pytest
from fastapi.testclient import TestClient

from civicquest.app import create_app
from civicquest.catalog import CIVICS_QUIZZES
from civicquest.config import Settings
from civicquest.models import Quiz
from civicquest.session import GameSession
from civicquest.storage import MemoryStorage

EXECUTIVE = ["President", "Vice President", "Cabinet", "Executive Orders"]
LEGISLATIVE = ["Senate", "House", "Congress", "Legislature"]
JUDICIAL = ["Supreme Court", "Federal Judge", "Chief Justice", "Judicial Review"]
MIXED = ["President", "Senate", "Supreme Court", "House"]


@pytest.fixture
def quiz():
    """The "Branches of Government" quiz with id 1."""
    return Quiz(id=1, **CIVICS_QUIZZES[0])


@pytest.fixture
def session(quiz):
    return GameSession(quiz, rng=random.Random(7))


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture(scope="session")
def test_settings(tmp_path_factory):
    settings = Settings()
    settings.LOG_DIR = str(tmp_path_factory.mktemp("log"))
    settings.QUIZ_DIR = str(tmp_path_factory.mktemp("quizzes"))
    return settings


@pytest.fixture
def client(test_settings, storage):
    app = create_app(settings=test_settings, storage=storage)
    with TestClient(app) as client:
        yield client


def play(session, words):
    """Selects ``words`` one by one, then submits them."""
    for word in words:
        session.select_word(word)
    return session.submit()
