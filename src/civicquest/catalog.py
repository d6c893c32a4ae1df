import glob
import logging
import os
from typing import Any, Dict, List, Optional

import pandas as pd
from pydantic import ValidationError

from .models import Quiz, QuizCreate
from .storage import MemoryStorage

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("group", "word", "explanation")
DEFAULT_DIFFICULTY = "medium"

CIVICS_QUIZZES: List[Dict[str, Any]] = [
    {
        "name": "Branches of Government",
        "difficulty": "easy",
        "word_groups": [
            {
                "words": ["President", "Vice President", "Cabinet", "Executive Orders"],
                "explanation": "These all relate to the Executive Branch, which is responsible for implementing and enforcing federal laws.",
            },
            {
                "words": ["Senate", "House", "Congress", "Legislature"],
                "explanation": "These make up the Legislative Branch, which is responsible for making laws.",
            },
            {
                "words": ["Supreme Court", "Federal Judge", "Chief Justice", "Judicial Review"],
                "explanation": "These are part of the Judicial Branch, which interprets laws and determines if they are constitutional.",
            },
        ],
        "definitions": {
            "President": "Head of the Executive Branch and Commander in Chief",
            "Vice President": "Second in command of the Executive Branch, President of the Senate",
            "Cabinet": "Advisory body to the President, heads of federal departments",
            "Executive Orders": "Official directives from the President to federal agencies",
            "Senate": "Upper chamber of Congress, two senators per state",
            "House": "Lower chamber of Congress, representatives based on state population",
            "Congress": "Legislative body of the federal government",
            "Legislature": "Branch of government that makes laws",
            "Supreme Court": "Highest court in the federal judiciary",
            "Federal Judge": "Appointed judicial officer who resolves disputes",
            "Chief Justice": "Head of the Supreme Court and federal judiciary",
            "Judicial Review": "Power to determine if laws are constitutional",
        },
    },
    {
        "name": "Bill of Rights",
        "difficulty": "medium",
        "word_groups": [
            {
                "words": ["Speech", "Religion", "Press", "Assembly"],
                "explanation": "These freedoms are protected by the First Amendment.",
            },
            {
                "words": ["Due Process", "Speedy Trial", "Right to Counsel", "Jury Trial"],
                "explanation": "These protect people accused of crimes under the Fifth and Sixth Amendments.",
            },
            {
                "words": ["Bear Arms", "Quartering Soldiers", "Search Warrant", "Excessive Bail"],
                "explanation": "These come from the Second, Third, Fourth and Eighth Amendments.",
            },
        ],
        "definitions": {
            "Speech": "Expressing opinions without government censorship",
            "Religion": "Practicing any faith, or none, without a state church",
            "Press": "Publishing news and views without government control",
            "Assembly": "Gathering peacefully in groups",
            "Due Process": "Fair legal procedures before life, liberty or property is taken",
            "Speedy Trial": "A trial held without unnecessary delay",
            "Right to Counsel": "Having a lawyer to help with your defense",
            "Jury Trial": "Having your case decided by a group of citizens",
            "Bear Arms": "Keeping and carrying weapons",
            "Quartering Soldiers": "Forcing people to house troops in peacetime, which is forbidden",
            "Search Warrant": "Court order required for most searches of people and homes",
            "Excessive Bail": "Unreasonably high payment for release before trial, which is forbidden",
        },
    },
    {
        "name": "Founding Era",
        "difficulty": "hard",
        "word_groups": [
            {
                "words": ["Declaration of Independence", "Constitution", "Articles of Confederation", "Federalist Papers"],
                "explanation": "These are founding documents of the United States.",
            },
            {
                "words": ["Bald Eagle", "Liberty Bell", "Statue of Liberty", "Great Seal"],
                "explanation": "These are national symbols of the United States.",
            },
            {
                "words": ["George Washington", "James Madison", "Thomas Jefferson", "Benjamin Franklin"],
                "explanation": "These are Founding Fathers of the United States.",
            },
            {
                "words": ["Federalism", "Checks and Balances", "Separation of Powers", "Popular Sovereignty"],
                "explanation": "These are core principles of the Constitution.",
            },
        ],
        "definitions": {
            "Declaration of Independence": "1776 statement announcing separation from Great Britain",
            "Constitution": "Supreme law of the land, written in 1787",
            "Articles of Confederation": "First governing document, replaced by the Constitution",
            "Federalist Papers": "Essays written to support ratifying the Constitution",
            "Bald Eagle": "National bird and emblem",
            "Liberty Bell": "Bell in Philadelphia tied to independence",
            "Statue of Liberty": "Statue in New York Harbor welcoming immigrants",
            "Great Seal": "Official emblem used to authenticate documents",
            "George Washington": "First President and Continental Army commander",
            "James Madison": "Father of the Constitution and fourth President",
            "Thomas Jefferson": "Main author of the Declaration of Independence",
            "Benjamin Franklin": "Diplomat, inventor and oldest delegate to the Constitutional Convention",
            "Federalism": "Power shared between national and state governments",
            "Checks and Balances": "Each branch can limit the powers of the others",
            "Separation of Powers": "Government power divided among three branches",
            "Popular Sovereignty": "Government power comes from the people",
        },
    },
]


def find_shared_words(quiz: QuizCreate) -> List[str]:
    """Words that appear in more than one group of the quiz."""
    seen = set()
    shared = []
    for group in quiz.word_groups:
        for word in group.words:
            if word in seen and word not in shared:
                shared.append(word)
            seen.add(word)
    return shared


def quiz_from_frame(name: str, df: pd.DataFrame) -> QuizCreate:
    """Builds a quiz from rows of ``group, word, explanation[, definition, difficulty]``."""
    df = df.dropna(subset=["group", "word"])
    word_groups = []
    for _, rows in df.groupby("group", sort=False):
        explanations = rows["explanation"].dropna()
        word_groups.append(
            {
                "words": [str(w).strip() for w in rows["word"]],
                "explanation": str(explanations.iloc[0]) if len(explanations) else "",
            }
        )

    definitions = {}
    if "definition" in df.columns:
        for word, definition in zip(df["word"], df["definition"]):
            if pd.notna(definition):
                definitions[str(word).strip()] = str(definition)

    difficulty = DEFAULT_DIFFICULTY
    if "difficulty" in df.columns and df["difficulty"].notna().any():
        difficulty = str(df["difficulty"].dropna().iloc[0])

    return QuizCreate(
        name=name,
        difficulty=difficulty,
        word_groups=word_groups,
        definitions=definitions,
    )


class QuizCatalog:
    """Collects the built-in civics quizzes and any CSV quizzes on disk."""

    def __init__(self, directory: Optional[str] = None, include_builtin: bool = True):
        self.directory = directory
        self.include_builtin = include_builtin
        self.quizzes: List[QuizCreate] = []

    def load_all(self) -> List[QuizCreate]:
        self.quizzes = []
        if self.include_builtin:
            for data in CIVICS_QUIZZES:
                self._add(QuizCreate(**data), "built-in")
        if self.directory:
            self._load_directory(self.directory)
        if not self.quizzes:
            logger.warning("Quiz catalog is empty.")
        return self.quizzes

    def _load_directory(self, directory: str):
        if not os.path.isdir(directory):
            logger.info(f"Quiz directory {directory} not found, using built-in quizzes only.")
            return

        for file_path in sorted(glob.glob(os.path.join(directory, "*.csv"))):
            file_name = os.path.splitext(os.path.basename(file_path))[0]
            name = file_name.replace("_", " ").title()
            try:
                df = pd.read_csv(file_path, encoding="utf-8")
            except (OSError, ValueError) as e:
                logger.error(f"Failed to load {file_path}: {e}")
                continue

            missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
            if missing:
                logger.error(f"Skipping {file_name}: Missing columns {missing}.")
                continue

            try:
                quiz = quiz_from_frame(name, df)
            except ValidationError as e:
                logger.error(f"Skipping {file_name}: {e.error_count()} invalid field(s).")
                continue
            self._add(quiz, file_name)

    def _add(self, quiz: QuizCreate, source: str):
        shared = find_shared_words(quiz)
        if shared:
            logger.error(f"Skipping {quiz.name} ({source}): words in several groups: {shared}")
            return
        self.quizzes.append(quiz)
        logger.info(f"Loaded quiz {quiz.name} ({source}) with {len(quiz.word_groups)} groups")

    def seed(self, storage: MemoryStorage) -> List[Quiz]:
        """Loads the catalog and stores every quiz, returning the stored quizzes."""
        return [storage.create_quiz(quiz) for quiz in self.load_all()]
