"""Group validation and scoring.

Everything here is pure: no logging, no storage, no randomness. The session
state machine and the tests call these functions directly.
"""
from typing import Iterable, Sequence, Set

from .models import GroupVerdict, Quiz, SubmittedGroup


def validate_group(candidate: Iterable[str], quiz: Quiz) -> GroupVerdict:
    """Checks a candidate group against the quiz's answer key.

    The candidate matches a WordGroup when both hold exactly the same words,
    regardless of order. Groups are tried in declared order and the first
    match wins.
    """
    chosen = set(candidate)
    for group in quiz.word_groups:
        if chosen == set(group.words):
            return GroupVerdict(is_correct=True, explanation=group.explanation)
    return GroupVerdict(is_correct=False)


def compute_score(submissions: Sequence[SubmittedGroup]) -> int:
    """Percentage of submissions that were correct, rounded half up."""
    total = len(submissions)
    if total == 0:
        return 0
    correct = sum(1 for s in submissions if s.is_correct)
    # round(100 * correct / total) with halves going up, in integers
    return (200 * correct + total) // (2 * total)


def quiz_words(quiz: Quiz) -> Set[str]:
    return set(quiz.all_words())


def solved_words(submissions: Iterable[SubmittedGroup]) -> Set[str]:
    solved: Set[str] = set()
    for s in submissions:
        if s.is_correct:
            solved.update(s.words)
    return solved


def is_quiz_complete(all_words: Set[str], correct_words: Set[str]) -> bool:
    """True once every word of the key has appeared in a correct submission."""
    return all_words <= correct_words
