from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

GROUP_SIZE = 4


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WordGroup(CamelModel):
    words: List[str] = Field(min_length=GROUP_SIZE, max_length=GROUP_SIZE)
    explanation: str

    @field_validator("words")
    @classmethod
    def _words_distinct(cls, words: List[str]) -> List[str]:
        if any(not w.strip() for w in words):
            raise ValueError("words must be non-empty")
        if len(set(words)) != len(words):
            raise ValueError("words in a group must be distinct")
        return words


class QuizCreate(CamelModel):
    name: str
    difficulty: str
    word_groups: List[WordGroup] = Field(min_length=1)
    definitions: Dict[str, str] = Field(default_factory=dict)


class Quiz(QuizCreate):
    id: int

    def all_words(self) -> List[str]:
        """Every word of the answer key, in declared order."""
        return [w for group in self.word_groups for w in group.words]

    def definition_for(self, word: str) -> Optional[str]:
        return self.definitions.get(word)


class GroupVerdict(CamelModel):
    is_correct: bool
    explanation: Optional[str] = None


class SubmittedGroup(CamelModel):
    words: List[str] = Field(min_length=GROUP_SIZE, max_length=GROUP_SIZE)
    is_correct: bool = Field(strict=True)
    explanation: Optional[str] = None


class GameRecordCreate(CamelModel):
    quiz_id: int = Field(strict=True)
    submitted_groups: List[SubmittedGroup]
    score: int = Field(ge=0, le=100, strict=True)
    completed: bool = Field(strict=True)


class GameRecord(GameRecordCreate):
    id: int


class GameRecordUpdate(CamelModel):
    quiz_id: Optional[int] = Field(default=None, strict=True)
    submitted_groups: Optional[List[SubmittedGroup]] = None
    score: Optional[int] = Field(default=None, ge=0, le=100, strict=True)
    completed: Optional[bool] = Field(default=None, strict=True)
