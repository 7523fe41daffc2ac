from collections.abc import Mapping
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import settings


def clean_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def as_mapping(raw: Any) -> Mapping:
    if isinstance(raw, BaseModel):
        return raw.model_dump(by_alias=True)
    if isinstance(raw, Mapping):
        return raw
    return {}


# --- Models ---
class VocabularyItem(BaseModel):
    word: str
    meaning: str
    options: List[str]
    category: str = settings.DEFAULT_CATEGORY

    @property
    def key(self) -> str:
        return self.word.lower()

    @property
    def is_valid(self) -> bool:
        return (
            bool(self.word)
            and bool(self.meaning)
            and len(self.options) == settings.OPTION_COUNT
            and all(self.options)
        )

    @classmethod
    def from_raw(cls, raw: Any) -> "VocabularyItem":
        """Coerce an untrusted candidate (generator output, CSV row, stored JSON).

        The result may still be invalid; check ``is_valid`` before keeping it.
        """
        data = as_mapping(raw)
        options = data.get("options")
        if isinstance(options, (list, tuple)):
            cleaned = [clean_text(value) for value in options]
            options = [value for value in cleaned if value][: settings.OPTION_COUNT]
        else:
            options = []
        return cls(
            word=clean_text(data.get("word")),
            meaning=clean_text(data.get("meaning")),
            options=options,
            category=clean_text(data.get("category")) or settings.DEFAULT_CATEGORY,
        )


class QuizAnswerRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    word: str = ""
    selected: str = ""
    correct: str = ""
    is_correct: bool = Field(False, alias="isCorrect")
    answered_at: Optional[datetime] = Field(None, alias="answeredAt")

    @classmethod
    def from_raw(cls, raw: Any) -> "QuizAnswerRecord":
        data = as_mapping(raw)
        fields = {
            "word": clean_text(data.get("word")),
            "selected": clean_text(data.get("selected")),
            "correct": clean_text(data.get("correct")),
            "isCorrect": bool(data.get("isCorrect", data.get("is_correct"))),
        }
        answered_at = data.get("answeredAt", data.get("answered_at"))
        try:
            return cls.model_validate({**fields, "answeredAt": answered_at})
        except ValidationError:
            return cls.model_validate(fields)


class QuizResult(BaseModel):
    score: int = 0
    total: int = 0
    history: List[QuizAnswerRecord] = []
    timestamp: datetime


class WeaknessEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    word: str
    misses: int = 0
    last_missed_at: Optional[datetime] = Field(None, alias="lastMissedAt")


class Question(BaseModel):
    id: str
    word: str
    correct: str
    options: List[str]
    category: str = settings.DEFAULT_CATEGORY


def dump(model: BaseModel) -> dict:
    """JSON-ready dict using the persisted (camelCase) field names."""
    return model.model_dump(mode="json", by_alias=True)
