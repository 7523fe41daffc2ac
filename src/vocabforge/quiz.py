import logging
import random
from typing import Callable, List, Optional, Sequence

from .clock import utcnow
from .config import settings
from .exceptions import QuizError
from .models import Question, QuizAnswerRecord, VocabularyItem
from .service import StorageService
from .vocabulary import DEFAULT_WORDS

logger = logging.getLogger(__name__)


def build_question(
    item: VocabularyItem, index: int, rng: Optional[random.Random] = None
) -> Question:
    """Shuffle the options and make sure the meaning is one of them."""
    rng = rng or random
    options = list(item.options)
    rng.shuffle(options)
    options = options[: settings.OPTION_COUNT]

    if item.meaning and item.meaning not in options:
        if len(options) < settings.OPTION_COUNT:
            options.append(item.meaning)
        else:
            options[0] = item.meaning

    return Question(
        id=f"{item.word or 'word'}-{index}",
        word=item.word,
        correct=item.meaning,
        options=options,
        category=item.category or settings.DEFAULT_CATEGORY,
    )


def is_quiz_ready(question: Question) -> bool:
    return bool(
        question.word
        and question.correct
        and len(question.options) == settings.OPTION_COUNT
    )


class QuizSession:
    """One pass through a list of words, collecting answers in order."""

    def __init__(
        self,
        words: Sequence[VocabularyItem],
        rng: Optional[random.Random] = None,
        clock: Callable = utcnow,
    ):
        questions = [build_question(item, i, rng) for i, item in enumerate(words)]
        self.questions: List[Question] = [q for q in questions if is_quiz_ready(q)]
        self.score = 0
        self.history: List[QuizAnswerRecord] = []
        self.clock = clock

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def current_index(self) -> int:
        return len(self.history)

    @property
    def current(self) -> Optional[Question]:
        if self.finished:
            return None
        return self.questions[self.current_index]

    @property
    def finished(self) -> bool:
        return self.current_index >= self.total

    def answer(self, option: str) -> QuizAnswerRecord:
        question = self.current
        if question is None:
            raise QuizError("Quiz already finished")
        if option not in question.options:
            raise QuizError(f"{option!r} is not an option for {question.word!r}")

        is_correct = option == question.correct
        if is_correct:
            self.score += 1

        record = QuizAnswerRecord(
            word=question.word,
            selected=option,
            correct=question.correct,
            is_correct=is_correct,
            answered_at=self.clock(),
        )
        self.history.append(record)
        return record

    def to_result(self) -> dict:
        """Payload for StorageService.save_result."""
        return {"score": self.score, "total": self.total, "history": self.history}


class QuizFactory:
    """Builds the next session from the most-missed words."""

    @staticmethod
    def create(
        service: StorageService,
        limit: int = settings.PRIORITY_LIMIT,
        rng: Optional[random.Random] = None,
    ) -> QuizSession:
        words = service.get_prioritized_words(limit)
        if not words:
            logger.info("Repository empty, using default words.")
            words = DEFAULT_WORDS[:limit]
        return QuizSession(words, rng=rng)
