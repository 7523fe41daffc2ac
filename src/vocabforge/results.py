import logging
from typing import Any, Callable, List, Optional

from pydantic import ValidationError

from .clock import utcnow
from .models import QuizAnswerRecord, QuizResult, as_mapping, dump
from .storage import JsonState
from .weakness import WEAK_WORDS_KEY, WeaknessTracker

logger = logging.getLogger(__name__)

RESULTS_KEY = "results"


def to_count(value: Any) -> int:
    """Non-negative integer from loosely typed input; anything unusable is 0."""
    try:
        count = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(count, 0)


# --- Result Log ---
class ResultLog:
    def __init__(
        self,
        state: JsonState,
        tracker: WeaknessTracker,
        clock: Callable = utcnow,
    ):
        self.state = state
        self.tracker = tracker
        self.clock = clock

    def _stored(self) -> List[Any]:
        stored = self.state.read(RESULTS_KEY).unwrap_or([])
        if not isinstance(stored, list):
            logger.warning(f"Ignoring stored results of type {type(stored).__name__}")
            return []
        return stored

    @staticmethod
    def parse_stored(entry: Any) -> Optional[QuizResult]:
        """Read a logged result as loosely as it was written; None if unusable."""
        data = as_mapping(entry)
        history = data.get("history")
        if not isinstance(history, (list, tuple)):
            history = []
        try:
            return QuizResult(
                score=to_count(data.get("score")),
                total=to_count(data.get("total")),
                history=[QuizAnswerRecord.from_raw(row) for row in history],
                timestamp=data.get("timestamp"),
            )
        except ValidationError:
            return None

    def get_results(self) -> List[QuizResult]:
        """Logged sessions, most recent first."""
        results = []
        for entry in self._stored():
            result = self.parse_stored(entry)
            if result is None:
                logger.warning("Skipping unreadable quiz result")
            else:
                results.append(result)
        return results

    def normalize(self, candidate: Any) -> QuizResult:
        data = as_mapping(candidate)
        history = data.get("history")
        if not isinstance(history, (list, tuple)):
            history = []
        return QuizResult(
            score=to_count(data.get("score")),
            total=to_count(data.get("total")),
            history=[QuizAnswerRecord.from_raw(row) for row in history],
            timestamp=self.clock(),
        )

    def save_result(self, candidate: Any) -> List[QuizResult]:
        """Log a finished session and fold its misses into the weakness map.

        Earlier entries are written back exactly as stored. Both documents
        go out in a single write so they cannot drift apart. Returns the
        updated log, most recent first.
        """
        entry = self.normalize(candidate)
        stored = self._stored()
        weak = self.tracker.apply(entry.history, entry.timestamp)

        self.state.write_many(
            {
                RESULTS_KEY: [dump(entry), *stored],
                WEAK_WORDS_KEY: self.tracker.serialize(weak),
            }
        )
        logger.info(f"Saved quiz result {entry.score}/{entry.total}")
        results = [entry]
        for raw in stored:
            result = self.parse_stored(raw)
            if result is not None:
                results.append(result)
        return results
