import logging
from datetime import datetime
from typing import Dict, Iterable

from pydantic import ValidationError

from .models import QuizAnswerRecord, WeaknessEntry, dump
from .storage import JsonState

logger = logging.getLogger(__name__)

WEAK_WORDS_KEY = "weakWords"


# --- Weakness Tracker ---
class WeaknessTracker:
    """Per-word miss counters derived from answer history.

    Counters only ever grow: a correct answer registers the word but never
    lowers its misses.
    """

    def __init__(self, state: JsonState):
        self.state = state

    def get_weak_words_map(self) -> Dict[str, WeaknessEntry]:
        stored = self.state.read(WEAK_WORDS_KEY).unwrap_or({})
        if not isinstance(stored, dict):
            logger.warning(f"Ignoring stored weak words of type {type(stored).__name__}")
            return {}
        weak = {}
        for key, entry in stored.items():
            try:
                weak[key] = WeaknessEntry.model_validate(entry)
            except ValidationError:
                logger.warning(f"Skipping corrupt weakness entry for {key!r}")
        return weak

    def apply(
        self, history: Iterable[QuizAnswerRecord], now: datetime
    ) -> Dict[str, WeaknessEntry]:
        """Return the weakness map with ``history`` folded in. Does not persist."""
        weak = self.get_weak_words_map()
        for record in history:
            word = record.word.strip()
            if not word:
                continue
            key = word.lower()
            entry = weak.get(key)
            if entry is None:
                entry = weak[key] = WeaknessEntry(word=word)
            if not record.is_correct:
                entry.misses += 1
                entry.last_missed_at = now
        return weak

    @staticmethod
    def serialize(weak: Dict[str, WeaknessEntry]) -> dict:
        return {key: dump(entry) for key, entry in weak.items()}
