import logging
import math
from typing import Any, Callable, Dict, Iterable, List, Optional

from .clock import utcnow
from .config import settings
from .models import QuizResult, VocabularyItem, WeaknessEntry
from .prioritizer import prioritize
from .results import ResultLog
from .storage import JsonState, KeyValueStore
from .vocabulary import WordRepository, load_seed_words
from .weakness import WeaknessTracker

logger = logging.getLogger(__name__)


# --- Service Layer ---
class StorageService:
    """Sole owner of the persisted words, results and weakness map."""

    def __init__(
        self,
        store: Optional[KeyValueStore],
        prefix: str = settings.KEY_PREFIX,
        clock: Callable = utcnow,
    ):
        self.state = JsonState(store, prefix)
        self.words = WordRepository(self.state)
        self.tracker = WeaknessTracker(self.state)
        self.results = ResultLog(self.state, self.tracker, clock)

    def get_words(self) -> List[VocabularyItem]:
        return self.words.get_words()

    def save_words(self, candidates: Iterable[Any]) -> List[VocabularyItem]:
        return self.words.save_words(candidates)

    def get_results(self) -> List[QuizResult]:
        return self.results.get_results()

    def save_result(self, candidate: Any) -> List[QuizResult]:
        return self.results.save_result(candidate)

    def get_weak_words_map(self) -> Dict[str, WeaknessEntry]:
        return self.tracker.get_weak_words_map()

    def get_prioritized_words(
        self, limit: int = settings.PRIORITY_LIMIT
    ) -> List[VocabularyItem]:
        return prioritize(self.get_words(), self.get_weak_words_map(), limit)

    def seed(self, directory: str = settings.VOCAB_DIR) -> List[VocabularyItem]:
        seed_words = load_seed_words(directory)
        if not seed_words:
            return self.get_words()
        return self.save_words(seed_words)

    def get_stats(self) -> Dict[str, int]:
        results = self.get_results()
        score = sum(result.score for result in results)
        total = sum(result.total for result in results)
        accuracy = math.floor(score / total * 100 + 0.5) if total else 0
        return {
            "accuracy": accuracy,
            "words": len(self.get_words()),
            "sessions": len(results),
            "weak_words": sum(
                1 for entry in self.get_weak_words_map().values() if entry.misses > 0
            ),
        }
