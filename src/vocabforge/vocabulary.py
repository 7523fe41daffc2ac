import glob
import logging
import os
from typing import Any, Dict, Iterable, List

import pandas as pd

from .models import VocabularyItem, dump
from .storage import JsonState

logger = logging.getLogger(__name__)

WORDS_KEY = "words"
OPTION_COLUMNS = ["option_1", "option_2", "option_3", "option_4"]

DEFAULT_WORDS: List[VocabularyItem] = [
    VocabularyItem(
        word="Ubiquitous",
        meaning="Present, appearing, or found everywhere",
        options=[
            "Rarely seen",
            "Present, appearing, or found everywhere",
            "Highly technical",
            "Difficult to understand",
        ],
        category="Vocabulary",
    ),
    VocabularyItem(
        word="Break the ice",
        meaning="To initiate social interaction and reduce tension",
        options=[
            "Cause an argument",
            "To initiate social interaction and reduce tension",
            "End a meeting quickly",
            "Ignore an awkward moment",
        ],
        category="Idioms",
    ),
]


# --- Word Repository ---
class WordRepository:
    """Vocabulary items keyed by lowercase word, merged last-write-wins."""

    def __init__(self, state: JsonState):
        self.state = state

    def get_words(self) -> List[VocabularyItem]:
        stored = self.state.read(WORDS_KEY).unwrap_or([])
        if not isinstance(stored, list):
            logger.warning(f"Ignoring stored words of type {type(stored).__name__}")
            return []
        return [VocabularyItem.from_raw(item) for item in stored]

    def save_words(self, candidates: Iterable[Any]) -> List[VocabularyItem]:
        incoming = []
        dropped = 0
        for raw in candidates or []:
            item = VocabularyItem.from_raw(raw)
            if item.is_valid:
                incoming.append(item)
            else:
                dropped += 1
        if dropped:
            logger.warning(f"Dropped {dropped} invalid vocabulary candidate(s)")

        merged: Dict[str, VocabularyItem] = {}
        for item in self.get_words():
            merged[item.key] = item
        for item in incoming:
            merged[item.key] = item

        words = list(merged.values())
        self.state.write(WORDS_KEY, [dump(item) for item in words])
        logger.info(f"Merged {len(incoming)} word(s), repository now holds {len(words)}")
        return words


# --- Seed sets ---
def load_seed_words(directory: str) -> List[VocabularyItem]:
    """Read every CSV seed set in ``directory``.

    Expected columns: word, meaning, option_1..option_4 and optionally
    category. Rows are normalized like any import; invalid rows are skipped.
    """
    if not os.path.isdir(directory):
        logger.warning(f"Seed directory {directory} not found.")
        return []

    words: List[VocabularyItem] = []
    for file_path in sorted(glob.glob(os.path.join(directory, "*.csv"))):
        file_name = os.path.splitext(os.path.basename(file_path))[0]
        try:
            df = pd.read_csv(file_path, encoding="utf-8", dtype=str, keep_default_na=False)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load {file_path}: {e}")
            continue
        missing = {"word", "meaning", *OPTION_COLUMNS} - set(df.columns)
        if missing:
            logger.error(f"Skipping {file_name}: Missing columns {sorted(missing)}.")
            continue

        loaded = 0
        for row in df.to_dict("records"):
            item = VocabularyItem.from_raw(
                {
                    "word": row["word"],
                    "meaning": row["meaning"],
                    "options": [row[column] for column in OPTION_COLUMNS],
                    "category": row.get("category"),
                }
            )
            if item.is_valid:
                words.append(item)
                loaded += 1
        logger.info(f"Loaded {loaded} words from {file_name}")
    return words
