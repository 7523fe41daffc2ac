from datetime import datetime, timezone

import pytest

from vocabforge.service import StorageService
from vocabforge.storage import MemoryStore

FIXED_NOW = datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)


def make_item(word, meaning="meaning", options=None, category=None):
    item = {
        "word": word,
        "meaning": meaning,
        "options": options if options is not None else ["a", "b", "c", meaning],
    }
    if category is not None:
        item["category"] = category
    return item


def answer(word, is_correct):
    return {"word": word, "selected": "x", "correct": "y", "isCorrect": is_correct}


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def service(store, clock):
    return StorageService(store, clock=clock)
