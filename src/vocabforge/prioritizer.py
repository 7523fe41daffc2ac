from typing import List, Mapping, Sequence

from .config import settings
from .models import VocabularyItem, WeaknessEntry


def prioritize(
    words: Sequence[VocabularyItem],
    weak: Mapping[str, WeaknessEntry],
    limit: int = settings.PRIORITY_LIMIT,
) -> List[VocabularyItem]:
    """Most-missed words first, repository order kept among equal weights."""

    def weight(item: VocabularyItem) -> int:
        entry = weak.get(item.key)
        return entry.misses if entry else 0

    # sorted() is stable, so ties keep their original order
    ranked = sorted(words, key=weight, reverse=True)
    return ranked[: max(limit, 0)]
