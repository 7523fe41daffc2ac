import json
import logging
import os
import re
from abc import ABC, abstractmethod
from typing import Any, List, NamedTuple, Union

from .config import settings
from .exceptions import ImportRejected
from .models import VocabularyItem
from .service import StorageService

logger = logging.getLogger(__name__)

CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


# --- Collaborators ---
class TextExtractor(ABC):
    """Turns an uploaded document into plain text. Empty text means unreadable."""

    @abstractmethod
    def extract(self, data: bytes, content_type: str) -> str:
        pass


class QuizGenerator(ABC):
    """Produces raw vocabulary candidates from source text.

    Expected to return QUIZ_SIZE items of four options each, but nothing
    it returns is trusted.
    """

    @abstractmethod
    def generate(self, source_text: str) -> Union[str, List[Any], dict]:
        pass


class ImportReport(NamedTuple):
    received: int
    accepted: int
    total_words: int


def parse_candidates(payload: Union[str, List[Any], dict]) -> List[Any]:
    """Accept a JSON array, ``{"words": [...]}``, or either as fenced model text."""
    if isinstance(payload, str):
        try:
            payload = json.loads(CODE_FENCE.sub("", payload).strip())
        except ValueError as e:
            raise ImportRejected("The generator returned unreadable output.") from e
    if isinstance(payload, dict):
        payload = payload.get("words", [])
    if not isinstance(payload, list):
        raise ImportRejected("The generator returned no vocabulary list.")
    return payload


# --- Import Pipeline ---
class ImportPipeline:
    def __init__(
        self,
        extractor: TextExtractor,
        generator: QuizGenerator,
        service: StorageService,
    ):
        self.extractor = extractor
        self.generator = generator
        self.service = service

    def run(self, filename: str, data: bytes, content_type: str = "") -> ImportReport:
        extension = os.path.splitext(filename or "")[1].lower()
        if extension not in settings.ACCEPTED_EXTENSIONS:
            raise ImportRejected("Invalid file type. Please upload PDF, DOCX, or XLSX.")

        text = (self.extractor.extract(data, content_type) or "").strip()
        if not text:
            raise ImportRejected(f"No readable text found in {filename}.")

        candidates = parse_candidates(
            self.generator.generate(text[: settings.SOURCE_TEXT_LIMIT])
        )
        accepted = sum(1 for raw in candidates if VocabularyItem.from_raw(raw).is_valid)
        if not accepted:
            logger.warning(f"No usable words generated from {filename}")
            raise ImportRejected("No valid quiz words could be generated from this file.")

        words = self.service.save_words(candidates)
        logger.info(
            f"Imported {filename}: {accepted}/{len(candidates)} candidate(s) accepted, "
            f"{len(words)} words total"
        )
        return ImportReport(len(candidates), accepted, len(words))
