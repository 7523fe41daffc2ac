from .app import create_service
from .importer import ImportPipeline, QuizGenerator, TextExtractor
from .quiz import QuizFactory, QuizSession
from .service import StorageService
from .storage import JsonState, KeyValueStore, MemoryStore

__all__ = [
    "create_service",
    "ImportPipeline",
    "QuizGenerator",
    "TextExtractor",
    "QuizFactory",
    "QuizSession",
    "StorageService",
    "JsonState",
    "KeyValueStore",
    "MemoryStore",
]
