import logging
from typing import Optional

from .config import settings
from .log import setup_logging
from .service import StorageService
from .storage import KeyValueStore

logger = logging.getLogger(__name__)


# --- App Factory ---
def create_service(store: Optional[KeyValueStore] = None) -> StorageService:
    """Configure logging, connect storage and load seed words on first run."""
    setup_logging()
    if store is None:
        from .redis_store import RedisStore

        store = RedisStore()
    service = StorageService(store)
    if not service.get_words():
        words = service.seed(settings.VOCAB_DIR)
        logger.info(f"Seeded repository with {len(words)} words")
    return service
