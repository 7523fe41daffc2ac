import logging
from logging.handlers import RotatingFileHandler

import pytest

from vocabforge.app import create_service
from vocabforge.config import settings
from vocabforge.storage import MemoryStore

from conftest import answer, make_item


class TestStats:
    def test_empty(self, service):
        assert service.get_stats() == {
            "accuracy": 0,
            "words": 0,
            "sessions": 0,
            "weak_words": 0,
        }

    def test_accuracy_over_all_sessions(self, service):
        service.save_words([make_item("a"), make_item("b")])
        service.save_result({"score": 1, "total": 2, "history": [answer("a", False)]})
        service.save_result({"score": 1, "total": 1, "history": [answer("b", True)]})

        stats = service.get_stats()

        assert stats["accuracy"] == 67
        assert stats["words"] == 2
        assert stats["sessions"] == 2
        assert stats["weak_words"] == 1


def _file_handlers():
    logger = logging.getLogger(settings.PROJECT_NAME)
    return [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]


@pytest.fixture
def log_env(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "LOG_DIR", str(tmp_path / "log"))
    monkeypatch.setattr(settings, "VOCAB_DIR", str(tmp_path / "missing"))
    logger = logging.getLogger(settings.PROJECT_NAME)
    for handler in _file_handlers():
        logger.removeHandler(handler)
    yield tmp_path
    for handler in _file_handlers():
        logger.removeHandler(handler)
        handler.close()


class TestCreateService:
    def test_seeds_empty_repository(self, log_env, monkeypatch):
        vocab_dir = log_env / "vocabulary"
        vocab_dir.mkdir()
        (vocab_dir / "basic.csv").write_text(
            "word,meaning,option_1,option_2,option_3,option_4\n"
            "Hund,dog,cat,dog,tree,house\n",
            encoding="utf-8",
        )
        monkeypatch.setattr(settings, "VOCAB_DIR", str(vocab_dir))

        service = create_service(MemoryStore())

        assert [w.word for w in service.get_words()] == ["Hund"]
        assert (log_env / "log" / settings.LOG_FILE).exists()

    def test_leaves_existing_words_alone(self, log_env):
        store = MemoryStore()
        create_service(store).save_words([make_item("kept")])

        service = create_service(store)

        assert [w.word for w in service.get_words()] == ["kept"]

    def test_repeated_setup_keeps_one_file_handler(self, log_env):
        create_service(MemoryStore())
        create_service(MemoryStore())
        create_service(MemoryStore())

        assert len(_file_handlers()) == 1


def test_package_exposes_entry_points(store):
    import vocabforge

    service = vocabforge.StorageService(store)
    session = vocabforge.QuizFactory.create(service)
    assert isinstance(session, vocabforge.QuizSession)
    assert callable(vocabforge.create_service)
    assert "ImportPipeline" in vocabforge.__all__
