class VocabForgeError(Exception):
    """Base class for errors raised by vocabforge."""


class StorageError(VocabForgeError):
    """The key-value store could not be read or written, or held corrupt JSON."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"{key}: {reason}")
        self.key = key
        self.reason = reason


class QuizError(VocabForgeError):
    pass


class ImportRejected(VocabForgeError):
    """An upload could not be turned into quiz words; the message is user-facing."""
