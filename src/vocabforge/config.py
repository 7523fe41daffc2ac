import os


class Settings:
    PROJECT_NAME: str = "vocabforge"
    DEBUG: bool = False
    LOG_DIR: str = os.environ.get("VOCABFORGE_LOG_DIR", "log")
    LOG_FILE: str = "vocabforge.log"
    REDIS_URL: str = os.environ.get("REDIS_URL", "redis://localhost:6379/0")
    KEY_PREFIX: str = os.environ.get("VOCABFORGE_KEY_PREFIX", "vocabforge.")
    VOCAB_DIR: str = "vocabulary"
    PRIORITY_LIMIT: int = 20
    QUIZ_SIZE: int = 10
    OPTION_COUNT: int = 4
    DEFAULT_CATEGORY: str = "Vocabulary"
    ACCEPTED_EXTENSIONS: tuple = (".pdf", ".docx", ".xlsx")
    SOURCE_TEXT_LIMIT: int = 5000


settings = Settings()
