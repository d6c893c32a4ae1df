import os


class Settings:
    PROJECT_NAME: str = "civicquest"
    DEBUG: bool = os.environ.get("CIVICQUEST_DEBUG", "") == "1"
    LOG_DIR: str = os.environ.get("LOG_DIR", "log")
    LOG_FILE: str = "civicquest.log"
    QUIZ_DIR: str = os.environ.get("QUIZ_DIR", "quizzes")
    SESSION_COOKIE_NAME: str = "quest_session_id"
    SESSION_TIMEOUT_MINUTES: int = int(os.environ.get("SESSION_TIMEOUT_MINUTES", "120"))
    ROOT_PATH: str = os.environ.get("ROOT_PATH", "")


settings = Settings()
