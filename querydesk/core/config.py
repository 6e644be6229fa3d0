import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
DOTENV_PATH = (Path(__file__).resolve().parent.parent.parent / ".env")
load_dotenv(dotenv_path=DOTENV_PATH, override=False)


class Settings:
    # Backend command executor
    BACKEND_URL: str = os.getenv("QUERYDESK_BACKEND_URL", "http://127.0.0.1:4310").strip().rstrip("/")

    # Durable key-value store for profiles
    STORE_DB_URL: str = os.getenv("QUERYDESK_STORE_DB_URL", "sqlite:///./querydesk.db").strip()

    # Logging
    LOG_LEVEL: str = os.getenv("QUERYDESK_LOG_LEVEL", "INFO").strip().upper()

    # App Configuration
    APP_TITLE: str = "querydesk: connection profiles + NL→SQL orchestration"

    def validate(self):
        if not self.BACKEND_URL:
            raise RuntimeError(
                "QUERYDESK_BACKEND_URL is empty. Point it at the backend command executor, "
                "e.g. http://127.0.0.1:4310"
            )
        if not self.STORE_DB_URL:
            raise RuntimeError("QUERYDESK_STORE_DB_URL is empty.")


settings = Settings()
settings.validate()
