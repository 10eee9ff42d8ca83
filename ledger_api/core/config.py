import os
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PROJECT_NAME: str = "Bank Ledger API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))

    # Flat-file storage
    DATA_DIR: str = os.getenv("DATA_DIR", "./data")
    ACCOUNTS_COLLECTION: str = os.getenv("ACCOUNTS_COLLECTION", "accounts")
    TRANSACTIONS_COLLECTION: str = os.getenv("TRANSACTIONS_COLLECTION", "transactions")
    STORE_JSON_INDENT: int = max(0, int(os.getenv("STORE_JSON_INDENT", "2")))

    # In-memory activity log exposed unauthenticated at {API_PREFIX}/logs; off unless enabled.
    REQUEST_LOG_BUFFER_ENABLED: bool = os.getenv("REQUEST_LOG_BUFFER_ENABLED", "0").strip() in ("1", "true", "yes", "on")
    LOG_BUFFER_MAXLEN: int = max(100, int(os.getenv("LOG_BUFFER_MAXLEN", "1000")))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    # Empty LOG_DIR keeps logging on the console only.
    LOG_DIR: str = os.getenv("LOG_DIR", "")
    LOG_FILE_NAME: str = os.getenv("LOG_FILE_NAME", "ledger-api.log")
    LOG_FILE_ROTATION_WHEN: str = os.getenv("LOG_FILE_ROTATION_WHEN", "midnight")
    LOG_FILE_ROTATION_INTERVAL: int = max(1, int(os.getenv("LOG_FILE_ROTATION_INTERVAL", "1")))
    LOG_FILE_RETENTION_DAYS: int = max(1, int(os.getenv("LOG_FILE_RETENTION_DAYS", "7")))

    class Config:
        case_sensitive = True


settings = Settings()
