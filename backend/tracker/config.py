"""Application settings and validation."""

import logging
import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent
PASSWORD_SCHEMES = ("hex_sha256", "pbkdf2_sha256")

logger = logging.getLogger("tracker.config")


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Settings:
    ENV: str
    DATABASE_URL: str
    DB_POOL_SIZE: int
    DB_MAX_OVERFLOW: int
    SQL_ECHO: bool
    PASSWORD_SCHEME: str
    ALLOW_DEV_CORS: bool
    LEGACY_ERROR_STATUS: bool
    STATIC_DIR: Path
    HOST: str
    PORT: int
    LOG_LEVEL: str

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE / 'tracker.db'}")
        self.DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
        self.DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "10"))
        self.SQL_ECHO = _flag("SQL_ECHO", "false")
        self.PASSWORD_SCHEME = os.getenv("PASSWORD_SCHEME", "hex_sha256").lower()
        self.ALLOW_DEV_CORS = _flag("ALLOW_DEV_CORS", "true")
        self.LEGACY_ERROR_STATUS = _flag("LEGACY_ERROR_STATUS", "false")
        self.STATIC_DIR = Path(os.getenv("STATIC_DIR", str(BASE / "public")))
        self.HOST = os.getenv("HOST", "127.0.0.1")
        self.PORT = int(os.getenv("PORT", "3000"))
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self._validate()

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    def _validate(self):
        if self.PASSWORD_SCHEME not in PASSWORD_SCHEMES:
            raise RuntimeError(
                f"PASSWORD_SCHEME must be one of {', '.join(PASSWORD_SCHEMES)}; got {self.PASSWORD_SCHEME!r}"
            )
        if self.DB_POOL_SIZE < 1 or self.DB_MAX_OVERFLOW < 0:
            raise RuntimeError("DB_POOL_SIZE must be >= 1 and DB_MAX_OVERFLOW must be >= 0")
        if self.ENV != "dev" and self.PASSWORD_SCHEME == "hex_sha256":
            logger.warning("unsalted hex_sha256 password hashing in %s; set PASSWORD_SCHEME=pbkdf2_sha256", self.ENV)
