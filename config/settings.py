# config/settings.py
import os
import sys
from dotenv import load_dotenv
import re
from pydantic import ValidationError, Field, field_validator
from pydantic_settings import BaseSettings
from util.constants import CORRECTNESS_MARKER, Limits, Thresholds
from util.enums import Environment
import logging


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()

_log = logging.getLogger("config.settings")


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(..., validation_alias="APP_ENV")
    REDIS_URL: str = Field(..., validation_alias="REDIS_URL")
    PERSISTENCE_TTL_SECONDS: int = Field(
        default=30 * 24 * 3600, validation_alias="PERSISTENCE_TTL_SECONDS"
    )
    CORPUS_CACHE_TTL_SECONDS: int = Field(
        default=24 * 3600, validation_alias="CORPUS_CACHE_TTL_SECONDS"
    )

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(..., validation_alias="ALLOWED_ORIGIN")
    RATE_LIMIT_TIMES: int = Field(default=30, validation_alias="RATE_LIMIT_TIMES")
    RATE_LIMIT_SECONDS: int = Field(default=60, validation_alias="RATE_LIMIT_SECONDS")
    MAX_REQUEST_KB: int = Field(default=512, validation_alias="MAX_REQUEST_KB")
    TRUST_PROXY: bool = Field(default=False, validation_alias="TRUST_PROXY")

    # Verified corpus (Quran.com v4)
    QURAN_API_URL: str = Field(
        default="https://api.quran.com/api/v4", validation_alias="QURAN_API_URL"
    )
    QURAN_TRANSLATION_ID: int = Field(
        default=20, validation_alias="QURAN_TRANSLATION_ID"
    )  # Saheeh International
    QURAN_HTTP_TIMEOUT: float = Field(default=15.0, validation_alias="QURAN_HTTP_TIMEOUT")

    # Verification engine
    MATCH_FLOOR: float = Field(
        default=Thresholds.MATCH_FLOOR, ge=0.0, le=1.0, validation_alias="MATCH_FLOOR"
    )
    VERIFIED_THRESHOLD: float = Field(
        default=Thresholds.VERIFIED, ge=0.0, le=1.0, validation_alias="VERIFIED_THRESHOLD"
    )
    DISTINCT_THRESHOLD: float = Field(
        default=Thresholds.DISTINCT, ge=0.0, le=1.0, validation_alias="DISTINCT_THRESHOLD"
    )
    MAX_CONTENT_CHARS: int = Field(
        default=Limits.MAX_CONTENT_CHARS, gt=0, validation_alias="MAX_CONTENT_CHARS"
    )
    MAX_QUESTIONS: int = Field(
        default=Limits.MAX_QUESTIONS, gt=0, validation_alias="MAX_QUESTIONS"
    )
    CORRECTNESS_MARKER: str = Field(
        default=CORRECTNESS_MARKER, min_length=1, validation_alias="CORRECTNESS_MARKER"
    )
    # JSON list of extra regexes that mark a question as passage-related.
    EXTRA_RELATION_PATTERNS: list[str] = Field(
        default_factory=list, validation_alias="EXTRA_RELATION_PATTERNS"
    )
    AUDIT_LOG_MAX_ENTRIES: int = Field(default=50, validation_alias="AUDIT_LOG_MAX_ENTRIES")
    # Ship the built-in vocabulary table behind caller-supplied glossary entries
    USE_DEFAULT_GLOSSARY: bool = Field(default=True, validation_alias="USE_DEFAULT_GLOSSARY")

    # Logging knobs
    LOGGER_NAME: str = "quiz-verifier"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")

    @field_validator("EXTRA_RELATION_PATTERNS")
    @classmethod
    def _compile_patterns(cls, v: list[str]) -> list[str]:
        # Reject bad regexes at startup rather than on the first request
        for p in v:
            try:
                re.compile(p)
            except re.error as e:
                raise ValueError(f"invalid pattern {p!r}: {e}") from e
        return v


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
