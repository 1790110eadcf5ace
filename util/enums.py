# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class CorrectionKind(str, Enum):
    passage = "passage"
    glossary = "glossary"


class SkipReason(str, Enum):
    empty_corpus = "empty_corpus"
    content_too_large = "content_too_large"
    no_marking_data = "no_marking_data"


class VerificationStatus(str, Enum):
    verified = "verified"
    auto_corrected = "auto_corrected"
    skipped = "skipped"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    CONTENT_TOO_LARGE = ErrorInfo("Quiz content too large", 413)
    LOG_STORE_UNAVAILABLE = ErrorInfo(
        "Verification log store unavailable", status.HTTP_503_SERVICE_UNAVAILABLE
    )
