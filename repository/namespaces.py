# repository/namespaces.py
from typing import Final

ROOT: Final[str] = "quizverify"

VERIFICATION_LOGS: Final[str] = f"{ROOT}:logs"  # per-subject audit records
CORPUS: Final[str] = f"{ROOT}:corpus"  # per-chapter verified records
