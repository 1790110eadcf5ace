# controller/controller_dependencies.py
from fastapi import HTTPException, Request
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from repository.corpus_cache_repository import CorpusCacheRepository
from repository.verification_log_repository import VerificationLogRepository
from service.quiz_verification_service import QuizVerificationService
from service.quran_corpus_service import QuranCorpusService

quiz_rate_limiter = RateLimiter(
    times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS
)


def get_quiz_verification_service() -> QuizVerificationService:
    _logs = VerificationLogRepository()
    _corpus = QuranCorpusService(CorpusCacheRepository())
    return QuizVerificationService(_logs, _corpus)


async def enforce_max_request_size(request: Request) -> None:
    # Fast pre-check via Content-Length; the service re-checks content length itself
    max_bytes = settings.MAX_REQUEST_KB * 1024
    cl = request.headers.get("content-length")
    if cl and cl.isdigit() and int(cl) > max_bytes:
        raise HTTPException(
            status_code=413,
            detail={
                "ok": False,
                "error": "request_too_large",
                "maxKb": settings.MAX_REQUEST_KB,
            },
        )
