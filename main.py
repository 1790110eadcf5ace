from fastapi_limiter import FastAPILimiter
import routes
from contextlib import asynccontextmanager
from util.enums import Environment, Color
from fastapi import FastAPI, Request
from starlette.middleware.cors import CORSMiddleware
from config.settings import settings
from config.cache import close_redis, get_redis, redis_alive
from fastapi.responses import JSONResponse
from service.quiz_verification_service import relation_rules_from_settings
from util.logger import init_logger


async def _client_id(request: Request) -> str:
    # Rate-limit bucket: first x-forwarded-for hop behind a trusted proxy, else the peer
    if settings.TRUST_PROXY:
        fwd = request.headers.get("x-forwarded-for")
        if fwd:
            return fwd.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@asynccontextmanager
async def lifespan(fastApi: FastAPI):
    logger = init_logger()
    print(f"{Color.GREEN}quiz-verifier starting ({settings.APP_ENV}){Color.RESET}")
    logger.info(
        "startup.engine relation_rules=%d match_floor=%.2f verified=%.2f distinct=%.2f",
        len(relation_rules_from_settings(settings.EXTRA_RELATION_PATTERNS)),
        settings.MATCH_FLOOR,
        settings.VERIFIED_THRESHOLD,
        settings.DISTINCT_THRESHOLD,
    )
    try:
        # Log store, corpus cache and limiter share one client
        await FastAPILimiter.init(await get_redis(), identifier=_client_id)
    except Exception as e:
        logger.error("startup.redis.error err=%s", e)
        raise
    print(f"{Color.BLUE}Ready: {settings.QURAN_API_URL} translation={settings.QURAN_TRANSLATION_ID}{Color.RESET}")

    try:
        yield
    finally:
        try:
            await close_redis()
        except Exception as e:
            logger.error("shutdown.redis.error err=%s", e)
        print(f"{Color.RED}quiz-verifier stopped{Color.RESET}")


app: FastAPI = FastAPI(title="quiz-verifier", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ALLOWED_ORIGIN],
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Accept"],
)


@app.get("/healthz")
async def healthz():
    return {"ok": True, "redis": await redis_alive()}


@app.exception_handler(429)
async def ratelimit_handler(request: Request, exc):
    wait = settings.RATE_LIMIT_SECONDS
    return JSONResponse(
        status_code=429,
        content={
            "ok": False,
            "error": "rate_limited",
            "message": f"Verification limit reached ({settings.RATE_LIMIT_TIMES}/{wait}s). Retry in {wait}s.",
        },
        headers={"Retry-After": str(wait)},
    )


routes.register_routes(app)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=settings.APP_ENV == Environment.DEV,
        log_config=None,
    )
