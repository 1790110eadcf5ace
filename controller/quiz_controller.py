# controller/quiz_controller.py
from fastapi import APIRouter, Depends, Path, Query, status
from controller.controller_dependencies import (
    enforce_max_request_size,
    get_quiz_verification_service,
    quiz_rate_limiter,
)
from model.api import (
    ClearLogsResponse,
    VerificationLogsResponse,
    VerifyQuizRequest,
    VerifyQuizResponse,
)
from service.quiz_verification_service import QuizVerificationService
from util.constants import InternalURIs

quiz_router = APIRouter(dependencies=[Depends(quiz_rate_limiter)])


@quiz_router.post(
    InternalURIs.VERIFY_QUIZ,
    response_model=VerifyQuizResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(enforce_max_request_size)],
)
async def verify_quiz(
    payload: VerifyQuizRequest,
    service: QuizVerificationService = Depends(get_quiz_verification_service),
) -> VerifyQuizResponse:
    return await service.verify(payload)


@quiz_router.get(
    InternalURIs.VERIFICATION_LOGS + "/{subjectId}",
    response_model=VerificationLogsResponse,
)
async def verification_logs(
    subjectId: str = Path(min_length=1, max_length=128),
    limit: int | None = Query(default=None, ge=1, le=200),
    service: QuizVerificationService = Depends(get_quiz_verification_service),
) -> VerificationLogsResponse:
    return await service.logs_for(subjectId, limit)


@quiz_router.delete(
    InternalURIs.VERIFICATION_LOGS + "/{subjectId}",
    response_model=ClearLogsResponse,
)
async def clear_verification_logs(
    subjectId: str = Path(min_length=1, max_length=128),
    service: QuizVerificationService = Depends(get_quiz_verification_service),
) -> ClearLogsResponse:
    return await service.clear_logs(subjectId)
