"""Queue API routes for registration, admission and token checks."""

from fastapi import APIRouter, Query, Response

from waitroom.api.dependencies import QueueManager, QueueName, Settings
from waitroom.api.schemas.queue import (
    AdmittedUserResponse,
    AllowedUserResponse,
    AllowUserResponse,
    QueueStatusResponse,
    RankNumberResponse,
    RegisterUserResponse,
    ServerExceptionResponse,
    TouchResponse,
)
from waitroom.queue.keys import token_cookie_name

router = APIRouter(prefix="/queue", tags=["queue"])


# =============================================================================
# Registration and Admission
# =============================================================================


@router.post(
    "",
    response_model=RegisterUserResponse,
    responses={409: {"model": ServerExceptionResponse}},
)
async def register_user(
    queue: QueueName,
    manager: QueueManager,
    user_id: int = Query(..., ge=0, description="User identifier"),
) -> RegisterUserResponse:
    """Register a user in the wait queue.

    Raises:
        AlreadyRegisteredError: 409 if the user is already waiting; query
            GET /queue/rank instead.
    """
    rank = await manager.register(queue, user_id)
    return RegisterUserResponse(rank=rank)


@router.post("/allow", response_model=AllowUserResponse)
async def allow_user(
    queue: QueueName,
    manager: QueueManager,
    count: int = Query(..., ge=1, description="Maximum number of users to admit"),
) -> AllowUserResponse:
    """Admit up to ``count`` users from the head of the wait queue."""
    allowed = await manager.admit_batch(queue, count)
    return AllowUserResponse(requested_count=count, allowed_count=allowed)


# =============================================================================
# Lookups
# =============================================================================


@router.get("/allowed", response_model=AllowedUserResponse)
async def is_allowed_user(
    queue: QueueName,
    manager: QueueManager,
    user_id: int = Query(..., ge=0, description="User identifier"),
    token: str = Query("", description="Token previously issued by /queue/touch"),
) -> AllowedUserResponse:
    """Check whether a token is the one issued for this user and queue."""
    return AllowedUserResponse(allowed=manager.verify_token(queue, user_id, token))


@router.get("/admitted", response_model=AdmittedUserResponse)
async def is_admitted_user(
    queue: QueueName,
    manager: QueueManager,
    user_id: int = Query(..., ge=0, description="User identifier"),
) -> AdmittedUserResponse:
    """Check whether the user has been moved to the admitted set."""
    return AdmittedUserResponse(admitted=await manager.is_admitted(queue, user_id))


@router.get("/rank", response_model=RankNumberResponse)
async def get_rank_user(
    queue: QueueName,
    manager: QueueManager,
    user_id: int = Query(..., ge=0, description="User identifier"),
) -> RankNumberResponse:
    """Get the user's 1-based wait rank (-1 when not waiting)."""
    return RankNumberResponse(rank=await manager.rank(queue, user_id))


@router.get("/status", response_model=QueueStatusResponse)
async def get_queue_status(queue: QueueName, manager: QueueManager) -> QueueStatusResponse:
    """Get the number of users waiting in a queue."""
    return QueueStatusResponse(queue=queue, waiting=await manager.queue_size(queue))


# =============================================================================
# Token Issue
# =============================================================================


@router.get("/touch", response_model=TouchResponse)
async def touch(
    queue: QueueName,
    manager: QueueManager,
    settings: Settings,
    response: Response,
    user_id: int = Query(..., ge=0, description="User identifier"),
) -> TouchResponse:
    """Issue the admission token for a user and set it as a cookie."""
    token = manager.issue_token(queue, user_id)
    response.set_cookie(
        key=token_cookie_name(queue),
        value=token,
        max_age=settings.token.cookie_max_age_seconds,
        path=settings.token.cookie_path,
    )
    return TouchResponse(token=token)
