"""Waiting room entry point used by the gateway redirect."""

import logging

from fastapi import APIRouter, Query, Request
from fastapi.responses import RedirectResponse

from waitroom.api.dependencies import QueueManager, QueueName
from waitroom.api.schemas.queue import WaitingRoomResponse
from waitroom.core.errors import AlreadyRegisteredError
from waitroom.queue.keys import token_cookie_name

logger = logging.getLogger(__name__)

router = APIRouter(tags=["waiting-room"])


@router.get("/waiting-room", response_model=None)
async def waiting_room(
    request: Request,
    queue: QueueName,
    manager: QueueManager,
    user_id: int = Query(..., ge=0, description="User identifier"),
    redirect_url: str = Query(..., min_length=1, description="Where to send the user once admitted"),
) -> RedirectResponse | WaitingRoomResponse:
    """Send admitted users on, register everybody else.

    A valid token cookie redirects to ``redirect_url``. Otherwise the user is
    registered, or, if already waiting, their current rank is looked up.
    """
    token = request.cookies.get(token_cookie_name(queue), "")
    if manager.verify_token(queue, user_id, token):
        return RedirectResponse(url=redirect_url, status_code=307)

    try:
        rank = await manager.register(queue, user_id)
    except AlreadyRegisteredError:
        rank = await manager.rank(queue, user_id)
        logger.debug(f"User {user_id} already waiting in {queue}, rank {rank}")

    return WaitingRoomResponse(number=rank, user_id=user_id, queue=queue)
