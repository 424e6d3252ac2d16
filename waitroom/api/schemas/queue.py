"""Pydantic schemas for Queue API endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class RegisterUserResponse(BaseModel):
    """Response model for POST /queue.

    Attributes:
        rank: 1-based position in the wait queue right after registration
    """

    rank: int

    model_config = ConfigDict(extra="forbid")


class AllowUserResponse(BaseModel):
    """Response model for POST /queue/allow.

    Attributes:
        requested_count: Maximum number of users asked to admit
        allowed_count: Number of users actually admitted
    """

    requested_count: int
    allowed_count: int

    model_config = ConfigDict(extra="forbid")


class AllowedUserResponse(BaseModel):
    """Response model for GET /queue/allowed (token verification)."""

    allowed: bool

    model_config = ConfigDict(extra="forbid")


class AdmittedUserResponse(BaseModel):
    """Response model for GET /queue/admitted (admitted-set lookup)."""

    admitted: bool

    model_config = ConfigDict(extra="forbid")


class RankNumberResponse(BaseModel):
    """Response model for GET /queue/rank.

    Attributes:
        rank: 1-based wait position, or -1 if the user is not waiting
    """

    rank: int

    model_config = ConfigDict(extra="forbid")


class TouchResponse(BaseModel):
    """Response model for GET /queue/touch. The token is also set as a cookie."""

    token: str

    model_config = ConfigDict(extra="forbid")


class QueueStatusResponse(BaseModel):
    """Response model for GET /queue/status."""

    queue: str
    waiting: int = Field(description="Number of users in the wait queue")

    model_config = ConfigDict(extra="forbid")


class WaitingRoomResponse(BaseModel):
    """Response model for GET /waiting-room when the user must keep waiting.

    Attributes:
        number: Current 1-based rank of the user
        user_id: User identifier
        queue: Queue name
    """

    number: int
    user_id: int
    queue: str

    model_config = ConfigDict(extra="forbid")


class ServerExceptionResponse(BaseModel):
    """Error body returned for WaitroomError failures."""

    code: str
    reason: str
