"""API route modules."""

from waitroom.api.routes.monitoring import router as monitoring_router
from waitroom.api.routes.queue import router as queue_router
from waitroom.api.routes.waiting_room import router as waiting_room_router

__all__ = ["monitoring_router", "queue_router", "waiting_room_router"]
