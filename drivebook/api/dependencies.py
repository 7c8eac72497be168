# drivebook/api/dependencies.py
"""
FastAPI dependencies for the scheduling routes.

The scheduling service is built once in the application lifespan and
kept on app.state. The acting user comes from headers set by the
authenticating gateway in front of this service.
"""

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status
from pydantic import ValidationError

from ..models.actor import Actor
from ..services.scheduling_service import SchedulingService

logger = logging.getLogger(__name__)


def get_scheduling_service(request: Request) -> SchedulingService:
    service: Optional[SchedulingService] = getattr(request.app.state, "scheduling_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Scheduling service not initialized",
        )
    return service


def get_current_actor(
    x_actor_id: Optional[str] = Header(default=None),
    x_actor_role: Optional[str] = Header(default=None),
    x_actor_trainer_id: Optional[str] = Header(default=None),
) -> Optional[Actor]:
    """
    Resolve the acting user, or None when the request is anonymous.

    Anonymous callers still reach the service, which answers with a
    "Not authenticated" or role failure where it matters.
    """
    if not x_actor_id:
        return None
    try:
        return Actor(id=x_actor_id, role=x_actor_role, trainer_id=x_actor_trainer_id or None)
    except ValidationError:
        logger.warning("Rejected actor headers with role %r", x_actor_role)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": "Invalid actor role", "code": "INVALID_ACTOR"},
        )


def require_ready_service(
    service: SchedulingService = Depends(get_scheduling_service),
) -> SchedulingService:
    """Scheduling service that has finished its initial load."""
    if not service.is_loaded:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Schedule data is still loading",
            headers={"Retry-After": "2"},
        )
    return service
