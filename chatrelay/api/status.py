# chatrelay/api/status.py
from typing import Optional

from fastapi import APIRouter, Depends
import logging

from chatrelay.api.deps import current_user, get_registry
from chatrelay.services.participant_registry import ParticipantRegistry

logger = logging.getLogger("chatrelay.api.status")
router = APIRouter()


@router.post("")
def refresh_status(
    user: Optional[str] = Depends(current_user),
    registry: ParticipantRegistry = Depends(get_registry),
):
    """Liveness ping: bumps the caller's lastStatus."""
    registry.refresh_liveness(user)
    logger.debug("POST /status user=%s", user)
    return {"ok": True}
