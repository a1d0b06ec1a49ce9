# chatrelay/api/participants.py
from typing import List

from fastapi import APIRouter, Depends, Response
import logging

from chatrelay.api.deps import get_registry
from chatrelay.models.schemas import ParticipantCreate, ParticipantResponse
from chatrelay.services.participant_registry import ParticipantRegistry

logger = logging.getLogger("chatrelay.api.participants")
router = APIRouter()


@router.post("", status_code=201)
def register_participant(
    payload: ParticipantCreate,
    registry: ParticipantRegistry = Depends(get_registry),
):
    registry.register(payload.name)
    logger.info("POST /participants name=%s", payload.name)
    return Response(status_code=201)


@router.get("", response_model=List[ParticipantResponse])
def list_participants(registry: ParticipantRegistry = Depends(get_registry)):
    rows = registry.list()
    logger.info("GET /participants count=%d", len(rows))
    return [ParticipantResponse.from_row(r) for r in rows]
