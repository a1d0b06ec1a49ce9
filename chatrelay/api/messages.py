# chatrelay/api/messages.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
import logging

from chatrelay.api.deps import current_user, get_message_log
from chatrelay.models.schemas import MessageCreate, MessageResponse
from chatrelay.services.message_log import MessageLog

logger = logging.getLogger("chatrelay.api.messages")
router = APIRouter()


@router.post("", status_code=201)
def post_message(
    payload: MessageCreate,
    user: Optional[str] = Depends(current_user),
    log: MessageLog = Depends(get_message_log),
):
    log.post(user, payload.to, payload.text, payload.type)
    return Response(status_code=201)


@router.get("", response_model=List[MessageResponse])
def get_messages(
    limit: Optional[str] = Query(None),
    user: Optional[str] = Depends(current_user),
    log: MessageLog = Depends(get_message_log),
):
    """
    Messages visible to the calling user, newest first.
    `limit` keeps only the N most recent; a non-numeric value is ignored.
    """
    rows = log.retrieve(user, limit)
    logger.info("GET /messages user=%s limit=%s count=%d", user, limit, len(rows))
    return [MessageResponse.from_row(r) for r in rows]
