# chatrelay/api/deps.py
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from chatrelay.core.db import get_db
from chatrelay.services.message_log import MessageLog
from chatrelay.services.participant_registry import ParticipantRegistry


def get_registry(db: Session = Depends(get_db)) -> ParticipantRegistry:
    return ParticipantRegistry(db)


def get_message_log(
    db: Session = Depends(get_db),
    registry: ParticipantRegistry = Depends(get_registry),
) -> MessageLog:
    return MessageLog(db, registry)


def current_user(user: Optional[str] = Header(None)) -> Optional[str]:
    """Caller identity from the `User` header; an opaque name, not a credential."""
    return user
