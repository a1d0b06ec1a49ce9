# chatrelay/services/message_log.py
from __future__ import annotations

import logging
import re
from typing import Any, List, Optional

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import Session

from chatrelay.core.db import store_scope
from chatrelay.models.orm import (
    MESSAGE_PRIVATE,
    POSTABLE_TYPES,
    PUBLIC_TYPES,
    Message,
)
from chatrelay.services import clock
from chatrelay.services.errors import UnknownSender, ValidationError
from chatrelay.services.participant_registry import ParticipantRegistry

logger = logging.getLogger("chatrelay.message_log")

_INTEGER = re.compile(r"[+-]?[0-9]+")
MAX_LIMIT = 2**63 - 1


def visible_to(requester: Optional[str]):
    """
    WHERE clause for the messages `requester` may read: everything public,
    plus private messages they sent or received. Without a requester only
    public messages match.
    """
    public = Message.type.in_(PUBLIC_TYPES)
    if not requester:
        return public
    return or_(
        public,
        and_(
            Message.type == MESSAGE_PRIVATE,
            or_(Message.to == requester, Message.sender == requester),
        ),
    )


def parse_limit(raw: Any) -> Optional[int]:
    """
    Normalize a `limit` query value.

    None or anything that does not read as an integer means "no limit";
    an integer <= 0 is rejected.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    else:
        m = _INTEGER.fullmatch(str(raw).strip())
        if not m:
            return None
        value = int(m.group(0))
    if value <= 0:
        raise ValidationError("limit must be a positive integer")
    # beyond a 64-bit LIMIT every visible message fits anyway
    if value > MAX_LIMIT:
        return None
    return value


class MessageLog:
    """Append-only chat history with per-requester visibility on read."""

    def __init__(self, db: Session, registry: ParticipantRegistry):
        self.db = db
        self.registry = registry

    def post(
        self,
        sender: Optional[str],
        to: Optional[str],
        text: Optional[str],
        type: Optional[str],
    ) -> Message:
        for field, value in (("from", sender), ("to", to), ("text", text)):
            if not isinstance(value, str) or not value:
                raise ValidationError(f"{field} must be a non-empty string")
        if type not in POSTABLE_TYPES:
            raise ValidationError(f"type must be one of {', '.join(POSTABLE_TYPES)}")

        if not self.registry.exists(sender):
            logger.warning("post: unknown sender from=%s", sender)
            raise UnknownSender(f"sender '{sender}' is not a participant")

        msg = Message(sender=sender, to=to, text=text, type=type, time=clock.clock_time())
        with store_scope(self.db):
            self.db.add(msg)
            self.db.commit()
        logger.info("post: from=%s to=%s type=%s len=%d", sender, to, type, len(text))
        return msg

    def retrieve(self, requester: Optional[str], limit: Any = None) -> List[Message]:
        """Messages visible to `requester`, newest first, at most `limit`."""
        n = parse_limit(limit)
        stmt = select(Message).where(visible_to(requester)).order_by(Message.id.desc())
        if n is not None:
            stmt = stmt.limit(n)
        with store_scope(self.db):
            rows = list(self.db.scalars(stmt))
        logger.debug("retrieve: user=%s limit=%s count=%d", requester, n, len(rows))
        return rows

    def count(self) -> int:
        with store_scope(self.db):
            return self.db.scalar(select(func.count()).select_from(Message))
