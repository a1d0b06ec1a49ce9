# chatrelay/services/participant_registry.py
from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from chatrelay.core import config
from chatrelay.core.db import store_scope
from chatrelay.models.orm import MESSAGE_STATUS, Message, Participant
from chatrelay.services import clock
from chatrelay.services.errors import Conflict, NotFound, ValidationError

logger = logging.getLogger("chatrelay.registry")


class ParticipantRegistry:
    """Registered chat participants and their liveness timestamps."""

    def __init__(self, db: Session):
        self.db = db

    def register(self, name: Optional[str]) -> Participant:
        """
        Create a participant and announce the join in the message log.

        Both rows are committed together; if either write fails nothing is
        left behind. A duplicate name is a Conflict whether the pre-check or
        the unique index catches it.
        """
        if not isinstance(name, str) or not name:
            raise ValidationError("name must be a non-empty string")

        if self.exists(name):
            logger.warning("register: name taken name=%s", name)
            raise Conflict(f"participant '{name}' already exists")

        participant = Participant(name=name, last_status=clock.now_ms())
        notice = Message(
            sender=name,
            to=config.ALL_RECIPIENTS,
            text=config.JOIN_TEXT,
            type=MESSAGE_STATUS,
            time=clock.clock_time(),
        )
        with store_scope(self.db):
            self.db.add(participant)
            try:
                self.db.flush()
            except IntegrityError:
                # lost a race against a concurrent registration
                self.db.rollback()
                logger.warning("register: unique index rejected name=%s", name)
                raise Conflict(f"participant '{name}' already exists")
            self.db.add(notice)
            self.db.commit()

        logger.info("register: joined name=%s", name)
        return participant

    def list(self) -> List[Participant]:
        with store_scope(self.db):
            rows = list(self.db.scalars(select(Participant).order_by(Participant.id)))
        logger.debug("list: %d participants", len(rows))
        return rows

    def refresh_liveness(self, name: Optional[str]) -> None:
        if not name:
            raise NotFound("participant not found")
        with store_scope(self.db):
            result = self.db.execute(
                update(Participant)
                .where(Participant.name == name)
                .values(last_status=clock.now_ms())
            )
            updated = result.rowcount
            self.db.commit()
        if not updated:
            logger.warning("status: unknown participant name=%s", name)
            raise NotFound(f"participant '{name}' not found")

    def exists(self, name: str) -> bool:
        with store_scope(self.db):
            found = self.db.scalar(
                select(Participant.id).where(Participant.name == name).limit(1)
            )
        return found is not None

    def count(self) -> int:
        with store_scope(self.db):
            return self.db.scalar(select(func.count()).select_from(Participant))
