# chatrelay/models/orm.py
from __future__ import annotations

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Integer,
    String,
    Text,
    Index,
)
from sqlalchemy.orm import Mapped, mapped_column

from chatrelay.core.db import Base

MESSAGE_BROADCAST = "broadcast"
MESSAGE_PRIVATE = "private"
MESSAGE_STATUS = "status"
MESSAGE_TYPES = (MESSAGE_BROADCAST, MESSAGE_PRIVATE, MESSAGE_STATUS)
# Types a participant may post; status messages are written by registration only
POSTABLE_TYPES = (MESSAGE_BROADCAST, MESSAGE_PRIVATE)
# Types visible to every requester
PUBLIC_TYPES = (MESSAGE_BROADCAST, MESSAGE_STATUS)


# ---------- Participants ----------
class Participant(Base):
    __tablename__ = "participants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # display name, case-sensitive; the unique index is what keeps
    # concurrent registrations of the same name from both succeeding
    name: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    # epoch milliseconds of creation / last liveness refresh
    last_status: Mapped[int] = mapped_column(BigInteger)

    def __repr__(self) -> str:
        return f"<Participant {self.name!r}>"


# ---------- Messages ----------
class Message(Base):
    __tablename__ = "messages"

    # insertion order
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sender: Mapped[str] = mapped_column(String(255), index=True)
    to: Mapped[str] = mapped_column(String(255), index=True)
    text: Mapped[str] = mapped_column(Text)
    type: Mapped[str] = mapped_column(String(20))
    # local wall clock, HH:MM:SS
    time: Mapped[str] = mapped_column(String(8))

    __table_args__ = (
        CheckConstraint(
            "type IN ('broadcast', 'private', 'status')", name="chk_messages_type"
        ),
        Index("ix_messages_type_id", "type", "id"),
    )

    def __repr__(self) -> str:
        return f"<Message {self.type} from {self.sender}>"
