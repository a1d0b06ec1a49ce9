# chatrelay/models/schemas.py
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from chatrelay.models.orm import Message, Participant


# ---------- Participant Schemas ----------
class ParticipantCreate(BaseModel):
    name: str = Field(..., min_length=1)


class ParticipantResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    last_status: int = Field(..., alias="lastStatus")

    @classmethod
    def from_row(cls, row: Participant) -> "ParticipantResponse":
        return cls(name=row.name, lastStatus=row.last_status)


# ---------- Message Schemas ----------
class MessageCreate(BaseModel):
    """Body of POST /messages; the sender comes from the User header."""
    to: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1)
    type: Literal["broadcast", "private"]


class MessageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(..., alias="from")
    to: str
    text: str
    type: Literal["broadcast", "private", "status"]
    time: str

    @classmethod
    def from_row(cls, row: Message) -> "MessageResponse":
        return cls(**{
            "from": row.sender,
            "to": row.to,
            "text": row.text,
            "type": row.type,
            "time": row.time,
        })


# ---------- Health ----------
class StoreStats(BaseModel):
    ok: bool = True
    participants: int
    messages: int
