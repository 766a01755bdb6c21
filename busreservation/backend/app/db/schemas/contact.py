from datetime import datetime
from pydantic import Field
from .base import CamelModel


class ContactMessageCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255)
    message: str = Field(min_length=1)


class ContactReply(CamelModel):
    reply: str = Field(min_length=1)


class ContactMessage(CamelModel):
    id: int
    name: str
    email: str
    message: str
    status: str
    admin_reply: str | None = None
    created_at: datetime | None = None
    replied_at: datetime | None = None


class ContactMessageList(CamelModel):
    messages: list[ContactMessage]
