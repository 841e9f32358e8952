"""User and contact message models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class User(BaseModel):
    """A canteen customer identity.

    ``is_logged_in`` is the only session indicator; the logged-in identity
    itself is held by the session context.
    """

    id: str = Field(..., description="Unique user identifier")
    email: str = Field(..., description="Email address, unique across users", min_length=1)
    name: str = Field(..., description="Display name")
    is_logged_in: bool = Field(default=False, description="Whether the user is logged in")
    created_at: datetime = Field(..., description="Account creation timestamp")


class ContactStatusEnum(str, Enum):
    """Enumeration of contact message status values."""

    NEW = "new"
    READ = "read"
    REPLIED = "replied"


class ContactMessage(BaseModel):
    """A message sent through the contact form."""

    id: str = Field(..., description="Unique message identifier")
    name: str = Field(..., description="Sender name")
    email: str = Field(..., description="Sender email")
    subject: str = Field(..., description="Message subject")
    message: str = Field(..., description="Message body")
    created_at: datetime = Field(..., description="Time the message was sent")
    status: ContactStatusEnum = Field(default=ContactStatusEnum.NEW, description="Triage status")
