"""
Pydantic data models for API request/response and error schema.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    """Single error detail (e.g. field-level)."""

    code: str = Field(..., description="Error code or field name")
    message: str = Field(..., description="Human-readable message")


class ErrorResponse(BaseModel):
    """Structured error response for 4xx/5xx."""

    code: str = Field(..., description="Application error code")
    message: str = Field(..., description="Human-readable summary")
    details: Optional[List[ErrorDetail]] = Field(None, description="Optional per-field or extra details")


# ----- Accounts -----


class AccountCredentials(BaseModel):
    """Body of /register and /login. Blank/length rules are checked by AccountService, not here."""

    model_config = ConfigDict(extra="ignore")

    username: str
    password: str


class Account(BaseModel):
    account_id: int
    username: str
    password: str


# ----- Messages -----


class MessageCreate(BaseModel):
    """Body of POST /messages. time_posted_epoch is taken verbatim from the client."""

    model_config = ConfigDict(extra="ignore")

    posted_by: int
    message_text: str
    time_posted_epoch: int


class MessageTextUpdate(BaseModel):
    """Body of PATCH /messages/{message_id}. Only message_text is read."""

    model_config = ConfigDict(extra="ignore")

    message_text: str


class Message(BaseModel):
    message_id: int
    posted_by: int
    message_text: str
    time_posted_epoch: int
