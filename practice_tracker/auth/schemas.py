import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from practice_tracker.schemas import CamelModel


class UserCreateModel(BaseModel):
    username: Optional[str] = Field(None, max_length=50, examples=["tourist"])
    email: Optional[str] = Field(None, max_length=255, examples=["user@example.com"])
    password: Optional[str] = Field(None, examples=["hunter22"])


class UserLoginModel(BaseModel):
    email: Optional[str] = Field(None, examples=["user@example.com"])
    password: Optional[str] = None


class LoginResponseModel(BaseModel):
    message: str
    token: str


class UserResponseModel(CamelModel):
    """Public view of a user; the password hash is never part of it."""

    id: uuid.UUID
    username: str
    email: str
    created_at: datetime
    updated_at: datetime
