from sqlalchemy import Column, String
from sqlmodel import Field

from practice_tracker.db.model import BaseModel


class User(BaseModel, table=True):
    __tablename__ = "users"

    username: str = Field(sa_column=Column(String(50), unique=True, nullable=False))
    email: str = Field(sa_column=Column(String(255), unique=True, nullable=False))
    password_hash: str = Field(
        sa_column=Column(String(256), nullable=False), exclude=True
    )

    def __repr__(self):
        return f"<User {self.username} ({self.email})>"
