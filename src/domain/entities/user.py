"""
User Entity

Represents a principal that can authenticate and own sessions.
"""

from datetime import datetime
from typing import List, Optional

from sqlmodel import JSON, Column, DateTime, Field, SQLModel

from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - a principal identified by email (and optionally phone).

    Business Rules:
    - Email must be unique across all users
    - Phone, when given, must be unique across all users
    - Password stored as bcrypt hash
    - Inactive users cannot log in
    - Only last_login_at is written by the authentication flows
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    phone: Optional[str] = Field(default=None, unique=True, index=True, max_length=32)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    is_active: bool = Field(default=True)
    roles: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    # Timestamps, always set from the injected clock by the caller
    created_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    def role_names(self) -> List[str]:
        """Role names known to the service, in stored order"""
        known = {role.value for role in UserRole}
        return [name for name in (self.roles or []) if name in known]
