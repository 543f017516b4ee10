"""
Session Entity

Server-side record of one issued refresh token.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import DeviceType


class Session(SQLModel, table=True):
    """
    Session entity - binds one refresh token to a user and a device.

    Business Rules:
    - refresh_token is the exact encoded token and is unique
    - Active iff revoked is False and expires_at is in the future
    - revoked only ever goes from False to True
    - last_used_at only moves forward, on successful refresh
    - Rows are never deleted by the service
    """

    __tablename__ = "sessions"

    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)

    refresh_token: str = Field(unique=True, max_length=1024)
    device_info: Optional[str] = Field(default=None, max_length=255)
    ip_address: Optional[str] = Field(default=None, max_length=45)
    device_type: Optional[DeviceType] = Field(default=None)

    revoked: bool = Field(default=False)

    # Timestamps, always set from the injected clock by the caller
    created_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    last_used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_user_revoked", "user_id", "revoked"),
    )

    def is_active(self, now: datetime) -> bool:
        return not self.revoked and self.expires_at > now
