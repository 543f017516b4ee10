"""
Session Management Use Cases
"""

from .revoke_sessions_use_case import RevokeSessionsUseCase
from .sweep_expired_sessions_use_case import SweepExpiredSessionsUseCase
from .dtos import (
    ActiveSessionsResponse,
    RevokeAllSessionsResponse,
    SessionInfo,
    SweepResponse,
)

__all__ = [
    "RevokeSessionsUseCase",
    "SweepExpiredSessionsUseCase",
    "ActiveSessionsResponse",
    "RevokeAllSessionsResponse",
    "SessionInfo",
    "SweepResponse",
]
