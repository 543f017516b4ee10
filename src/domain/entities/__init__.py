"""
Auth Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import DEFAULT_ROLE, DeviceType, TokenType, UserRole

# Export all entities
from .user import User
from .session import Session

__all__ = [
    # Enums
    "DEFAULT_ROLE",
    "DeviceType",
    "TokenType",
    "UserRole",
    # Entities
    "User",
    "Session",
]
