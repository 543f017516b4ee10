"""
Auth Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class TokenType(str, Enum):
    """Discriminator carried in every signed token"""

    access = "ACCESS"
    refresh = "REFRESH"


class DeviceType(str, Enum):
    """Kind of client a session was opened from"""

    android = "ANDROID"
    ios = "IOS"
    web = "WEB"
    desktop = "DESKTOP"


class UserRole(str, Enum):
    """Role names a user can hold"""

    customer = "CUSTOMER"
    admin = "ADMIN"


DEFAULT_ROLE = UserRole.customer
