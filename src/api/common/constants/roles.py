from enum import Enum


class UserRole(str, Enum):
    """Roles a caller can act with"""
    USER = "user"  # customer of a partner
    ADMIN = "admin"  # partner administrator
    SUPERADMIN = "superadmin"  # platform operator
