from enum import Enum


class Role(str, Enum):
    """Account roles. Notifications can be addressed to a whole role as well as to one user."""

    USER = "user"
    CREATOR = "creator"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


DEFAULT_ROLE = Role.USER
