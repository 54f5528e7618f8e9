from shared.constants.roles import DEFAULT_ROLE, Role

__all__ = ["DEFAULT_ROLE", "Role"]
