"""Human label for the actor behind a notification."""

from typing import Any

FALLBACK_ACTOR_NAME = "Someone"


def _field(record: Any, name: str) -> str | None:
    if record is None:
        return None
    value = record.get(name) if isinstance(record, dict) else getattr(record, name, None)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def get_actor_display_name(user: Any, profile: Any = None) -> str:
    """Best available label for ``user``, optionally enriched by ``profile``.

    Precedence: display name, then ``@user_name``, then ``@`` + the email's local
    part, then ``"Someone"``. Works with ORM rows, plain objects and dicts.
    """
    display_name = _field(user, "display_name") or _field(profile, "display_name")
    if display_name:
        return display_name

    user_name = _field(user, "user_name") or _field(profile, "user_name")
    if user_name:
        return f"@{user_name}"

    email = _field(user, "email") or ""
    local_part = email.split("@", 1)[0] if "@" in email else email
    if local_part:
        return f"@{local_part}"

    return FALLBACK_ACTOR_NAME
