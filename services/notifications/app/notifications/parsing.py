"""Field extraction shared by the resolver, the collapse engine and acknowledgement.

All three must agree on what a row's type and creation id are, otherwise a
collapsed entry and the rows acknowledged with it drift apart.
"""

import json
import math
import re
from typing import Any

from app.models.enums import COLLAPSIBLE_TYPES, NotificationType

_CREATION_LINK_RE = re.compile(r"^/creations/(\d+)")
# Plain decimal or exponent notation; rejects "1_000", "nan" and "inf" that float() takes.
_NUMERIC_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def as_mapping(value: Any) -> dict | None:
    """Return a JSON payload as a dict; legacy rows may store it as an encoded string."""
    if value is None:
        return None
    if isinstance(value, dict):
        return value
    if not isinstance(value, str):
        return None
    try:
        parsed = json.loads(value)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def parse_notification_type(raw: Any) -> NotificationType | None:
    """Structured type of a row, or None for legacy/unknown rows."""
    if not isinstance(raw, str):
        return None
    try:
        return NotificationType(raw.strip())
    except ValueError:
        return None


def coerce_number(value: Any) -> float | None:
    """Finite numeric value of ``value`` (numbers or numeric strings), else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and _NUMERIC_RE.fullmatch(value.strip()):
        number = float(value.strip())
    else:
        return None
    return number if math.isfinite(number) else None


def _coerce_id(value: Any) -> int | None:
    number = coerce_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def creation_id_from_target(target: Any) -> int | None:
    payload = as_mapping(target)
    if payload is None:
        return None
    return _coerce_id(payload.get("creation_id"))


def creation_id_from_link(link: Any) -> int | None:
    if not isinstance(link, str):
        return None
    match = _CREATION_LINK_RE.match(link.strip())
    return int(match.group(1)) if match else None


def extract_creation_id(target: Any, link: Any) -> int | None:
    """Creation a row is about: ``target.creation_id`` first, then a ``/creations/<id>`` link."""
    creation_id = creation_id_from_target(target)
    if creation_id is not None:
        return creation_id
    return creation_id_from_link(link)


def cached_creation_title(meta: Any) -> str | None:
    payload = as_mapping(meta)
    if payload is None:
        return None
    title = payload.get("creation_title")
    if not isinstance(title, str):
        return None
    return title.strip() or None


def is_collapsible(notification_type: Any, creation_id: int | None) -> bool:
    """Grouping predicate used for display and for group acknowledgement alike."""
    if creation_id is None:
        return False
    return parse_notification_type(notification_type) in COLLAPSIBLE_TYPES


def creation_link(creation_id: int | None) -> str:
    return f"/creations/{creation_id}" if creation_id is not None else "/"
