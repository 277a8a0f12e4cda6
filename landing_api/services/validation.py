# landing_api/services/validation.py
import re
from typing import Any, Mapping

from landing_api.core.errors import InvalidPhone, InvalidType, MissingField

NON_DIGIT_RE = re.compile(r"\D")
LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")
PHONE_MIN_DIGITS = 10
PHONE_MAX_DIGITS = 15

NAME_MAX = 100
SERVICE_MAX = 80
MESSAGE_MAX = 2000
PAGE_URL_MAX = 400
UA_MAX = 255

# Closed set of UI interactions the landing page reports.
EVENT_TYPES = frozenset({"whatsapp", "call", "map", "copy_address", "form_submit"})

LIST_LIMIT_DEFAULT = 100
LIST_LIMIT_MAX = 500


def normalize_phone(raw: Any) -> str:
    """Drop everything but digits; 10-15 digits is a phone, anything else is rejected."""
    digits = NON_DIGIT_RE.sub("", "" if raw is None else str(raw))
    if not PHONE_MIN_DIGITS <= len(digits) <= PHONE_MAX_DIGITS:
        raise InvalidPhone()
    return digits


def clamp_text(raw: Any, max_len: int, strip: bool = True) -> str:
    text = "" if raw is None else str(raw)
    if strip:
        text = text.strip()
    return text[:max_len]


def validate_inquiry(payload: Mapping[str, Any]) -> dict:
    """
    Turn a loose inquiry body into column values, or raise.
    - name / phone absent or empty -> MissingField
    - phone without 10-15 digits -> InvalidPhone
    Optional fields never fail, they are only bounded.
    """
    name = clamp_text(payload.get("name"), NAME_MAX)
    phone = payload.get("phone")
    if not name or phone is None or str(phone).strip() == "":
        raise MissingField()

    return {
        "name": name,
        "phone": normalize_phone(phone),
        "service": clamp_text(payload.get("service"), SERVICE_MAX),
        "message": clamp_text(payload.get("message"), MESSAGE_MAX),
        "page_url": clamp_text(payload.get("page_url"), PAGE_URL_MAX, strip=False),
    }


def validate_event_type(raw: Any) -> str:
    # exact match, no case folding
    if not isinstance(raw, str) or raw not in EVENT_TYPES:
        raise InvalidType()
    return raw


def clamp_limit(raw: Any, default: int = LIST_LIMIT_DEFAULT, maximum: int = LIST_LIMIT_MAX) -> int:
    """Leading integer of `raw` ("20abc" -> 20), default when there is none, kept in [0, maximum]."""
    match = LEADING_INT_RE.match("" if raw is None else str(raw))
    limit = int(match.group(1)) if match else default
    # sqlite reads a negative LIMIT as "no limit"
    return max(0, min(limit, maximum))
