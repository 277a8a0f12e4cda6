# landing_api/core/security.py
import hmac
from typing import Optional

from fastapi import Depends, Header, Request

from landing_api.core.config import Settings
from landing_api.core.deps import get_settings
from landing_api.core.errors import Misconfigured, Unauthorized


def client_ip(request: Request, trust_proxy: bool = True) -> str:
    """
    Best-effort client address: first X-Forwarded-For entry, else the peer.
    Spoofable, so it is only ever stored for analytics context.
    """
    if trust_proxy:
        forwarded = request.headers.get("x-forwarded-for", "")
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client and request.client.host:
        return request.client.host
    return ""


def rate_limit_key(request: Request, trust_proxy: bool = True) -> str:
    """
    Client identity for the rate limiter.
    Behind one trusted proxy that is the last X-Forwarded-For entry (the
    address the proxy itself appended); leading entries come from the caller.
    """
    if trust_proxy:
        forwarded = request.headers.get("x-forwarded-for", "")
        last = forwarded.split(",")[-1].strip()
        if last:
            return last
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def secrets_match(expected: str, supplied: Optional[str]) -> bool:
    if supplied is None:
        return False
    # constant-time compare; bytes so non-ascii header values don't raise
    return hmac.compare_digest(expected.encode("utf-8"), supplied.encode("utf-8"))


def require_api_key(
    settings: Settings = Depends(get_settings),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
) -> None:
    """
    Dependency used by operator routes.
    - no API_KEY configured -> 500 for every request (fails closed)
    - missing or different header -> 401
    """
    if not settings.API_KEY:
        raise Misconfigured()
    if not secrets_match(settings.API_KEY, x_api_key):
        raise Unauthorized()
