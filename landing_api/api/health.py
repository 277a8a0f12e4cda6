# landing_api/api/health.py
from datetime import datetime, timezone

from fastapi import APIRouter

from landing_api.schemas.common import Ping

router = APIRouter(tags=["health"])


@router.get("/ping", response_model=Ping)
def ping():
    return Ping.now(datetime.now(timezone.utc))
