# landing_api/api/analytics.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from landing_api.core.config import Settings
from landing_api.core.deps import get_db, get_settings
from landing_api.core.errors import OpaqueStorageFailure, StorageFailure
from landing_api.core.security import client_ip, require_api_key
from landing_api.db.models.event import Event
from landing_api.schemas.analytics import AnalyticsSummary, ClickIn
from landing_api.schemas.common import Ok
from landing_api.services.analytics import summarize
from landing_api.services.validation import PAGE_URL_MAX, UA_MAX, clamp_text, validate_event_type

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.post("/click", response_model=Ok)
def record_click(
    request: Request,
    payload: Optional[ClickIn] = None,
    user_agent: Optional[str] = Header(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    payload = payload or ClickIn()
    event_type = validate_event_type(payload.type)
    event = Event(
        type=event_type,
        page_url=clamp_text(payload.page_url, PAGE_URL_MAX, strip=False),
        ua=clamp_text(user_agent, UA_MAX, strip=False),
        ip=client_ip(request, settings.TRUST_PROXY),
    )

    try:
        db.add(event)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("could not save %s event", event_type)
        raise OpaqueStorageFailure()

    return Ok()


@router.get("/summary", response_model=AnalyticsSummary, dependencies=[Depends(require_api_key)])
def analytics_summary(db: Session = Depends(get_db)):
    """
    byType: all-time count per event type
    last7:  per day and type, the 7 calendar days ending today
    """
    try:
        return AnalyticsSummary(**summarize(db))
    except SQLAlchemyError:
        logger.exception("could not build analytics summary")
        raise StorageFailure()
