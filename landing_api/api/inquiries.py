# landing_api/api/inquiries.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from landing_api.core.config import Settings
from landing_api.core.deps import get_db, get_settings
from landing_api.core.errors import StorageFailure
from landing_api.core.security import client_ip, require_api_key
from landing_api.db.models.inquiry import Inquiry
from landing_api.schemas.inquiry import InquiryIn, InquiryList, InquiryOut, InquirySaved
from landing_api.services.export import inquiries_to_csv
from landing_api.services.validation import clamp_limit, validate_inquiry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["inquiries"])


@router.post("/inquiry", response_model=InquirySaved)
def submit_inquiry(
    request: Request,
    payload: Optional[InquiryIn] = None,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Public lead form.
    - 400 with a reason when name/phone are missing or the phone is not 10-15 digits
    - one INSERT per request, never retried
    """
    values = validate_inquiry((payload or InquiryIn()).model_dump())

    try:
        db.add(Inquiry(**values, ip=client_ip(request, settings.TRUST_PROXY)))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("could not save inquiry")
        raise StorageFailure()

    return InquirySaved()


@router.get("/inquiries", response_model=InquiryList, dependencies=[Depends(require_api_key)])
def list_inquiries(
    db: Session = Depends(get_db),
    limit: Optional[str] = Query(None, description="Max rows, capped at 500 (default 100)"),
):
    """Newest first; no paging past the first page."""
    try:
        rows = (
            db.query(Inquiry)
            .order_by(Inquiry.id.desc())
            .offset(0)
            .limit(clamp_limit(limit))
            .all()
        )
    except SQLAlchemyError:
        logger.exception("could not list inquiries")
        raise StorageFailure()

    return InquiryList(count=len(rows), data=[InquiryOut.model_validate(r) for r in rows])


@router.get("/export.csv", dependencies=[Depends(require_api_key)])
def export_inquiries(db: Session = Depends(get_db)):
    try:
        rows = db.query(Inquiry).order_by(Inquiry.id.desc()).all()
    except SQLAlchemyError:
        logger.exception("could not export inquiries")
        raise StorageFailure()

    return Response(
        content=inquiries_to_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="inquiries.csv"'},
    )
