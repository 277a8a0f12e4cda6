from pydantic import BaseModel
from datetime import datetime
from typing import Any, List


class InquiryIn(BaseModel):
    # coerced and bounded in services.validation
    name: Any = None
    phone: Any = None
    service: Any = None
    message: Any = None
    page_url: Any = None


class InquirySaved(BaseModel):
    ok: bool = True
    message: str = "Inquiry saved"


class InquiryOut(BaseModel):
    id: int
    name: str
    phone: str
    service: str | None
    message: str | None
    page_url: str | None
    created_at: datetime
    ip: str | None

    class Config:
        from_attributes = True


class InquiryList(BaseModel):
    ok: bool = True
    count: int
    data: List[InquiryOut]
