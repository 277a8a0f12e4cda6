from pydantic import BaseModel
from typing import Any, List


class ClickIn(BaseModel):
    type: Any = None
    page_url: Any = None


class TypeCount(BaseModel):
    type: str
    count: int


class DayTypeCount(BaseModel):
    day: str
    type: str
    count: int


class AnalyticsSummary(BaseModel):
    ok: bool = True
    byType: List[TypeCount]
    last7: List[DayTypeCount]
