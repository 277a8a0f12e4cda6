# landing_api/services/analytics.py
from sqlalchemy import func
from sqlalchemy.orm import Session

from landing_api.db.models.event import Event

TRAILING_DAYS = 7


def count_by_type(db: Session) -> list[dict]:
    rows = (
        db.query(Event.type, func.count(Event.id))
        .group_by(Event.type)
        .order_by(Event.type)
        .all()
    )
    return [{"type": t, "count": c} for t, c in rows]


def daily_counts(db: Session, days: int = TRAILING_DAYS) -> list[dict]:
    """
    Per (calendar day, type) counts for the last `days` days, today included.
    Days are UTC dates as stored by sqlite.
    """
    day = func.date(Event.created_at)
    since = func.date("now", f"-{days - 1} day")
    rows = (
        db.query(day.label("day"), Event.type, func.count(Event.id))
        .filter(day >= since)
        .group_by(day, Event.type)
        .order_by(day, Event.type)
        .all()
    )
    return [{"day": d, "type": t, "count": c} for d, t, c in rows]


def summarize(db: Session) -> dict:
    return {"byType": count_by_type(db), "last7": daily_counts(db)}
