from datetime import datetime
from pydantic import BaseModel


class Ok(BaseModel):
    ok: bool = True


class Ping(BaseModel):
    ok: bool = True
    time: str

    @classmethod
    def now(cls, at: datetime) -> "Ping":
        # 2026-10-18T09:30:00.123Z
        return cls(time=at.isoformat(timespec="milliseconds").replace("+00:00", "Z"))
