# landing_api/db/models/__init__.py
from .event import Event
from .inquiry import Inquiry
