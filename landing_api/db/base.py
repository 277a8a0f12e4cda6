from landing_api.db.mixins import Base   # ✅ import Base from mixins

# Import all models so Base.metadata knows every table before create_all
from landing_api.db.models.inquiry import Inquiry
from landing_api.db.models.event import Event
