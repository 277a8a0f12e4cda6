# landing_api/core/deps.py
from fastapi import Request

from landing_api.core.config import Settings
from landing_api.db.session import get_db  # noqa: F401  (re-exported for routers)


def get_settings(request: Request) -> Settings:
    """The snapshot handed to create_app(); never re-read from the environment."""
    return request.app.state.settings
