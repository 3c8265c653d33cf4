"""API package: provides FastAPI dependencies and route definitions for the application."""

from .dependencies import get_agent, get_analyzer, get_repository, get_session_id  # noqa: F401
from .routes import router  # noqa: F401
