"""FastAPI dependencies for DI (settings, summary repository, extraction agent, session id).

Tests override these to swap in an in-memory database and a fake agent.
"""

import uuid
from collections.abc import Iterator

from fastapi import Depends, Request, Response
from groq import Groq

from quincena.agents.base import BaseAgent
from quincena.agents.registry import AgentRegistry
from quincena.core.db import SummaryRepository, get_db
from quincena.core.settings import Settings, get_settings
from quincena.services.analyzer import StatementAnalyzer

SECONDS_PER_DAY = 86400


def get_agent(settings: Settings = Depends(get_settings)) -> BaseAgent:
    """Provide the configured extraction agent."""
    agent_cls = AgentRegistry.get(settings.extraction_agent)
    client = Groq(api_key=settings.groq_api_key)
    return agent_cls(client, settings)


def get_repository() -> Iterator[SummaryRepository]:
    """Provide a summary repository, closing its session after the request."""
    repository = get_db()
    try:
        yield repository
    finally:
        repository.close()


def get_analyzer(
    repository: SummaryRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
) -> StatementAnalyzer:
    """Provide a StatementAnalyzer bound to the request's repository."""
    return StatementAnalyzer(repository, settings)


def get_session_id(request: Request, response: Response, settings: Settings = Depends(get_settings)) -> str:
    """Return the caller's session id, issuing a new cookie when there is none."""
    session_id = request.cookies.get(settings.session_cookie_name)
    if session_id:
        return session_id
    session_id = str(uuid.uuid4())
    response.set_cookie(
        settings.session_cookie_name,
        session_id,
        max_age=settings.session_cookie_max_age_days * SECONDS_PER_DAY,
        path="/",
        samesite="lax",
    )
    return session_id
