"""Shared fixtures: in-memory summary repository, fake extraction agent and API client."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from factories import txn
from quincena.agents.base import BaseAgent
from quincena.api.dependencies import get_agent, get_repository
from quincena.core.db import SummaryRepository, init_db
from quincena.core.models import Transaction
from quincena.main import app


class FakeAgent(BaseAgent):
    """Extraction agent that returns canned transactions and records the text it got."""

    def __init__(self, transactions: list[Transaction]) -> None:
        self.transactions = transactions
        self.received: list[str] = []

    def extract_transactions(self, text: str) -> list[Transaction]:
        self.received.append(text)
        return self.transactions


@pytest.fixture
def session_factory() -> sessionmaker:
    """Session factory bound to a fresh in-memory SQLite database."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(engine)
    return sessionmaker(bind=engine)


@pytest.fixture
def repository(session_factory: sessionmaker) -> Iterator[SummaryRepository]:
    """Summary repository on the in-memory database."""
    repo = SummaryRepository(session_factory())
    yield repo
    repo.close()


@pytest.fixture
def fake_agent() -> FakeAgent:
    """Agent answering with a small two-line statement."""
    return FakeAgent([txn("2025-06-02", -150.0, "OXXO TIENDA"), txn("2025-06-03", -90.0, "OXXO CENTRO")])


@pytest.fixture
def client(session_factory: sessionmaker, fake_agent: FakeAgent) -> Iterator[TestClient]:
    """API client with the database and the LLM agent swapped for test doubles."""

    def override_repository() -> Iterator[SummaryRepository]:
        repo = SummaryRepository(session_factory())
        try:
            yield repo
        finally:
            repo.close()

    app.dependency_overrides[get_repository] = override_repository
    app.dependency_overrides[get_agent] = lambda: fake_agent
    yield TestClient(app)
    app.dependency_overrides.clear()
