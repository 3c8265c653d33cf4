"""Base agent abstraction for statement extraction agents.

This module defines the abstract base class for agents that turn raw statement text into transactions.
"""

from abc import ABC, abstractmethod

from quincena.core.models import Transaction


class BaseAgent(ABC):
    """Abstract base class for all agents."""

    @abstractmethod
    def extract_transactions(self, text: str) -> list[Transaction]:
        """Extract the transactions contained in a statement's text."""
