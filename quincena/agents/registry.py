"""Agent registry for managing agent types.

Extraction agents register under a name so the configured one can be selected through settings.
"""

from typing import ClassVar

from quincena.agents.base import BaseAgent


class AgentRegistry:
    """Registry for agent classes."""

    _registry: ClassVar[dict[str, type[BaseAgent]]] = {}

    @classmethod
    def register(cls, name: str, agent_cls: type[BaseAgent]) -> None:
        """Register an agent class with a given name."""
        cls._registry[name] = agent_cls

    @classmethod
    def get(cls, name: str) -> type[BaseAgent]:
        """Retrieve an agent class by name."""
        try:
            return cls._registry[name]
        except KeyError:
            msg = f"Unknown extraction agent '{name}'. Available: {cls.available()}"
            raise ValueError(msg) from None

    @classmethod
    def available(cls) -> list[str]:
        """List all available agent names."""
        return list(cls._registry.keys())
