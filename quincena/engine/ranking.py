"""Ordering and selection of triggered awards."""

from collections.abc import Iterable

from quincena.core.models import Award


def rank_awards(awards: Iterable[Award]) -> list[Award]:
    """Sort awards by trigger_value, strongest first. Ties keep detector order."""
    return sorted(awards, key=lambda award: award.trigger_value, reverse=True)


def top_awards(awards: Iterable[Award], limit: int) -> list[Award]:
    """Return the ``limit`` strongest awards for display and sharing."""
    return rank_awards(awards)[: max(limit, 0)]
