"""Core package: provides models, database helpers, settings, and shared utilities."""

from .models import Award, AwardId, Category, CategorizedTransaction, MonthlySummary, Streak, Transaction  # noqa: F401
from .settings import Settings, get_settings  # noqa: F401
from .utils import get_logger  # noqa: F401
