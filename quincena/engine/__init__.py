"""Engine package: categorizer, award detectors, ranking and streak detection."""

from .awards import evaluate_awards  # noqa: F401
from .categorizer import categorize, categorize_transactions  # noqa: F401
from .ranking import rank_awards, top_awards  # noqa: F401
from .streaks import find_current_streaks  # noqa: F401
