"""Statement analysis: wires the engine to the summary repository.

For one submitted statement: categorize, evaluate and rank awards, upsert the
month's summary, then read the session history back to compute streaks.
"""

from collections.abc import Sequence

from quincena.core.db import SummaryRepository
from quincena.core.models import AnalysisReport, Transaction
from quincena.core.settings import Settings
from quincena.core.utils import get_logger
from quincena.engine.awards import evaluate_awards, log_awards
from quincena.engine.categorizer import categorize_transactions, log_category_summary
from quincena.engine.ranking import rank_awards, top_awards
from quincena.engine.streaks import find_current_streaks
from quincena.services.share import format_share_text
from quincena.services.summary import build_monthly_summary

logger = get_logger("premios-quincena.analyzer")

EMPTY_STATEMENT_MESSAGE = "No se encontraron transacciones. Verifica el formato del archivo."


class EmptyStatementError(ValueError):
    """Raised when ingestion produced no transactions to analyze."""

    def __init__(self) -> None:
        """Initialize the error with the user-facing message."""
        super().__init__(EMPTY_STATEMENT_MESSAGE)


class StatementAnalyzer:
    """Runs the award engine for a statement and keeps the session history current."""

    def __init__(self, repository: SummaryRepository, settings: Settings) -> None:
        """Initialize the analyzer with a summary repository and settings."""
        self.repository = repository
        self.settings = settings

    def analyze(self, session_id: str, transactions: Sequence[Transaction]) -> AnalysisReport:
        """Analyze one statement period for a session."""
        if not transactions:
            logger.warning(f"Empty statement submitted: session={session_id}")
            raise EmptyStatementError

        logger.info(f"Analyzing {len(transactions)} transactions: session={session_id}")
        categorized = categorize_transactions(transactions)
        log_category_summary(categorized)

        awards = rank_awards(evaluate_awards(categorized))
        log_awards(awards)

        summary = build_monthly_summary(categorized, awards)
        self.repository.upsert_summary(session_id, summary)

        streaks = find_current_streaks(self.repository.get_history(session_id))
        if streaks:
            logger.info(f"Active streaks: {[(s.award_id.value, s.count) for s in streaks]}")

        limit = self.settings.featured_awards_count
        return AnalysisReport(
            session_id=session_id,
            month=summary.month,
            transactions=categorized,
            awards=awards,
            featured=top_awards(awards, limit),
            streaks=streaks,
            summary=summary,
            share_text=format_share_text(awards, streaks, limit=limit),
        )
