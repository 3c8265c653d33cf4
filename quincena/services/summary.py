"""Per-month aggregates computed from a categorized statement."""

import math
from collections import Counter
from collections.abc import Sequence

from quincena.core.models import Award, CategorizedTransaction, Category, MonthlySummary
from quincena.engine.formatting import month_key


def statement_month(transactions: Sequence[CategorizedTransaction]) -> str:
    """Return the month most transactions fall in; the later month wins a tie."""
    counts = Counter(month_key(t.date) for t in transactions)
    return max(counts, key=lambda month: (counts[month], month))


def build_monthly_summary(transactions: Sequence[CategorizedTransaction], awards: Sequence[Award]) -> MonthlySummary:
    """Aggregate a non-empty categorized statement into its MonthlySummary."""
    outflows = [t for t in transactions if t.amount < 0]

    category_totals = {
        category: math.fsum(abs(t.amount) for t in outflows if t.category is category) for category in Category
    }

    frequency = Counter(t.category for t in outflows)
    top_category = max(Category, key=lambda category: frequency[category]) if outflows else Category.OTHER

    return MonthlySummary(
        month=statement_month(transactions),
        total_spent=math.fsum(abs(t.amount) for t in outflows),
        top_category=top_category,
        awards_won=[award.id for award in awards],
        transaction_count=len(transactions),
        category_totals=category_totals,
    )
