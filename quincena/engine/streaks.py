"""Detection of awards won in consecutive calendar months."""

from collections.abc import Sequence

from quincena.core.models import AwardId, MonthlySummary, Streak

MIN_STREAK = 2


def next_month(month: str) -> str:
    """Return the ``YYYY-MM`` key of the month after ``month``, rolling December into January."""
    year, mon = (int(part) for part in month.split("-"))
    if mon == 12:
        return f"{year + 1:04d}-01"
    return f"{year:04d}-{mon + 1:02d}"


def streak_length(award_id: AwardId, history: Sequence[MonthlySummary]) -> int:
    """Count consecutive months, ending at the latest summary, in which ``award_id`` was won."""
    count = 0
    newer: MonthlySummary | None = None
    for summary in reversed(history):
        if award_id not in summary.awards_won:
            break
        if newer is not None and next_month(summary.month) != newer.month:
            break
        count += 1
        newer = summary
    return count


def find_current_streaks(history: Sequence[MonthlySummary]) -> list[Streak]:
    """Find every award still on a streak of two or more months.

    ``history`` must be sorted ascending by month. A missing month breaks a
    streak even if the award was won on both sides of the gap.
    """
    if len(history) < MIN_STREAK:
        return []

    seen: dict[AwardId, None] = {}
    for summary in history:
        for award_id in summary.awards_won:
            seen.setdefault(award_id, None)

    streaks = []
    for award_id in seen:
        count = streak_length(award_id, history)
        if count >= MIN_STREAK:
            streaks.append(Streak(award_id=award_id, count=count))
    return sorted(streaks, key=lambda streak: streak.count, reverse=True)
