"""Plain-text summary meant to be pasted into chats and social posts."""

from collections.abc import Sequence

from quincena.core.models import Award, Streak
from quincena.engine.ranking import top_awards

SHARE_HEADER = "🏆 Mis Premios de la Quincena:"
SHARE_FOOTER = "¿Y tú qué premio te llevas? Sube tu estado de cuenta y descúbrelo."
NO_AWARDS_LINE = "Ningún premio este mes. Responsable o mintiéndome a mí mismo, quién sabe."


def format_share_text(awards: Sequence[Award], streaks: Sequence[Streak], limit: int = 4) -> str:
    """Render the strongest awards and any running streaks as a short shareable text."""
    titles = {award.id: award.title for award in awards}
    lines = [SHARE_HEADER]

    shown = top_awards(awards, limit)
    if shown:
        lines.extend(f"{award.emoji} {award.title}" for award in shown)
    else:
        lines.append(NO_AWARDS_LINE)

    for streak in streaks:
        title = titles.get(streak.award_id, streak.award_id.value)
        lines.append(f"🔥 {title} x{streak.count} meses seguidos")

    lines.append("")
    lines.append(SHARE_FOOTER)
    return "\n".join(lines)
