"""Spanish (es-MX) rendering helpers for award messages."""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal

MONTH_NAMES = (
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
)

WEEKDAY_NAMES = ("lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo")


def mxn(amount: float) -> str:
    """Format an amount as ``$1,234``: absolute value, rounded half-up to the peso."""
    pesos = Decimal(str(abs(amount))).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"${int(pesos):,}"


def human_date(day: dt.date) -> str:
    """Render a date as ``7 de junio``."""
    return f"{day.day} de {MONTH_NAMES[day.month - 1]}"


def weekday_name(day: dt.date) -> str:
    return WEEKDAY_NAMES[day.weekday()]


def month_key(day: dt.date) -> str:
    """Return the ``YYYY-MM`` key of a date."""
    return f"{day.year:04d}-{day.month:02d}"
