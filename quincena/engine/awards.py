"""Award detectors: one pure function per award, each returning an Award or None.

Every detector reads the whole categorized statement. ``evaluate_awards`` runs the
full battery and returns the triggered awards unsorted, in detector order.
"""

import datetime as dt
import math
from collections import defaultdict
from collections.abc import Callable, Sequence

from quincena.core.models import Award, AwardId, CategorizedTransaction, Category
from quincena.core.utils import get_logger
from quincena.engine.formatting import human_date, mxn, weekday_name

logger = get_logger("premios-quincena.awards")

Detector = Callable[[Sequence[CategorizedTransaction]], Award | None]

GODIN_MIN_VISITS = 2
UBER_MIN_SPEND = 200
BANCO_CENTRAL_MIN_OUTFLOW = 1000
BANCO_CENTRAL_MIN_INFLOWS = 3
BANCO_CENTRAL_WINDOW_DAYS = 2
BANCO_CENTRAL_WEEKDAYS = (4, 5)  # Friday, Saturday
CASH_MIN_WITHDRAWALS = 4
SMARTFIT_MIN_DELIVERIES = 5
ME_LO_MEREZCO_MIN_PURCHASE = 500
PAYDAYS = (15, 30, 31)
SURVIVOR_THRESHOLD = 50
SURVIVOR_CHECK_DAYS = (13, 14, 28, 29)


def _outflows(txns: Sequence[CategorizedTransaction], category: Category) -> list[CategorizedTransaction]:
    return [t for t in txns if t.category is category and t.amount < 0]


def _spent(txns: Sequence[CategorizedTransaction]) -> float:
    return sum(abs(t.amount) for t in txns)


def indice_godin(txns: Sequence[CategorizedTransaction]) -> Award | None:
    """Two or more convenience store purchases."""
    visits = _outflows(txns, Category.CONVENIENCE_STORE)
    if len(visits) < GODIN_MIN_VISITS:
        return None

    total = _spent(visits)
    has_oxxo = any("oxxo" in t.description.lower() for t in visits)
    store_name = "el Oxxo" if has_oxxo else "la tiendita de conveniencia"

    return Award(
        id=AwardId.INDICE_GODIN,
        title="Índice Godín",
        emoji="🏪",
        roast_text=(
            f"Fuiste {len(visits)} veces a {store_name} este mes, {mxn(total)} en total. "
            "Literalmente estás financiando la remodelación de la sucursal más cercana a tu chamba. "
            "¿El súper existe o sólo lo visitas en teoría?"
        ),
        trigger_value=len(visits),
    )


def accionista_uber(txns: Sequence[CategorizedTransaction]) -> Award | None:
    """Ride-share spend of at least $200."""
    trips = _outflows(txns, Category.RIDESHARE)
    total = _spent(trips)
    if total < UBER_MIN_SPEND:
        return None

    avg_trip = total / len(trips)

    return Award(
        id=AwardId.ACCIONISTA_UBER,
        title="Accionista de Uber",
        emoji="🚗",
        roast_text=(
            f"{mxn(total)} en Uber y DiDi este mes, {len(trips)} viajes, promedio {mxn(avg_trip)} cada uno. "
            "Con eso ya ibas mereciendo dividendos trimestrales. "
            "¿Tus piernas son de adorno o tienen algún plan de negocio propio?"
        ),
        trigger_value=total,
    )


def banco_central(txns: Sequence[CategorizedTransaction]) -> Award | None:
    """A big Friday/Saturday outflow followed by at least three incoming SPEI transfers.

    Outflows are scanned in statement order and the first qualifying one wins,
    even if a later outflow is larger or collected more transfers.
    """
    big_weekend = [
        t for t in txns if t.amount < -BANCO_CENTRAL_MIN_OUTFLOW and t.date.weekday() in BANCO_CENTRAL_WEEKDAYS
    ]

    for trigger in big_weekend:
        incoming = [
            t
            for t in txns
            if t.category is Category.SPEI_TRANSFER
            and t.amount > 0
            and 0 <= (t.date - trigger.date).days <= BANCO_CENTRAL_WINDOW_DAYS
        ]
        if len(incoming) < BANCO_CENTRAL_MIN_INFLOWS:
            continue

        incoming_total = sum(t.amount for t in incoming)
        return Award(
            id=AwardId.BANCO_CENTRAL,
            title="Banco Central",
            emoji="🏦",
            roast_text=(
                f"El {weekday_name(trigger.date)} {human_date(trigger.date)} soltaste {mxn(trigger.amount)} "
                f"de un solo golpe, y en las siguientes 48 horas te cayeron {len(incoming)} transferencias "
                f"por {mxn(incoming_total)}. "
                "Eres el banco central del grupo, mano. Tasa de interés: amistad. Sin garantías."
            ),
            trigger_value=abs(trigger.amount),
        )
    return None


def hoyo_negro_efectivo(txns: Sequence[CategorizedTransaction]) -> Award | None:
    """Four or more cash withdrawals."""
    withdrawals = _outflows(txns, Category.CASH_WITHDRAWAL)
    if len(withdrawals) < CASH_MIN_WITHDRAWALS:
        return None

    total = _spent(withdrawals)

    return Award(
        id=AwardId.HOYO_NEGRO_EFECTIVO,
        title="Hoyo Negro de Efectivo",
        emoji="💸",
        roast_text=(
            f"{len(withdrawals)} retiros de cajero este mes, {mxn(total)} en total. "
            "El efectivo entra al bolsillo y desaparece como lágrimas en la lluvia: nadie sabe en qué se fue. "
            '¿El casero, la vaca, o simplemente "gastos varios"?'
        ),
        trigger_value=len(withdrawals),
    )


def socio_honorario_smartfit(txns: Sequence[CategorizedTransaction]) -> Award | None:
    """A gym or subscription charge plus five or more food deliveries."""
    gym = [t for t in txns if t.category is Category.SUBSCRIPTION_GYM]
    deliveries = _outflows(txns, Category.FOOD_DELIVERY)
    if not gym or len(deliveries) < SMARTFIT_MIN_DELIVERIES:
        return None

    gym_total = _spent(gym)
    delivery_total = _spent(deliveries)

    return Award(
        id=AwardId.SOCIO_HONORARIO_SMARTFIT,
        title="Socio Honorario SmartFit",
        emoji="🏋️",
        roast_text=(
            f"Pagaste {mxn(gym_total)} de gym y luego pediste delivery {len(deliveries)} veces "
            f"({mxn(delivery_total)}). "
            "La membresía claramente existe para compensar el karma del Uber Eats. "
            "Todos lo hacemos. Nadie te juzga. Bueno, sí, un poco."
        ),
        trigger_value=len(deliveries),
    )


def sindrome_me_lo_merezco(txns: Sequence[CategorizedTransaction]) -> Award | None:
    """An online purchase over $500 on a payday (15th, 30th or 31st)."""
    qualifying = [
        t
        for t in txns
        if t.category is Category.ECOMMERCE and t.amount < -ME_LO_MEREZCO_MIN_PURCHASE and t.date.day in PAYDAYS
    ]
    if not qualifying:
        return None

    biggest = min(qualifying, key=lambda t: t.amount)
    zone = "justo en quincena" if biggest.date.day == 15 else "con el último depósito del mes"

    return Award(
        id=AwardId.SINDROME_ME_LO_MEREZCO,
        title="Síndrome 'Me Lo Merezco'",
        emoji="🛍️",
        roast_text=(
            f"El {human_date(biggest.date)} ({zone}) te aventaste {mxn(biggest.amount)} en {biggest.description}. "
            "Llegó el dinero, se fue la razón, en ese orden. "
            "¿A poco no te lo mereces? (La respuesta correcta es no, pero ya fue.)"
        ),
        trigger_value=abs(biggest.amount),
    )


def martir_comisiones(txns: Sequence[CategorizedTransaction]) -> Award | None:
    """Any bank fee at all."""
    fees = _outflows(txns, Category.BANK_FEE)
    if not fees:
        return None

    total = _spent(fees)
    plural = f" En {len(fees)} cargos distintos, para más inri." if len(fees) > 1 else ""

    return Award(
        id=AwardId.MARTIR_COMISIONES,
        title="Mártir de las Comisiones",
        emoji="😤",
        roast_text=(
            f"Tu banco te cobró {mxn(total)} en comisiones este mes.{plural} "
            "Te están cobrando el privilegio de guardarles tu propio dinero. "
            "Ya existen Nu, Spin y mil opciones sin comisiones, solo diciéndote."
        ),
        trigger_value=total,
    )


def lowest_balance_before_payday(txns: Sequence[CategorizedTransaction]) -> tuple[dt.date, float] | None:
    """Walk the running balance day by day and return the lowest sub-$50 balance seen on a pre-payday.

    The balance starts at zero on the first transaction date. Only days 13, 14, 28
    and 29 are checked; ties keep the earliest date.
    """
    if not txns:
        return None

    amounts_by_date: dict[dt.date, list[float]] = defaultdict(list)
    for t in txns:
        amounts_by_date[t.date].append(t.amount)
    # fsum keeps the daily net independent of statement order.
    net_by_date = {day: math.fsum(amounts) for day, amounts in amounts_by_date.items()}

    current = min(net_by_date)
    last = max(net_by_date)
    running = 0.0
    lowest: tuple[dt.date, float] | None = None

    while current <= last:
        running += net_by_date.get(current, 0.0)
        if current.day in SURVIVOR_CHECK_DAYS and running < SURVIVOR_THRESHOLD:
            if lowest is None or running < lowest[1]:
                lowest = (current, running)
        current += dt.timedelta(days=1)

    return lowest


def sobreviviente_extremo(txns: Sequence[CategorizedTransaction]) -> Award | None:
    """Running balance under $50 right before a payday."""
    lowest = lowest_balance_before_payday(txns)
    if lowest is None:
        return None

    lowest_date, balance = lowest
    zone = "antes de la quincena" if lowest_date.day <= 14 else "antes de fin de mes"
    balance_text = f"−{mxn(balance)} (sí, en números rojos)" if balance < 0 else f"{mxn(balance)} pesitos"

    return Award(
        id=AwardId.SOBREVIVIENTE_EXTREMO,
        title="Sobreviviente Extremo",
        emoji="🧗",
        roast_text=(
            f"El {human_date(lowest_date)} ({zone}) tu saldo llegó a {balance_text}. "
            "Modo supervivencia activado: WiFi del vecino, tacos de nada y fe ciega en que el jueves cae el depósito. "
            "Sobreviviste. Eres un héroe. Un héroe irresponsable, pero héroe."
        ),
        # Deeper below $50 ranks higher.
        trigger_value=max(0.0, SURVIVOR_THRESHOLD - balance),
    )


DETECTORS: tuple[Detector, ...] = (
    indice_godin,
    accionista_uber,
    banco_central,
    hoyo_negro_efectivo,
    socio_honorario_smartfit,
    sindrome_me_lo_merezco,
    martir_comisiones,
    sobreviviente_extremo,
)


def evaluate_awards(txns: Sequence[CategorizedTransaction]) -> list[Award]:
    """Run every detector over one statement and return the triggered awards, unranked."""
    return [award for award in (detector(txns) for detector in DETECTORS) if award is not None]


def log_awards(awards: Sequence[Award]) -> None:
    """Log the awards won for a statement."""
    if not awards:
        logger.info("No awards won this period.")
        return
    logger.info(f"{len(awards)} award(s) won:")
    for award in awards:
        logger.info(f"  {award.emoji} [{award.id}] trigger_value={award.trigger_value}")
        logger.info(f"     {award.roast_text}")
