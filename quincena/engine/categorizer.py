"""Keyword-priority categorizer for Mexican bank statement descriptions.

Keyword syntax:
    ``*``  wildcard, e.g. ``"uber*eats"`` matches ``"uber eats"`` and ``"uber*eats12345"``
    ``^``  must match at the start of the description, e.g. ``"^rest "`` does not match ``"interest"``
"""

import re
from collections import Counter
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from quincena.core.models import CategorizedTransaction, Category, Transaction
from quincena.core.utils import get_logger

logger = get_logger("premios-quincena.categorizer")

KEYWORDS: Mapping[Category, tuple[str, ...]] = MappingProxyType(
    {
        Category.FOOD_DELIVERY: (
            "uber eats", "ubereats", "uber*eats", "ubreats",
            "rappi",
            "didi food", "didifood", "didi*food",
            "sin delantal", "justo", "cornershop",
        ),
        # Skipped when the description looks food related, see RIDESHARE_EXCLUSIONS.
        Category.RIDESHARE: (
            "uber", "didi", "cabify", "beat", "in driver", "indriver",
        ),
        Category.BANK_FEE: (
            "comision", "anualidad", "cargo por", "iva comision",
            "interes", "penalizacion", "cargo mensual", "mantenimiento",
            "cobro automatico seguro",
        ),
        Category.CASH_WITHDRAWAL: (
            "retiro", "cajero", "atm", "disposicion", "efectivo",
            "banamex atm", "hsbc atm", "bbva atm", "santander atm", "scotiabank atm",
        ),
        Category.SPEI_TRANSFER: (
            "spei", "transferencia", "traspaso", "envio", "pago a",
            "codi", "codi pago",
            "mercadopago", "mercado pago", "clip", "conekta",
        ),
        Category.SUBSCRIPTION_GYM: (
            "smartfit", "sport city", "sportcity", "gym", "gimnasio",
            "netflix", "spotify", "disney+", "disney", "hbo max", "hbo",
            "apple", "google", "microsoft", "amazon prime", "paramount",
            "openai", "chatgpt", "claude", "dropbox", "icloud", "youtube premium",
            "zoom", "slack", "notion", "duolingo", "crunchyroll", "twitch",
            "plata+", "suscripcion plata", "storytel", "dochub",
        ),
        Category.GAS_TRANSPORT: (
            "gasolineria", "gasolinera", "gasolina", "oxxo gas",
            "estacion de servicio", "estacion de gas", "estacion ",
            "^est ",
            "pemex", "bp", "shell", "mobil",
            "metro", "metrobus", "trolebus", "ecobici", "tren",
            "gas",
        ),
        Category.CONVENIENCE_STORE: (
            "oxxo", "7-eleven", "seven eleven", "7eleven", "7 eleven",
            "circle k", "circlek", "six", "extra", "kiosko",
            "farmacias guadalajara", "farmacia guadalajara",
            "chedraui", "bodega aurrera", "aurrera", "walmart express",
            "walmartexpress", "seven 11",
            "mini super", "minisuper", "super peche", "abarrotes", "miscelanea",
        ),
        Category.RESTAURANT_CAFE: (
            "koi", "cafe", "coffee", "starbucks",
            "restaurant", "restaurante", "^rest ",
            "taco", "tacos", "sushi", "pizza", "burger", "hamburguesa",
            "subway", "kfc", "mcdonalds", "dominos", "vips", "sanborns",
            "el pescador", "la nacional", "cielito querido", "punta del cielo",
            "proscenio", "joselo", "yangguofu", "granola",
        ),
        Category.SUPERMARKET: (
            "walmart", "sams club", "sam's", "costco", "soriana",
            "chedraui", "la comer", "city market", "fresko", "superama",
            "heb", "selecto", "mega", "comercial mexicana",
        ),
        Category.PHARMACY_HEALTH: (
            "farmacia", "farmacias", "similares", "farmacia del ahorro",
            "benavides", "cruz verde", "san pablo", "farmacias san pablo",
            "^dr ", "doctor ", "dra ",
            "hospital", "clinica", "laboratorio", "dentista", "optica",
        ),
        Category.ECOMMERCE: (
            "amazon", "mercado libre", "mercadolibre", "meli", "shein",
            "aliexpress", "liverpool", "palacio de hierro", "zara",
            "h&m", "pull and bear", "bershka", "privalia", "linio",
            "wish", "ebay", "paypal",
            "office depot", "officedepot", "fedex", "staples",
        ),
        Category.EDUCATION: (
            "colegio", "escuela", "universidad", "inscripcion",
            "colegiatura", "coursera", "udemy", "platzi",
        ),
    }
)

# More specific merchants first: food delivery before the ride-share brand it embeds,
# "oxxo gas" before "oxxo", "farmacias guadalajara" before "farmacia".
PRIORITY: tuple[Category, ...] = (
    Category.FOOD_DELIVERY,
    Category.RIDESHARE,
    Category.BANK_FEE,
    Category.CASH_WITHDRAWAL,
    Category.SPEI_TRANSFER,
    Category.SUBSCRIPTION_GYM,
    Category.GAS_TRANSPORT,
    Category.CONVENIENCE_STORE,
    Category.RESTAURANT_CAFE,
    Category.SUPERMARKET,
    Category.PHARMACY_HEALTH,
    Category.ECOMMERCE,
    Category.EDUCATION,
)

RIDESHARE_EXCLUSIONS: tuple[str, ...] = ("eats", "food", "rappi")


def keyword_matches(description: str, keyword: str) -> bool:
    """Return True if a lower-cased description matches a single keyword."""
    anchored = keyword.startswith("^")
    base = keyword[1:] if anchored else keyword

    if "*" in base:
        pattern = ".*".join(re.escape(part) for part in base.split("*"))
        matcher = re.match if anchored else re.search
        return matcher(pattern, description) is not None

    if anchored:
        return description.startswith(base)
    return base in description


def categorize(description: str) -> Category:
    """Assign the first category, in priority order, with a matching keyword."""
    desc = description.lower()

    for category in PRIORITY:
        if category is Category.RIDESHARE and any(token in desc for token in RIDESHARE_EXCLUSIONS):
            continue
        if any(keyword_matches(desc, kw) for kw in KEYWORDS[category]):
            return category

    return Category.OTHER


def categorize_transactions(transactions: Iterable[Transaction]) -> list[CategorizedTransaction]:
    """Categorize every transaction of a statement."""
    return [
        CategorizedTransaction(
            date=txn.date, amount=txn.amount, description=txn.description, category=categorize(txn.description)
        )
        for txn in transactions
    ]


def log_category_summary(transactions: list[CategorizedTransaction]) -> None:
    """Log how many transactions landed in each category and which ones stayed uncategorized."""
    counts = Counter(txn.category.value for txn in transactions)
    logger.info(f"Category counts: {dict(counts)}")

    others = [txn.description for txn in transactions if txn.category is Category.OTHER]
    if others:
        logger.info(f"Uncategorized ({len(others)}): {others}")
    else:
        logger.info("Every transaction was categorized.")
