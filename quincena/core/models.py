"""Pydantic models shared by the award engine, the ingestion layer and the API.

Category and award identifiers are closed ``StrEnum`` sets so that their string
values can be persisted and serialized unchanged.
"""

import datetime as dt
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Category(StrEnum):
    """The fixed set of transaction categories."""

    CONVENIENCE_STORE = "convenience_store"
    RIDESHARE = "rideshare"
    FOOD_DELIVERY = "food_delivery"
    RESTAURANT_CAFE = "restaurant_cafe"
    SUPERMARKET = "supermarket"
    CASH_WITHDRAWAL = "cash_withdrawal"
    SUBSCRIPTION_GYM = "subscription_gym"
    ECOMMERCE = "ecommerce"
    PHARMACY_HEALTH = "pharmacy_health"
    SPEI_TRANSFER = "spei_transfer"
    BANK_FEE = "bank_fee"
    GAS_TRANSPORT = "gas_transport"
    EDUCATION = "education"
    OTHER = "other"


class AwardId(StrEnum):
    """Stable identifiers of the eight awards."""

    INDICE_GODIN = "indice_godin"
    ACCIONISTA_UBER = "accionista_uber"
    BANCO_CENTRAL = "banco_central"
    HOYO_NEGRO_EFECTIVO = "hoyo_negro_efectivo"
    SOCIO_HONORARIO_SMARTFIT = "socio_honorario_smartfit"
    SINDROME_ME_LO_MEREZCO = "sindrome_me_lo_merezco"
    MARTIR_COMISIONES = "martir_comisiones"
    SOBREVIVIENTE_EXTREMO = "sobreviviente_extremo"


class Transaction(BaseModel):
    """A single statement line. Negative amounts are outflows."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    amount: float
    description: str


class CategorizedTransaction(Transaction):
    """A transaction with the category assigned by the categorizer."""

    category: Category


class Award(BaseModel):
    """An award triggered by one statement period."""

    id: AwardId
    title: str
    emoji: str
    roast_text: str
    trigger_value: float = Field(ge=0)


class MonthlySummary(BaseModel):
    """Aggregate of one month of activity, persisted per session."""

    month: str = Field(pattern=r"^\d{4}-\d{2}$")
    total_spent: float = 0.0
    top_category: Category = Category.OTHER
    awards_won: list[AwardId] = Field(default_factory=list)
    transaction_count: int = 0
    category_totals: dict[Category, float] = Field(default_factory=dict)


class Streak(BaseModel):
    """An award won in consecutive months up to the latest one."""

    award_id: AwardId
    count: int = Field(ge=2)


class AnalysisReport(BaseModel):
    """Everything produced for one submitted statement."""

    session_id: str
    month: str
    transactions: list[CategorizedTransaction]
    awards: list[Award]
    featured: list[Award]
    streaks: list[Streak]
    summary: MonthlySummary
    share_text: str


class TransactionsPayload(BaseModel):
    """Request body carrying already-parsed transactions."""

    transactions: list[Transaction]


class PdfTextPayload(BaseModel):
    """Request body carrying text extracted from a PDF statement."""

    text: str = ""


class ExtractedTransactions(BaseModel):
    """Transactions extracted from PDF statement text."""

    transactions: list[Transaction]


class HistoryResponse(BaseModel):
    """Stored monthly summaries for a session and its current streaks."""

    session_id: str
    history: list[MonthlySummary]
    streaks: list[Streak]
