"""DB connection and helpers for Premios de la Quincena.

Only per-month aggregates are stored; raw transactions never reach the database.
"""

import json

from sqlalchemy import Column, Float, Integer, String, Text, UniqueConstraint, create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from quincena.core.models import AwardId, Category, MonthlySummary
from quincena.core.utils import get_logger, utcnow_iso

Base = declarative_base()

logger = get_logger("premios-quincena.db")


class MonthlySummaryRecord(Base):
    """One month of aggregates for one browser session."""

    __tablename__ = "monthly_summaries"
    __table_args__ = (UniqueConstraint("session_id", "month", name="uq_session_month"),)

    id = Column(Integer, primary_key=True)
    session_id = Column(String, nullable=False, index=True)
    month = Column(String(7), nullable=False)
    total_spent = Column(Float, nullable=False, default=0.0)
    top_category = Column(String, nullable=False)
    awards_won = Column(Text, nullable=False, default="[]")
    transaction_count = Column(Integer, nullable=False, default=0)
    category_totals = Column(Text, nullable=False, default="{}")
    updated_at = Column(String, nullable=False)

    def to_summary(self) -> MonthlySummary:
        """Convert the row back into a MonthlySummary."""
        return MonthlySummary(
            month=self.month,
            total_spent=self.total_spent,
            top_category=Category(self.top_category),
            awards_won=[AwardId(a) for a in json.loads(self.awards_won)],
            transaction_count=self.transaction_count,
            category_totals=json.loads(self.category_totals),
        )


def get_engine() -> Engine:
    """Create a SQLAlchemy engine using the configured database URL."""
    from quincena.core.settings import get_settings

    url = get_settings().database_url
    return create_engine(url)


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def init_db(engine: Engine) -> None:
    """Create the tables if they do not exist yet."""
    Base.metadata.create_all(engine)


def get_db() -> "SummaryRepository":
    """Get a SummaryRepository backed by a new SQLAlchemy session."""
    return SummaryRepository(SessionLocal())


class SummaryRepository:
    """Storage of monthly summaries keyed by (session_id, month)."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def _find(self, session_id: str, month: str) -> MonthlySummaryRecord | None:
        stmt = select(MonthlySummaryRecord).where(
            MonthlySummaryRecord.session_id == session_id,
            MonthlySummaryRecord.month == month,
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def _write(self, session_id: str, summary: MonthlySummary) -> None:
        record = self._find(session_id, summary.month)
        if record is None:
            record = MonthlySummaryRecord(session_id=session_id, month=summary.month)
            self.session.add(record)
        record.total_spent = summary.total_spent
        record.top_category = summary.top_category.value
        record.awards_won = json.dumps([a.value for a in summary.awards_won])
        record.transaction_count = summary.transaction_count
        record.category_totals = json.dumps({c.value: v for c, v in summary.category_totals.items()})
        record.updated_at = utcnow_iso()
        self.session.commit()

    def upsert_summary(self, session_id: str, summary: MonthlySummary) -> None:
        """Insert the summary for its month, or overwrite the existing one entirely."""
        try:
            self._write(session_id, summary)
        except IntegrityError:
            # Another request inserted the same month first; overwrite its row.
            self.session.rollback()
            logger.warning(f"Concurrent insert for session={session_id}, month={summary.month}; retrying as update")
            self._write(session_id, summary)
        logger.info(f"Stored summary: session={session_id}, month={summary.month}, awards={len(summary.awards_won)}")

    def get_history(self, session_id: str) -> list[MonthlySummary]:
        """Return every stored summary of a session, ascending by month."""
        stmt = (
            select(MonthlySummaryRecord)
            .where(MonthlySummaryRecord.session_id == session_id)
            .order_by(MonthlySummaryRecord.month)
        )
        return [record.to_summary() for record in self.session.execute(stmt).scalars()]

    def close(self) -> None:
        """Close the SQLAlchemy session."""
        self.session.close()
