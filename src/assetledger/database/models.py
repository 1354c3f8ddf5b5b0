"""SQLAlchemy models for the asset ledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    create_engine,
    event,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

from assetledger.domain.entities import AMOUNT_SCALE

Base = declarative_base()

Amount = Numeric(20, AMOUNT_SCALE)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Asset(Base):
    """Tracked asset model."""

    __tablename__ = "assets"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False, index=True)
    purchase_price = Column(Amount, nullable=True)
    purchase_date = Column(Date, nullable=True)
    current_value = Column(Amount, nullable=False)
    date_added = Column(DateTime, default=_utcnow, nullable=False)
    last_updated = Column(DateTime, default=_utcnow, nullable=False, index=True)
    removed = Column(Boolean, default=False, nullable=False, index=True)
    removed_at = Column(DateTime, nullable=True)
    notes = Column(String, nullable=True)

    # History rows are never deleted through the ORM
    value_history = relationship(
        "AssetValueHistory", back_populates="asset", passive_deletes="all"
    )


class AssetValueHistory(Base):
    """Append-only value history model."""

    __tablename__ = "asset_value_history"

    id = Column(Integer, primary_key=True)
    asset_id = Column(Integer, ForeignKey("assets.id"), nullable=False, index=True)
    value = Column(Amount, nullable=False)
    recorded_date = Column(Date, nullable=False, index=True)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    asset = relationship("Asset", back_populates="value_history")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory.

    For SQLite, referential integrity is switched on for every pooled
    connection; SQLite leaves it off by default.
    """
    engine = create_engine(database_url, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
