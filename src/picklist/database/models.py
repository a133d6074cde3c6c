"""SQLAlchemy models for picklist database."""

from datetime import datetime, UTC
from decimal import Decimal
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Integer,
    String,
    TypeDecorator,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class DecimalText(TypeDecorator):
    """Decimal stored as text, so no digits are lost to a fixed scale."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return str(value) if value is not None else None

    def process_result_value(self, value, dialect):
        return Decimal(value) if value is not None else None


class UTCDateTime(TypeDecorator):
    """Timestamp stored as naive UTC and read back timezone-aware.

    Naive values are taken to be UTC already.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(UTC).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is not None:
            value = value.replace(tzinfo=UTC)
        return value


class AppSettings(Base):
    """Single-row application settings model."""

    __tablename__ = "app_settings"

    id = Column(Integer, primary_key=True)
    column_mapping = Column(JSON, nullable=True)
    selected_date = Column(String(10), nullable=True)
    last_sync_time = Column(UTCDateTime, nullable=True)
    created_at = Column(UTCDateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(
        UTCDateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


class OrderLineRecord(Base):
    """Loaded order line model."""

    __tablename__ = "order_lines"

    id = Column(Integer, primary_key=True)
    position = Column(Integer, nullable=False, index=True)
    row_index = Column(Integer, nullable=False)
    order_number = Column(String, nullable=False, index=True)
    customer_name = Column(String, nullable=False)
    sku = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    location = Column(String, nullable=False)
    buyer_postcode = Column(String, nullable=True)
    remaining_stock = Column(Integer, nullable=True)
    order_value = Column(DecimalText, nullable=True)
    channel_type = Column(String, nullable=True)
    channel = Column(String, nullable=True)
    item_name = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    file_date = Column(UTCDateTime, nullable=False)
    completed = Column(Boolean, default=False, nullable=False)
    problem_status = Column(String, nullable=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
