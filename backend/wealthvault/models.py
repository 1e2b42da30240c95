# backend/wealthvault/models.py
import enum
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import String, Date, DateTime, Enum, Numeric, JSON, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class TransactionType(str, enum.Enum):
    BUY = "BUY"
    SELL = "SELL"
    DIVIDEND = "DIVIDEND"


class AssetCategory(str, enum.Enum):
    STOCK = "STOCK"
    ETF = "ETF"
    MUTUAL_FUND = "MUTUAL_FUND"
    BOND = "BOND"
    REAL_ESTATE = "REAL_ESTATE"
    GOLD = "GOLD"
    CRYPTO = "CRYPTO"
    CASH = "CASH"
    # Liabilities are tracked as positive magnitudes and subtracted from wealth
    DEBT = "DEBT"
    OTHER = "OTHER"


class Asset(Base):
    """
    A user-entered holding or liability.

    current_price is entered manually (no pricing feed) and updated
    through the price endpoint.
    """
    __tablename__ = "assets"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String)
    ticker: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    category: Mapped[AssetCategory] = mapped_column(Enum(AssetCategory))
    current_price: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))
    target_allocation: Mapped[Decimal] = mapped_column(Numeric(9, 4), default=Decimal(0))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        # "All transactions for asset A ordered by date" - accumulator and oversell checks
        Index('ix_transaction_asset_date', 'asset_id', 'date'),
    )

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    # No foreign key: transactions restored from a backup may reference
    # assets that no longer exist, and those are tolerated
    asset_id: Mapped[int] = mapped_column(index=True)
    transaction_type: Mapped[TransactionType] = mapped_column(Enum(TransactionType))
    date: Mapped[date] = mapped_column(Date, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # For DIVIDEND rows quantity x price is the cash amount received
    quantity: Mapped[Decimal] = mapped_column(Numeric(18, 8))
    price: Mapped[Decimal] = mapped_column(Numeric(18, 8))
    fees: Mapped[Decimal] = mapped_column(Numeric(18, 8), default=Decimal(0))


class Goal(Base):
    __tablename__ = "goals"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String)
    target_amount: Mapped[Decimal] = mapped_column(Numeric(18, 2))
    # Empty list = goal tracks total net wealth
    linked_asset_ids: Mapped[list[int]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
