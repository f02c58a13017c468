from datetime import datetime
from sqlalchemy import String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class Expense(Base):
    """
    A single expense owned by a user.

    Amounts are stored as decimal strings ("15.50") so that sums never go
    through binary floating point. Dates are naive local datetimes.
    """

    __tablename__ = "expenses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    amount: Mapped[str] = mapped_column(String(20), nullable=False)

    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id"), nullable=False
    )

    merchant: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    receipt_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    # Free-text origin tag: "manual", "ai_scan", "bank_sync", ...
    source: Mapped[str] = mapped_column(String(50), nullable=False, default="manual")

    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.now
    )

    # Relationships
    category: Mapped["Category"] = relationship("Category", back_populates="expenses")

    def __repr__(self) -> str:
        return (
            f"<Expense(id={self.id}, date={self.date}, "
            f"amount={self.amount}, merchant='{self.merchant}')>"
        )
