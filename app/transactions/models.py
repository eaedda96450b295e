from sqlalchemy import Column, Integer, Numeric, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.database import Base


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    amount = Column(Numeric(18, 2, asdecimal=False), nullable=False)
    title = Column(String(200), nullable=False, default="")
    date = Column(DateTime, nullable=False)
    method = Column(String(100), nullable=False, default="")      # Cash / Card / Transfer ...
    category = Column(String(100), nullable=False, default="")
    type = Column(String(20), nullable=False)                     # Income / Expense

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    owner = relationship("User", back_populates="transactions")

    __table_args__ = (
        Index("ix_transactions_user_id_date", "user_id", "date"),
    )
