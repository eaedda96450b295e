from datetime import date, datetime, time, timedelta
from typing import Optional

from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from . import models, schemas


# =========================
# Helper: owner-scoped lookup
# =========================
def _owned_query(db: Session, user_id: int):
    return db.query(models.Transaction).filter(models.Transaction.user_id == user_id)


def _newest_first(query):
    return query.order_by(models.Transaction.date.desc(), models.Transaction.id.desc())


def _get_owned_or_404(db: Session, transaction_id: int, user_id: int) -> models.Transaction:
    # Someone else's transaction looks exactly like a missing one
    transaction = (
        _owned_query(db, user_id)
        .filter(models.Transaction.id == transaction_id)
        .first()
    )
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


# =========================
# List Transactions
# =========================
def list_transactions(db: Session, user_id: int):
    return _newest_first(_owned_query(db, user_id)).all()


# =========================
# Create Transaction
# =========================
def create_transaction(db: Session, transaction: schemas.TransactionCreate, user_id: int):
    new_transaction = models.Transaction(
        amount=transaction.amount,
        title=transaction.title,
        date=transaction.date,
        method=transaction.method,
        category=transaction.category,
        type=transaction.type,
        user_id=user_id,
    )
    db.add(new_transaction)
    db.commit()
    db.refresh(new_transaction)
    return new_transaction


# =========================
# Get Transaction by ID
# =========================
def get_transaction(db: Session, transaction_id: int, user_id: int):
    return _get_owned_or_404(db, transaction_id, user_id)


# =========================
# Update Transaction
# =========================
def update_transaction(
    db: Session,
    transaction_id: int,
    transaction_data: schemas.TransactionUpdate,
    user_id: int,
):
    transaction = _get_owned_or_404(db, transaction_id, user_id)

    transaction.title = transaction_data.title
    transaction.amount = transaction_data.amount
    transaction.type = transaction_data.type
    transaction.date = transaction_data.date

    db.commit()
    db.refresh(transaction)
    return transaction


# =========================
# Delete Transaction
# =========================
def delete_transaction(db: Session, transaction_id: int, user_id: int):
    transaction = _get_owned_or_404(db, transaction_id, user_id)

    db.delete(transaction)
    db.commit()

    return {"message": "Transaction deleted successfully"}


# =========================
# Summary (Income / Expense / Balance)
# =========================
def _sum_by_type(db: Session, user_id: int, transaction_type: str) -> float:
    total = (
        db.query(func.coalesce(func.sum(models.Transaction.amount), 0))
        .filter(
            models.Transaction.user_id == user_id,
            models.Transaction.type == transaction_type,
        )
        .scalar()
    )
    return float(total or 0)


def get_summary(db: Session, user_id: int):
    income = _sum_by_type(db, user_id, "Income")
    expense = _sum_by_type(db, user_id, "Expense")

    return {
        "income": income,
        "expense": expense,
        "balance": income - expense,
    }


# =========================
# Filter Transactions
# =========================
TRANSACTION_TYPES = ("Income", "Expense")


def _parse_day(value: str, param: str) -> date:
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(status_code=400, detail=f"'{param}' must be a date in YYYY-MM-DD format")


def filter_transactions(
    db: Session,
    user_id: int,
    transaction_type: Optional[str] = None,
    from_date: Optional[str] = None,
    to_date: Optional[str] = None,
):
    # Empty query values (?type=&from=&to=) mean "no filter"
    query = _owned_query(db, user_id)

    if transaction_type:
        if transaction_type not in TRANSACTION_TYPES:
            raise HTTPException(status_code=400, detail="'type' must be Income or Expense")
        query = query.filter(models.Transaction.type == transaction_type)

    if from_date and from_date.strip():
        start_dt = datetime.combine(_parse_day(from_date, "from"), time.min)
        query = query.filter(models.Transaction.date >= start_dt)

    if to_date and to_date.strip():
        # Move to next day midnight, then use <
        end_dt = datetime.combine(_parse_day(to_date, "to"), time.min) + timedelta(days=1)
        query = query.filter(models.Transaction.date < end_dt)

    return _newest_first(query).all()
