from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional


from app.database import get_db
from . import schemas, service
from app.users.auth import get_current_user_id


router = APIRouter()


@router.get("", response_model=List[schemas.TransactionOut])
def list_transactions(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return service.list_transactions(db, user_id)


@router.post("", response_model=schemas.TransactionOut)
def create_transaction(
    transaction: schemas.TransactionCreate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return service.create_transaction(db, transaction, user_id=user_id)


# summary and filter must be registered before /{transaction_id}
@router.get("/summary", response_model=schemas.SummaryOut)
def get_summary(
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return service.get_summary(db, user_id)


@router.get("/filter", response_model=List[schemas.TransactionOut])
def filter_transactions(
    type: Optional[str] = Query(None, description="Income | Expense"),
    from_date: Optional[str] = Query(None, alias="from", description="Start date YYYY-MM-DD (inclusive)"),
    to_date: Optional[str] = Query(None, alias="to", description="End date YYYY-MM-DD (whole day included)"),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return service.filter_transactions(
        db,
        user_id,
        transaction_type=type,
        from_date=from_date,
        to_date=to_date,
    )


@router.get("/{transaction_id}", response_model=schemas.TransactionOut)
def get_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return service.get_transaction(db, transaction_id, user_id)


@router.put("/{transaction_id}", response_model=schemas.TransactionOut)
def update_transaction(
    transaction_id: int,
    transaction: schemas.TransactionUpdate,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return service.update_transaction(db, transaction_id, transaction, user_id)


@router.delete("/{transaction_id}", response_model=schemas.MessageOut)
def delete_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return service.delete_transaction(db, transaction_id, user_id)
