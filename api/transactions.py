from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from api.deps import current_user_id, get_services, require_bearer
from api.schemas import EntryType, PathId, TransactionRequest
from db.manager import MAX_ROW_ID
from errors import NotFound
from services.base import Services

router = APIRouter(prefix="/api/transactions", dependencies=[Depends(require_bearer)])


@router.get("")
def list_transactions(
    date_from: Optional[date] = Query(default=None, alias="from"),
    date_to: Optional[date] = Query(default=None, alias="to"),
    type: Optional[EntryType] = None,
    category_id: Optional[int] = Query(default=None, gt=0, le=MAX_ROW_ID),
    user_id: int = Depends(current_user_id),
    services: Services = Depends(get_services),
):
    """List transactions, filtered by ?from=&to= (YYYY-MM-DD), ?type= and ?category_id=."""
    transactions = services.transactions.find_all(
        user_id,
        date_from=date_from,
        date_to=date_to,
        entry_type=type,
        category_id=category_id,
    )
    return [t.to_dict() for t in transactions]


@router.get("/{transaction_id}")
def get_transaction(
    transaction_id: PathId,
    user_id: int = Depends(current_user_id),
    services: Services = Depends(get_services),
):
    transaction = services.transactions.find(user_id, transaction_id)
    if transaction is None:
        raise NotFound()
    return transaction.to_dict()


@router.post("", status_code=201)
def create_transaction(
    payload: TransactionRequest,
    user_id: int = Depends(current_user_id),
    services: Services = Depends(get_services),
):
    transaction = services.transactions.create(
        user_id,
        amount=payload.amount,
        entry_type=payload.type,
        on_date=payload.date,
        category_id=payload.category_id,
        description=payload.description,
    )
    return transaction.to_dict()


@router.put("/{transaction_id}")
def update_transaction(
    transaction_id: PathId,
    payload: TransactionRequest,
    user_id: int = Depends(current_user_id),
    services: Services = Depends(get_services),
):
    transaction = services.transactions.update(
        user_id,
        transaction_id,
        amount=payload.amount,
        entry_type=payload.type,
        on_date=payload.date,
        category_id=payload.category_id,
        description=payload.description,
    )
    if transaction is None:
        raise NotFound()
    return transaction.to_dict()


@router.delete("/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: PathId,
    user_id: int = Depends(current_user_id),
    services: Services = Depends(get_services),
):
    if not services.transactions.delete(user_id, transaction_id):
        raise NotFound()
    return Response(status_code=204)
