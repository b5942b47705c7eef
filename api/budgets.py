from typing import Optional

from fastapi import APIRouter, Depends, Response

from api.deps import current_user_id, get_services, require_bearer
from api.schemas import BudgetRequest, PathId
from errors import NotFound, ValidationError
from services.base import Services

router = APIRouter(prefix="/api/budgets", dependencies=[Depends(require_bearer)])


@router.get("")
def list_budgets(
    month: Optional[str] = None,
    user_id: int = Depends(current_user_id),
    services: Services = Depends(get_services),
):
    """List the budgets of one month (?month=YYYY-MM, required)."""
    if not month:
        raise ValidationError("month query parameter is required", code="month_required")
    return [b.to_dict() for b in services.budgets.find_all(user_id, month=month)]


@router.post("", status_code=201)
def create_budget(
    payload: BudgetRequest,
    user_id: int = Depends(current_user_id),
    services: Services = Depends(get_services),
):
    budget = services.budgets.create(
        user_id, payload.category_id, payload.period_month, payload.limit_amount
    )
    return budget.to_dict()


@router.put("/{budget_id}")
def update_budget(
    budget_id: PathId,
    payload: BudgetRequest,
    user_id: int = Depends(current_user_id),
    services: Services = Depends(get_services),
):
    budget = services.budgets.update(
        user_id,
        budget_id,
        payload.category_id,
        payload.period_month,
        payload.limit_amount,
    )
    if budget is None:
        raise NotFound()
    return budget.to_dict()


@router.delete("/{budget_id}", status_code=204)
def delete_budget(
    budget_id: PathId,
    user_id: int = Depends(current_user_id),
    services: Services = Depends(get_services),
):
    if not services.budgets.delete(user_id, budget_id):
        raise NotFound()
    return Response(status_code=204)
