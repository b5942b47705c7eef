from typing import Optional

from fastapi import APIRouter, Depends

from api.deps import current_user_id, get_services, require_bearer
from errors import ValidationError
from services.base import Services

router = APIRouter(prefix="/api/dashboard", dependencies=[Depends(require_bearer)])


def _require_month(month: Optional[str]) -> str:
    if not month:
        raise ValidationError("month query parameter is required", code="month_required")
    return month


@router.get("/summary")
def month_summary(
    month: Optional[str] = None,
    user_id: int = Depends(current_user_id),
    services: Services = Depends(get_services),
):
    """Income and expense totals for ?month=YYYY-MM."""
    return services.dashboard.summary(user_id, _require_month(month)).to_dict()


@router.get("/categories")
def category_breakdown(
    month: Optional[str] = None,
    user_id: int = Depends(current_user_id),
    services: Services = Depends(get_services),
):
    breakdown = services.dashboard.category_breakdown(user_id, _require_month(month))
    return [row.to_dict() for row in breakdown]


@router.get("/budgets")
def budget_status(
    month: Optional[str] = None,
    user_id: int = Depends(current_user_id),
    services: Services = Depends(get_services),
):
    statuses = services.dashboard.budget_status(user_id, _require_month(month))
    return [status.to_dict() for status in statuses]
