from fastapi import APIRouter, Depends, Response

from api.deps import current_user_id, get_services, require_bearer
from api.schemas import CategoryRequest, PathId
from errors import NotFound
from services.base import Services

router = APIRouter(prefix="/api/categories", dependencies=[Depends(require_bearer)])


@router.get("")
def list_categories(
    user_id: int = Depends(current_user_id),
    services: Services = Depends(get_services),
):
    return [c.to_dict() for c in services.categories.find_all(user_id)]


@router.post("", status_code=201)
def create_category(
    payload: CategoryRequest,
    user_id: int = Depends(current_user_id),
    services: Services = Depends(get_services),
):
    category = services.categories.create(user_id, payload.name, payload.type)
    return category.to_dict()


@router.put("/{category_id}")
def update_category(
    category_id: PathId,
    payload: CategoryRequest,
    user_id: int = Depends(current_user_id),
    services: Services = Depends(get_services),
):
    category = services.categories.update(
        user_id, category_id, payload.name, payload.type
    )
    if category is None:
        raise NotFound()
    return category.to_dict()


@router.delete("/{category_id}", status_code=204)
def delete_category(
    category_id: PathId,
    user_id: int = Depends(current_user_id),
    services: Services = Depends(get_services),
):
    """Delete a category; 409 while budgets or transactions still use it."""
    if not services.categories.delete(user_id, category_id):
        raise NotFound()
    return Response(status_code=204)
