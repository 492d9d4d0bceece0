"""Category catalogue for the evaluation form."""

from fastapi import APIRouter

from app.domain.categories import all_categories, category_display_name
from app.domain.failure_modes import get_failure_mode_data
from app.schemas.evaluation import CamelModel

router = APIRouter()


class CategoryResponse(CamelModel):
    id: str
    name: str
    abandonment_rate: int
    sustainability_rate: int


@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories():
    """Every idea category with its display name and historical rates, ``other`` last."""
    categories = []
    for category in all_categories():
        data = get_failure_mode_data(category)
        categories.append(
            CategoryResponse(
                id=category.value,
                name=category_display_name(category),
                abandonment_rate=data.abandonment_rate,
                sustainability_rate=data.sustainability_rate,
            )
        )
    return categories
