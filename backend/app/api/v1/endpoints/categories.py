"""
app/api/v1/endpoints/categories.py
───────────────────────────────────
Category metadata for client-side pickers and badges.

Routes
------
GET /api/v1/categories   Every closed enumeration with labels and colours.

Static data: no gateway access, so this works while the gateway is not
ready.
"""

from fastapi import APIRouter

from schemas.categories import (
    category_color,
    category_label,
    gender_label,
    resource_category_label,
    resource_type_color,
    resource_type_label,
)
from schemas.entities import BusinessCategory, Gender, ResourceCategory, ResourceType
from schemas.views import CategoriesView, CategoryOption

router = APIRouter()


@router.get("/", response_model=CategoriesView, summary="Category labels and colours")
def list_categories() -> CategoriesView:
    """
    Return the display metadata for every category-like enum.

    Members are listed in declaration order, which is the order the pickers
    show them in.
    """
    return CategoriesView(
        business_categories=[
            CategoryOption(value=c.value, label=category_label(c), color=category_color(c))
            for c in BusinessCategory
        ],
        resource_categories=[
            CategoryOption(value=c.value, label=resource_category_label(c))
            for c in ResourceCategory
        ],
        resource_types=[
            CategoryOption(value=t.value, label=resource_type_label(t), color=resource_type_color(t))
            for t in ResourceType
        ],
        genders=[CategoryOption(value=g.value, label=gender_label(g)) for g in Gender],
    )
