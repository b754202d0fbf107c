from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from finedine.database import get_db
from finedine.models.menu import MenuCategory, MenuItem
from finedine.schemas.menu import MenuCategoryResponse, MenuItemResponse

router = APIRouter(prefix="/menu", tags=["menu"])


@router.get("/", response_model=list[MenuCategoryResponse])
def get_menu(db: Session = Depends(get_db)):
    """
    Speisekarte: Kategorien nach display_order, je Kategorie nur
    verfügbare Gerichte.
    """
    categories = db.query(MenuCategory).order_by(MenuCategory.display_order).all()
    items = db.query(MenuItem).filter(MenuItem.is_available == True).order_by(MenuItem.name).all()

    by_category = {}
    for item in items:
        by_category.setdefault(item.category_id, []).append(MenuItemResponse.model_validate(item))

    return [
        MenuCategoryResponse(
            id=category.id,
            name=category.name,
            display_order=category.display_order,
            items=by_category.get(category.id, [])
        )
        for category in categories
    ]
