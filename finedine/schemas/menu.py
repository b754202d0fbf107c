from pydantic import BaseModel
from uuid import UUID
from typing import Optional


class MenuItemResponse(BaseModel):
    id: UUID
    name: str
    description: Optional[str]
    price: float
    image_url: Optional[str]

    model_config = {"from_attributes": True}


class MenuCategoryResponse(BaseModel):
    id: UUID
    name: str
    display_order: int
    items: list[MenuItemResponse]
