from typing import List

from pydantic import BaseModel


class Product(BaseModel):
    id: int
    name: str
    category: str
    price: int
    original_price: int | None = None
    discount: int = 0
    rating: float | None = None
    reviews: int = 0
    description: str | None = None
    benefits: List[str] = []
    farmer_name: str | None = None
    location: str | None = None
    in_stock: bool = True

    model_config = {"frozen": True}


class CategoryResponse(BaseModel):
    id: str
    name: str
    count: int
