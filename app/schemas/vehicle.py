# app/schemas/vehicle.py
from pydantic import BaseModel
from typing import Optional


class VehicleOut(BaseModel):
    """Catalog row as the storefront expects it (legacy column names)."""

    id: int
    name: str
    type: str
    fuel: str
    price_per_day_rent: float
    price_buy: float
    image_url: Optional[str] = None
