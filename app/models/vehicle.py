# app/models/vehicle.py
"""
Vehicle catalog table.
One record type for every vehicle; category and fuel are plain enumerated columns.
Read by catalog_service and by the pricing flow at order time.
"""

import enum
from sqlalchemy import Column, Integer, String, Numeric, Enum
from app.database import Base


class VehicleCategory(str, enum.Enum):
    CAR = "car"
    TRUCK = "truck"


class FuelType(str, enum.Enum):
    GASOLINE = "gasoline"
    DIESEL = "diesel"
    ELECTRIC = "electric"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False, index=True)
    category = Column(Enum(VehicleCategory, name="vehicle_category", values_callable=_enum_values),
                      nullable=False, default=VehicleCategory.CAR)
    fuel_type = Column(Enum(FuelType, name="fuel_type", values_callable=_enum_values),
                       nullable=False, default=FuelType.GASOLINE)
    price_per_day_rent = Column(Numeric(10, 2), nullable=False, default=0)
    price_buy = Column(Numeric(10, 2), nullable=False, default=0)
    image_url = Column(String(255))

    @property
    def kind(self) -> tuple:
        """(category, fuel_type) pair, e.g. ("car", "electric")."""
        return (VehicleCategory(self.category).value, FuelType(self.fuel_type).value)

    def __repr__(self):
        return f"<Vehicle {self.id} {self.name} kind={self.kind}>"
