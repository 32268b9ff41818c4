# app/services/catalog_service.py
"""
Vehicle catalog reads and seeding.
Used by the vehicles router, the order flow (current prices), startup and init_db.py.
"""

from decimal import Decimal
from sqlalchemy.orm import Session
from app.models.vehicle import Vehicle, VehicleCategory, FuelType
from app.models.order import Order, OrderLine
from app.schemas.vehicle import VehicleOut
from app.services.pricing_service import MAX_VEHICLE_ID
from app.utils.logger import get_logger

logger = get_logger(__name__)

# name, category, fuel, rent/day, buy, image
DEFAULT_CATALOG = [
    ("BMW",         "car", "gasoline", "39.99", "16999.00", "/photos/bmw.jpg"),
    ("Bugatti",     "car", "electric", "59.99", "28999.00", "/photos/bugatti.jpg"),
    ("Lamborghini", "car", "diesel",   "79.99", "35999.00", "/photos/lamborghini.jpg"),
    ("Luxury Car",  "car", "electric", "89.99", "39999.00", "/photos/luxurycar.jpg"),
]


def list_vehicles(db: Session) -> list[Vehicle]:
    """All vehicles, ascending id."""
    return db.query(Vehicle).order_by(Vehicle.id.asc()).all()


def get_vehicles_by_ids(db: Session, ids) -> dict[int, Vehicle]:
    """Resolve a set of vehicle ids in one query. Unknown ids are simply absent."""
    ids = {i for i in ids if isinstance(i, int) and 0 < i <= MAX_VEHICLE_ID}
    if not ids:
        return {}
    rows = db.query(Vehicle).filter(Vehicle.id.in_(ids)).all()
    return {v.id: v for v in rows}


def to_vehicle_out(vehicle: Vehicle) -> VehicleOut:
    category, fuel = vehicle.kind
    return VehicleOut(
        id=vehicle.id,
        name=vehicle.name,
        type=category,
        fuel=fuel,
        price_per_day_rent=float(vehicle.price_per_day_rent or 0),
        price_buy=float(vehicle.price_buy or 0),
        image_url=vehicle.image_url,
    )


def _apply_row(vehicle: Vehicle, row):
    _, category, fuel, rent, buy, image = row
    vehicle.category = VehicleCategory(category)
    vehicle.fuel_type = FuelType(fuel)
    vehicle.price_per_day_rent = Decimal(rent)
    vehicle.price_buy = Decimal(buy)
    vehicle.image_url = image


def seed_catalog(db: Session, rows=DEFAULT_CATALOG) -> int:
    """
    Upsert catalog rows keyed by vehicle name. Safe to run on every boot.
    Returns the number of rows inserted or updated.
    """
    existing = {v.name: v for v in db.query(Vehicle).all()}
    for row in rows:
        vehicle = existing.get(row[0])
        if vehicle is None:
            vehicle = Vehicle(name=row[0])
            db.add(vehicle)
        _apply_row(vehicle, row)
    db.commit()
    logger.info(f"🌱 Catalog seed applied ({len(rows)} vehicles, upsert)")
    return len(rows)


def replace_catalog(db: Session, rows=DEFAULT_CATALOG) -> int:
    """
    DEV ONLY: wipe orders and vehicles, then insert `rows` fresh.
    Order history referencing the old vehicles is deleted with them.
    """
    logger.warning("⚠️ Replacing vehicles with seed (clearing related orders)...")
    db.query(OrderLine).delete(synchronize_session=False)
    db.query(Order).delete(synchronize_session=False)
    db.query(Vehicle).delete(synchronize_session=False)
    for row in rows:
        vehicle = Vehicle(name=row[0])
        _apply_row(vehicle, row)
        db.add(vehicle)
    db.commit()
    logger.info(f"✅ Inventory replaced with seed ({len(rows)} vehicles)")
    return len(rows)
