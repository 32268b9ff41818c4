# Car Leasing — Database Models
# Import all models here for SQLAlchemy discovery

from app.models.vehicle import Vehicle, VehicleCategory, FuelType   # noqa
from app.models.order import Order, OrderLine, OrderType            # noqa
from app.models.contact import Contact                              # noqa
