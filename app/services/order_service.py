# app/services/order_service.py
"""
Order persistence.
Header and lines go to the database as one transaction: either the order and
every line exist afterwards, or nothing does.
"""

from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.exceptions import PersistenceError
from app.models.order import Order, OrderLine, OrderType
from app.services.pricing_service import OrderRequest, PricedOrder
from app.utils.logger import get_logger

logger = get_logger(__name__)


def build_order(request: OrderRequest, priced: PricedOrder) -> tuple[Order, list[OrderLine]]:
    """Map a validated request and its pricing onto unsaved ORM rows."""
    header = Order(
        customer_name=request.customer_name,
        email=request.email,
        phone=request.phone or "",
        order_type=OrderType(priced.order_type),
        start_date=priced.start_date,
        end_date=priced.end_date,
        total=priced.total,
    )
    lines = [
        OrderLine(vehicle_id=line.vehicle_id, quantity=line.quantity, price_each=line.price_each)
        for line in priced.lines
    ]
    return header, lines


def create_order(db: Session, header: Order, lines: list[OrderLine]) -> int:
    """
    Insert `header`, then each line under the generated order id, and commit once.
    Raises PersistenceError after rolling back if any statement fails.
    """
    try:
        db.add(header)
        db.flush()                       # assigns header.id
        order_id = header.id
        for line in lines:
            line.order_id = order_id
            db.add(line)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Order insert failed, rolled back: {e}")
        raise PersistenceError("Failed to create order.") from e

    logger.info(f"🧾 Order #{order_id} saved with {len(lines)} line(s)")
    return order_id


def get_order(db: Session, order_id: int) -> Optional[Order]:
    return db.get(Order, order_id)
