# app/routers/orders.py
"""
Order submission, price quote and the session's last order.
POST /order       validate, price against current catalog, persist atomically
POST /quote       same pricing, nothing stored
GET  /last-order  most recent order placed from this browser session
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.order import OrderCreate, OrderCreated, QuoteOut, QuoteLineOut, LastOrderResponse
from app.services.catalog_service import get_vehicles_by_ids
from app.services.last_order_cache import LastOrderCache, get_last_order_cache, get_session_id
from app.services.order_service import build_order, create_order
from app.services.pricing_service import normalize_order, price_order
from app.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


def _price(payload: OrderCreate, db: Session):
    request = normalize_order(payload)
    catalog = get_vehicles_by_ids(db, [line.vehicle_id for line in request.lines])
    return request, price_order(request, catalog)


@router.post("/order", response_model=OrderCreated, summary="Place a rent or buy order")
def place_order(
    payload: OrderCreate,
    db: Session = Depends(get_db),
    cache: LastOrderCache = Depends(get_last_order_cache),
    session_id: str = Depends(get_session_id),
):
    """
    Prices every line from the catalog (client prices are ignored) and stores
    the order with its lines in one transaction.
    Returns 400 on missing fields, 500 if the database write fails.
    """
    request, priced = _price(payload, db)
    header, lines = build_order(request, priced)
    order_id = create_order(db, header, lines)

    if session_id:
        cache.remember(session_id, order_id, priced.total)
    logger.info(f"[ORDER] #{order_id} {priced.order_type} days={priced.rental_days} total={priced.total}")
    return OrderCreated(orderId=order_id, total=float(priced.total), days=priced.rental_days)


@router.post("/quote", response_model=QuoteOut, summary="Price an order without placing it")
def quote_order(payload: OrderCreate, db: Session = Depends(get_db)):
    _, priced = _price(payload, db)
    return QuoteOut(
        total=float(priced.total),
        days=priced.rental_days,
        lines=[
            QuoteLineOut(vehicle_id=line.vehicle_id, quantity=line.quantity,
                         price_each=float(line.price_each), amount=float(line.amount))
            for line in priced.lines
        ],
    )


@router.get("/last-order", response_model=LastOrderResponse, summary="Last order of this session")
def last_order(
    cache: LastOrderCache = Depends(get_last_order_cache),
    session_id: str = Depends(get_session_id),
):
    snapshot = cache.get(session_id) if session_id else None
    return {"lastOrder": snapshot.as_dict() if snapshot else None}
