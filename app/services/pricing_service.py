# app/services/pricing_service.py
"""
Order pricing: validates an incoming order and computes its authoritative total.

Rules:
  - order_type is "rent" or "buy"; anything else is a ValidationError
  - lines with a non-positive, non-integer or oversized quantity are dropped
  - vehicle ids that are not integers in the key range never resolve
  - rent: days = ceil(end - start) in whole days, minimum 1; missing, unparsable
    or non-increasing dates fall back to a single day
  - buy: days = 1, dates ignored
  - price_each always comes from the catalog, never from the client
  - total = Σ price_each × quantity × days, rounded half-up to cents once, on the sum
  - unknown vehicle ids are skipped

Pure computation: no DB access, the caller passes in the catalog rows it loaded.
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Mapping, Optional
from app.config import settings
from app.exceptions import ValidationError
from app.models.order import OrderType
from app.utils.logger import get_logger

logger = get_logger(__name__)

CENTS = Decimal("0.01")
SECONDS_PER_DAY = 24 * 60 * 60
ORDER_TYPES = {t.value for t in OrderType}
MAX_VEHICLE_ID = 2**31 - 1       # INTEGER primary key range
MAX_QUANTITY = 1000


@dataclass(frozen=True)
class LineRequest:
    vehicle_id: Optional[int]     # None when the client id can never match a catalog row
    quantity: int


@dataclass
class OrderRequest:
    customer_name: str
    email: str
    order_type: str               # rent | buy
    lines: list[LineRequest]
    phone: str = ""
    start_date: Optional[str] = None
    end_date: Optional[str] = None


@dataclass(frozen=True)
class PricedLine:
    vehicle_id: int
    quantity: int
    price_each: Decimal           # catalog snapshot
    amount: Decimal               # price_each × quantity × days, unrounded


@dataclass
class PricedOrder:
    order_type: str
    rental_days: int
    total: Decimal
    lines: list[PricedLine] = field(default_factory=list)
    start_date: Optional[date] = None     # only set for rent orders
    end_date: Optional[date] = None
    unresolved_ids: list[Optional[int]] = field(default_factory=list)


def _coerce_int(value) -> Optional[int]:
    """Integer value of `value`, or None when it isn't a whole number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        try:
            return int(value) if value == int(value) else None
        except (OverflowError, ValueError):
            return None   # inf / nan
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _clean(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def normalize_order(payload) -> OrderRequest:
    """
    Turn a raw OrderCreate payload into an OrderRequest.
    Raises ValidationError for missing identity, bad order type or no usable lines.
    Lines keep a None vehicle id when the id is not an integer in the key range;
    price_order treats those like any other unknown vehicle.
    """
    customer_name = _clean(payload.customer_name)
    email = _clean(payload.email)
    order_type = _clean(payload.order_type)

    if not customer_name or not email or not order_type or not payload.items:
        raise ValidationError("Missing required fields")
    if order_type not in ORDER_TYPES:
        raise ValidationError("order_type must be 'rent' or 'buy'")

    lines = []
    for item in payload.items:
        vehicle_id = _coerce_int(item.vehicle_id)
        quantity = _coerce_int(item.quantity)
        if quantity is None or not 0 < quantity <= MAX_QUANTITY:
            logger.debug(f"Dropping order line vehicle_id={item.vehicle_id!r} quantity={item.quantity!r}")
            continue
        if vehicle_id is not None and not 0 < vehicle_id <= MAX_VEHICLE_ID:
            vehicle_id = None
        lines.append(LineRequest(vehicle_id=vehicle_id, quantity=quantity))

    if not lines:
        raise ValidationError("No valid items in order")

    return OrderRequest(
        customer_name=customer_name,
        email=email,
        phone=_clean(payload.phone),
        order_type=order_type,
        start_date=payload.start_date,
        end_date=payload.end_date,
        lines=lines,
    )


def parse_order_date(value) -> Optional[datetime]:
    """Parse "YYYY-MM-DD" or an ISO-8601 datetime. Returns naive UTC, or None."""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def rental_days(order_type: str, start_date=None, end_date=None) -> int:
    """Number of billable days. Always ≥ 1; always 1 for purchases."""
    if order_type != OrderType.RENT.value:
        return 1
    start, end = parse_order_date(start_date), parse_order_date(end_date)
    if start is None or end is None:
        return 1
    delta = end - start
    if delta <= timedelta(0):
        return 1
    return max(1, math.ceil(delta.total_seconds() / SECONDS_PER_DAY))


def _catalog_price(vehicle, order_type: str) -> Decimal:
    price = vehicle.price_buy if order_type == OrderType.BUY.value else vehicle.price_per_day_rent
    if price is None:
        return Decimal("0")
    return price if isinstance(price, Decimal) else Decimal(str(price))


def round_total(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def price_order(request: OrderRequest, catalog: Mapping[int, object],
                reject_unresolved: Optional[bool] = None) -> PricedOrder:
    """
    Price `request` against `catalog` (vehicle id → row with price_per_day_rent / price_buy).
    Lines whose vehicle id is not in the catalog are skipped.
    """
    if reject_unresolved is None:
        reject_unresolved = settings.REJECT_UNRESOLVED_ORDERS

    is_rent = request.order_type == OrderType.RENT.value
    days = rental_days(request.order_type, request.start_date, request.end_date)
    multiplier = days if is_rent else 1

    lines, unresolved = [], []
    running = Decimal("0")
    for line in request.lines:
        vehicle = catalog.get(line.vehicle_id)
        if vehicle is None:
            unresolved.append(line.vehicle_id)
            continue
        price_each = _catalog_price(vehicle, request.order_type)
        amount = price_each * line.quantity * multiplier
        running += amount
        lines.append(PricedLine(line.vehicle_id, line.quantity, price_each, amount))

    if unresolved:
        logger.debug(f"Skipping unknown vehicle ids {unresolved}")
    if not lines and reject_unresolved:
        raise ValidationError("None of the selected vehicles exist")

    start = parse_order_date(request.start_date) if is_rent else None
    end = parse_order_date(request.end_date) if is_rent else None
    return PricedOrder(
        order_type=request.order_type,
        rental_days=days,
        total=round_total(running),
        lines=lines,
        start_date=start.date() if start else None,
        end_date=end.date() if end else None,
        unresolved_ids=unresolved,
    )
