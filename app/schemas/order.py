# app/schemas/order.py
from pydantic import BaseModel
from typing import Any, Optional


class OrderItemIn(BaseModel):
    # Any JSON value; pricing_service drops lines it cannot use
    vehicle_id: Optional[Any] = None
    quantity: Optional[Any] = None


class OrderCreate(BaseModel):
    customer_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    order_type: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    items: Optional[list[OrderItemIn]] = None


class OrderCreated(BaseModel):
    ok: bool = True
    orderId: int
    total: float
    days: int


class QuoteLineOut(BaseModel):
    vehicle_id: int
    quantity: int
    price_each: float
    amount: float


class QuoteOut(BaseModel):
    total: float
    days: int
    lines: list[QuoteLineOut]


class LastOrderOut(BaseModel):
    orderId: int
    total: float
    when: int     # epoch milliseconds


class LastOrderResponse(BaseModel):
    lastOrder: Optional[LastOrderOut] = None
