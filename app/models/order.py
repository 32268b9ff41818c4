# app/models/order.py
"""
Orders and their line items.
An Order and its lines are written together by order_service.create_order
in a single transaction. Lines are never updated; deleting an order cascades.
"""

import enum
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Date, Numeric, Enum, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base


class OrderType(str, enum.Enum):
    RENT = "rent"
    BUY = "buy"


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_name = Column(String(100), nullable=False)
    email = Column(String(120), nullable=False)
    phone = Column(String(50))
    order_type = Column(Enum(OrderType, name="order_type",
                             values_callable=lambda e: [m.value for m in e]),
                        nullable=False)
    start_date = Column(Date)      # null for buy orders
    end_date = Column(Date)        # null for buy orders
    total = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    lines = relationship("OrderLine", back_populates="order",
                         cascade="all, delete-orphan", passive_deletes=True,
                         order_by="OrderLine.id")

    def __repr__(self):
        return f"<Order {self.id} type={self.order_type} total={self.total}>"


class OrderLine(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    price_each = Column(Numeric(10, 2), nullable=False)   # catalog price snapshot

    order = relationship("Order", back_populates="lines")

    def __repr__(self):
        return f"<OrderLine order={self.order_id} vehicle={self.vehicle_id} x{self.quantity} @ {self.price_each}>"
