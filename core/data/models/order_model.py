"""SQLAlchemy ORM models for Order aggregate."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class OrderModel(Base):
    """SQLAlchemy ORM model for orders table."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False, index=True)
    order_number = Column(String(50), nullable=False, unique=True)
    status = Column(String(20), nullable=False, default="pending", index=True)

    shipping_address = Column(Text, nullable=True)
    shipping_phone = Column(String(20), nullable=True)
    shipping_notes = Column(Text, nullable=True)

    subtotal = Column(Numeric(10, 2), nullable=False)
    shipping_cost = Column(Numeric(10, 2), nullable=False, default=0)
    discount = Column(Numeric(10, 2), nullable=False, default=0)
    total = Column(Numeric(10, 2), nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Order owns its line items
    details = relationship(
        "OrderDetailModel", back_populates="order", cascade="all, delete-orphan",
        order_by="OrderDetailModel.id",
    )
    payment = relationship(
        "PaymentModel", back_populates="order", uselist=False, cascade="all, delete-orphan"
    )


class OrderDetailModel(Base):
    """SQLAlchemy ORM model for order_details table."""

    __tablename__ = "order_details"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    spare_part_id = Column(Integer, ForeignKey("spare_parts.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    discount = Column(Numeric(10, 2), nullable=False, default=0)
    total = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    order = relationship("OrderModel", back_populates="details")
    # Referenced, never owned: no cascade towards the catalog
    spare_part = relationship("SparePartModel")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_order_details_quantity_positive"),
    )


class PaymentModel(Base):
    """SQLAlchemy ORM model for payments table."""

    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, unique=True)
    user_id = Column(Integer, nullable=False, index=True)
    payment_method_id = Column(
        Integer, ForeignKey("business_payment_methods.id"), nullable=False
    )
    amount = Column(Numeric(12, 2), nullable=False)
    reference_number = Column(String(100), nullable=True)
    payment_status = Column(String(20), nullable=False, default="pending", index=True)
    payment_date = Column(DateTime(timezone=True), nullable=True)
    proof_image = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    order = relationship("OrderModel", back_populates="payment")
