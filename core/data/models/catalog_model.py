"""SQLAlchemy ORM models for catalog records the order workflow reads.

These tables belong to the catalog collaborator; only `spare_parts.stock`
is written from here (by the stock ledger).
"""

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
)
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class BusinessModel(Base):
    """SQLAlchemy ORM model for businesses table."""

    __tablename__ = "businesses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False, unique=True, index=True)
    business_name = Column(String(150), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    spare_parts = relationship("SparePartModel", back_populates="business")
    payment_methods = relationship("BusinessPaymentMethodModel", back_populates="business")


class BusinessPaymentMethodModel(Base):
    """SQLAlchemy ORM model for business_payment_methods table."""

    __tablename__ = "business_payment_methods"

    id = Column(Integer, primary_key=True, autoincrement=True)
    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False, index=True)
    payment_type = Column(String(20), nullable=False)
    account_details = Column(JSON, nullable=False, default=dict)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    business = relationship("BusinessModel", back_populates="payment_methods")


class SparePartModel(Base):
    """SQLAlchemy ORM model for spare_parts table."""

    __tablename__ = "spare_parts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    discount_percentage = Column(Numeric(5, 2), nullable=False, default=0)
    status = Column(String(20), nullable=False, default="active", index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    business = relationship("BusinessModel", back_populates="spare_parts")

    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_spare_parts_stock_non_negative"),
        CheckConstraint("price >= 0", name="ck_spare_parts_price_non_negative"),
    )
