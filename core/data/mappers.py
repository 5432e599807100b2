"""Static mappers for domain entities ↔ database models."""

from decimal import Decimal

from core.domain.entities import (
    Business,
    BusinessPaymentMethod,
    Order,
    OrderDetail,
    Payment,
    SparePart,
)
from core.domain.enums import OrderStatus, PaymentStatus, PaymentType, SparePartStatus
from core.domain.value_objects import Money, OrderNumber

from .models.catalog_model import BusinessModel, BusinessPaymentMethodModel, SparePartModel
from .models.order_model import OrderDetailModel, OrderModel, PaymentModel


def _money(value) -> Money:
    return Money(amount=Decimal(str(value if value is not None else 0)))


class OrderDetailMapper:
    """Static mapper for OrderDetail ↔ OrderDetailModel transformation."""

    @staticmethod
    def to_domain(model: OrderDetailModel) -> OrderDetail:
        """Convert ORM model to domain entity.

        The owning business is read from the currently referenced spare
        part, so the derived authorization set follows ownership changes.

        Args:
            model: OrderDetailModel instance (spare_part relationship loaded)

        Returns:
            OrderDetail domain entity
        """
        spare_part = model.spare_part
        return OrderDetail(
            id=model.id,
            spare_part_id=model.spare_part_id,
            quantity=model.quantity,
            unit_price=_money(model.unit_price),
            discount=_money(model.discount),
            total=_money(model.total),
            business_id=spare_part.business_id if spare_part is not None else None,
            spare_part_name=spare_part.name if spare_part is not None else None,
        )

    @staticmethod
    def to_persistence(entity: OrderDetail) -> OrderDetailModel:
        """Convert domain entity to ORM model.

        Args:
            entity: OrderDetail domain entity

        Returns:
            OrderDetailModel instance
        """
        return OrderDetailModel(
            spare_part_id=entity.spare_part_id,
            quantity=entity.quantity,
            unit_price=entity.unit_price.amount,
            discount=entity.discount.amount,
            total=entity.total.amount,
        )


class PaymentMapper:
    """Static mapper for Payment ↔ PaymentModel transformation."""

    @staticmethod
    def to_domain(model: PaymentModel) -> Payment:
        return Payment(
            id=model.id,
            payment_method_id=model.payment_method_id,
            amount=_money(model.amount),
            status=PaymentStatus(model.payment_status),
            user_id=model.user_id,
            payment_date=model.payment_date,
            proof_image=model.proof_image,
            reference_number=model.reference_number,
            notes=model.notes,
        )

    @staticmethod
    def to_persistence(entity: Payment, user_id: int) -> PaymentModel:
        return PaymentModel(
            user_id=entity.user_id if entity.user_id is not None else user_id,
            payment_method_id=entity.payment_method_id,
            amount=entity.amount.amount,
            payment_status=entity.status.value,
            payment_date=entity.payment_date,
            proof_image=entity.proof_image,
            reference_number=entity.reference_number,
            notes=entity.notes,
        )


class OrderMapper:
    """Static mapper for Order ↔ OrderModel transformation with nested details and payment."""

    @staticmethod
    def to_domain(model: OrderModel) -> Order:
        """Convert ORM model to domain aggregate (with nested details and payment).

        Args:
            model: OrderModel instance

        Returns:
            Order domain aggregate
        """
        return Order(
            id=model.id,
            user_id=model.user_id,
            order_number=OrderNumber(value=model.order_number),
            details=[OrderDetailMapper.to_domain(d) for d in model.details],
            payment=PaymentMapper.to_domain(model.payment) if model.payment else None,
            status=OrderStatus(model.status),
            shipping_address=model.shipping_address,
            shipping_phone=model.shipping_phone,
            shipping_notes=model.shipping_notes,
            subtotal=_money(model.subtotal),
            shipping_cost=_money(model.shipping_cost),
            discount=_money(model.discount),
            total=_money(model.total),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def to_persistence(entity: Order) -> OrderModel:
        """Convert domain aggregate to ORM model (with nested details and payment).

        Args:
            entity: Order domain aggregate

        Returns:
            OrderModel instance
        """
        order_model = OrderModel(
            user_id=entity.user_id,
            order_number=entity.order_number.value,
            status=entity.status.value,
            shipping_address=entity.shipping_address,
            shipping_phone=entity.shipping_phone,
            shipping_notes=entity.shipping_notes,
            subtotal=entity.subtotal.amount,
            shipping_cost=entity.shipping_cost.amount,
            discount=entity.discount.amount,
            total=entity.total.amount,
        )

        order_model.details = [OrderDetailMapper.to_persistence(d) for d in entity.details]
        if entity.payment is not None:
            order_model.payment = PaymentMapper.to_persistence(entity.payment, entity.user_id)

        return order_model


class CatalogMapper:
    """Static mappers for the read-only catalog records."""

    @staticmethod
    def spare_part_to_domain(model: SparePartModel) -> SparePart:
        return SparePart(
            id=model.id,
            business_id=model.business_id,
            name=model.name,
            price=_money(model.price),
            stock=model.stock,
            status=SparePartStatus(model.status),
            discount_percentage=Decimal(str(model.discount_percentage or 0)),
        )

    @staticmethod
    def business_to_domain(model: BusinessModel) -> Business:
        return Business(id=model.id, user_id=model.user_id, business_name=model.business_name)

    @staticmethod
    def payment_method_to_domain(model: BusinessPaymentMethodModel) -> BusinessPaymentMethod:
        return BusinessPaymentMethod(
            id=model.id,
            business_id=model.business_id,
            payment_type=PaymentType(model.payment_type),
            is_active=bool(model.is_active),
            account_details=model.account_details,
        )
