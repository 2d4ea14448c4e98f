"""
SQLAlchemy ORM Models for the Storefront ledgers

Defines database models matching the schema in init_db.py.
Payments (with refunds) and orders are the only mutable stores; products
and users are served from seeded read models.
"""
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, CheckConstraint
from sqlalchemy.orm import declarative_base, relationship

from ..models.common import utcnow

Base = declarative_base()


class PaymentModel(Base):
    """
    ORM model for payments table.

    Card details are the vault's display-safe projection, stored as a JSON blob.
    """
    __tablename__ = "payments"

    id = Column(String, primary_key=True)
    order_id = Column(String, nullable=False, index=True)
    amount = Column(Integer, nullable=False)
    currency = Column(String, nullable=False)
    status = Column(String, nullable=False, index=True)
    description = Column(Text)
    customer_email = Column(String, nullable=False)
    customer_name = Column(String)
    billing_address = Column(Text, nullable=False)  # JSON blob
    payment_method_type = Column(String, nullable=False, default="card")
    card_id = Column(String, nullable=False)
    card_details = Column(Text, nullable=False)  # JSON blob
    authorization_code = Column(String)
    failure_reason = Column(String)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow)
    succeeded_at = Column(DateTime)

    refunds = relationship(
        "RefundModel",
        back_populates="payment",
        order_by="RefundModel.created_at",
        lazy="selectin",
    )

    __table_args__ = (
        CheckConstraint("status IN ('pending', 'succeeded', 'failed', 'refunded')", name="payment_status_check"),
        CheckConstraint("amount > 0", name="payment_amount_check"),
    )


class RefundModel(Base):
    """
    ORM model for refunds table.

    Rows are only ever appended.
    """
    __tablename__ = "refunds"

    id = Column(String, primary_key=True)
    payment_id = Column(String, ForeignKey("payments.id"), nullable=False, index=True)
    amount = Column(Integer, nullable=False)
    status = Column(String, nullable=False, default="succeeded")
    reason = Column(String)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    payment = relationship("PaymentModel", back_populates="refunds")

    __table_args__ = (
        CheckConstraint("amount > 0", name="refund_amount_check"),
    )


class OrderModel(Base):
    """
    ORM model for orders table.

    Line items are frozen at creation (JSON blob with unit amounts).
    """
    __tablename__ = "orders"

    id = Column(String, primary_key=True)
    customer_id = Column(String, nullable=False, index=True)
    customer_email = Column(String, nullable=False)
    customer_name = Column(String)
    status = Column(String, nullable=False, index=True)
    items = Column(Text, nullable=False)  # JSON blob
    subtotal = Column(Integer, nullable=False)
    total = Column(Integer, nullable=False)
    currency = Column(String, nullable=False)
    shipping_address = Column(Text, nullable=False)  # JSON blob
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'paid', 'shipped', 'delivered', 'cancelled')",
            name="order_status_check"
        ),
    )
