import enum
from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from ..db.base import Base


class OrderStatusEnum(str, enum.Enum):
    PENDING = "PENDING"
    PREPARING = "PREPARING"
    READY = "READY"
    SHIPPING = "SHIPPING"
    COMPLETED = "COMPLETED"
    PAID = "PAID"
    CANCELLED = "CANCELLED"

    @classmethod
    def parse(cls, raw) -> "OrderStatusEnum":
        """Case-insensitive lookup, raises ValueError for anything unknown."""
        if not isinstance(raw, str) or not raw.strip():
            raise ValueError(f"Invalid status: {raw!r}")
        return cls(raw.strip().upper())


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    # plain string column: rows written by older clients may hold statuses outside the enum
    status = Column(String(20), nullable=False, default=OrderStatusEnum.PENDING.value)
    customer_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    shipper_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    table_id = Column(Integer, ForeignKey("dining_tables.id"), nullable=True)
    address_id = Column(Integer, ForeignKey("addresses.id"), nullable=True)

    total_amount = Column(Numeric(12, 2), nullable=True)
    subtotal_amount = Column(Numeric(12, 2), nullable=True)
    shipping_amount = Column(Numeric(12, 2), nullable=True)
    discount_amount = Column(Numeric(12, 2), nullable=True)
    note = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=True)

    # relations
    customer = relationship("User", foreign_keys=[customer_id])
    shipper = relationship("User", foreign_keys=[shipper_id])
    table = relationship("DiningTable")
    address = relationship("Address")
    details = relationship(
        "OrderDetail",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderDetail.id",
    )
    payments = relationship(
        "Payment",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="Payment.id",
    )
