import enum
from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey, Enum as SAEnum, func
from sqlalchemy.orm import relationship
from ..db.base import Base


class PaymentMethodEnum(str, enum.Enum):
    CASH = "CASH"
    BANKING = "BANKING"


class PaymentStatusEnum(str, enum.Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    method = Column(SAEnum(PaymentMethodEnum, name="payment_method"), nullable=True)
    amount = Column(Numeric(12, 2), nullable=True)
    status = Column(
        SAEnum(PaymentStatusEnum, name="payment_status"),
        nullable=False,
        default=PaymentStatusEnum.PENDING,
    )
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    order = relationship("Order", back_populates="payments")
