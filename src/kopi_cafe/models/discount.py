import enum
from sqlalchemy import Column, Integer, String, Boolean, Numeric, DateTime, Enum as SAEnum
from ..db.base import Base


class DiscountTypeEnum(str, enum.Enum):
    PERCENT = "PERCENT"
    AMOUNT = "AMOUNT"


class DiscountCode(Base):
    __tablename__ = "discount_codes"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(64), nullable=False, unique=True, index=True)  # looked up case-insensitively
    active = Column(Boolean, nullable=False, default=True)
    starts_at = Column(DateTime, nullable=True)
    ends_at = Column(DateTime, nullable=True)
    discount_type = Column(SAEnum(DiscountTypeEnum, name="discount_type"), nullable=False)
    discount_value = Column(Numeric(12, 2), nullable=False)
    min_order_amount = Column(Numeric(12, 2), nullable=True)
