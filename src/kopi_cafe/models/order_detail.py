from sqlalchemy import Column, Integer, String, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from ..db.base import Base


class OrderDetail(Base):
    __tablename__ = "order_details"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"), nullable=True)
    size_id = Column(Integer, ForeignKey("sizes.id"), nullable=True)
    product_name_snapshot = Column(String(128), nullable=True)  # name at order time
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(12, 2), nullable=True)  # base + size delta + add-ons
    line_total = Column(Numeric(12, 2), nullable=True)

    # relations
    order = relationship("Order", back_populates="details")
    product = relationship("Product")
    size = relationship("Size")


class OrderDetailAddOn(Base):
    __tablename__ = "order_detail_add_ons"

    id = Column(Integer, primary_key=True, index=True)
    order_detail_id = Column(Integer, ForeignKey("order_details.id", ondelete="CASCADE"), nullable=False)
    add_on_id = Column(Integer, ForeignKey("add_ons.id", ondelete="SET NULL"), nullable=True)
    unit_price_snapshot = Column(Numeric(12, 2), nullable=True)

    order_detail = relationship("OrderDetail")
    add_on = relationship("AddOn")
