from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from ..db.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(128), nullable=False)
    price = Column(Numeric(12, 2), nullable=True)  # base price, before size and add-ons
    img_url = Column(String(255), nullable=True)
    stock_qty = Column(Integer, nullable=False, default=0)


class Size(Base):
    __tablename__ = "sizes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(32), nullable=True)  # S, M, L...


class AddOn(Base):
    __tablename__ = "add_ons"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(64), nullable=True)


class ProductSize(Base):
    """Sizes offered for a product, with the price delta over the base price."""

    __tablename__ = "product_sizes"
    __table_args__ = (UniqueConstraint("product_id", "size_id"),)

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    size_id = Column(Integer, ForeignKey("sizes.id"), nullable=False)
    price = Column(Numeric(12, 2), nullable=True)

    product = relationship("Product")
    size = relationship("Size")


class ProductAddOn(Base):
    """Add-ons allowed for a product, priced per product."""

    __tablename__ = "product_add_ons"
    __table_args__ = (UniqueConstraint("product_id", "add_on_id"),)

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    add_on_id = Column(Integer, ForeignKey("add_ons.id"), nullable=False)
    price = Column(Numeric(12, 2), nullable=True)

    product = relationship("Product")
    add_on = relationship("AddOn")
