from .user import User, Role
from .location import DiningTable, Address, TableStatusEnum
from .catalog import Product, Size, AddOn, ProductSize, ProductAddOn
from .order import Order, OrderStatusEnum
from .order_detail import OrderDetail, OrderDetailAddOn
from .payment import Payment, PaymentMethodEnum, PaymentStatusEnum
from .discount import DiscountCode, DiscountTypeEnum

__all__ = [
    "User",
    "Role",
    "DiningTable",
    "Address",
    "TableStatusEnum",
    "Product",
    "Size",
    "AddOn",
    "ProductSize",
    "ProductAddOn",
    "Order",
    "OrderStatusEnum",
    "OrderDetail",
    "OrderDetailAddOn",
    "Payment",
    "PaymentMethodEnum",
    "PaymentStatusEnum",
    "DiscountCode",
    "DiscountTypeEnum",
]
