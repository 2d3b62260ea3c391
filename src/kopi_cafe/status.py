"""
Order status graph and the payment status each order status implies.
"""
from kopi_cafe.models import OrderStatusEnum, PaymentStatusEnum

S = OrderStatusEnum

TRANSITIONS: dict[OrderStatusEnum, frozenset] = {
    S.PENDING: frozenset({S.PREPARING, S.READY, S.SHIPPING, S.PAID, S.COMPLETED, S.CANCELLED}),
    S.PREPARING: frozenset({S.READY, S.SHIPPING, S.PAID, S.COMPLETED, S.CANCELLED}),
    S.READY: frozenset({S.SHIPPING, S.PAID, S.COMPLETED, S.CANCELLED}),
    S.SHIPPING: frozenset({S.PAID, S.COMPLETED, S.CANCELLED}),
    S.PAID: frozenset({S.PREPARING, S.READY, S.SHIPPING, S.COMPLETED}),
    S.COMPLETED: frozenset(),
    S.CANCELLED: frozenset(),
}

# Orders in these statuses no longer hold a table and are not "pending"
CLOSED_STATUSES = frozenset({S.COMPLETED, S.PAID, S.CANCELLED})

PAYMENT_STATUS_FOR = {
    S.CANCELLED: PaymentStatusEnum.CANCELLED,
    S.PENDING: PaymentStatusEnum.PENDING,
    S.PAID: PaymentStatusEnum.PAID,
    S.COMPLETED: PaymentStatusEnum.PAID,
}


def is_transition_allowed(current, target: OrderStatusEnum) -> bool:
    """
    Unknown current statuses (legacy free-form strings) are never blocked,
    neither is re-applying the same status.
    """
    try:
        current = OrderStatusEnum.parse(current)
    except ValueError:
        return True
    if current == target:
        return True
    return target in TRANSITIONS[current]
