from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from kopi_cafe.db.deps import get_current_user, get_order_service
from kopi_cafe.exceptions import ForbiddenError, OrderServiceError
from kopi_cafe.models import User
from kopi_cafe.schemas.discount import DiscountValidateRequest, DiscountValidation
from kopi_cafe.schemas.order import ChangeStatusRequest, OrderStatusChanged
from kopi_cafe.schemas.transaction import PendingOrderPage, TransactionDetail, TransactionPage
from kopi_cafe.services.order_service import OrderService


router = APIRouter(prefix="/orders", tags=["orders"])


def _http_error(e: OrderServiceError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail={"message": e.message})


@router.patch("/{order_id}/status", response_model=OrderStatusChanged)
async def change_order_status(
    payload: ChangeStatusRequest,
    order_id: int = Path(..., description="Order id"),
    service: OrderService = Depends(get_order_service),
):
    """
    Move an order to a new status.
    Completing deducts stock, payment status and table availability follow the order.
    """
    try:
        order = await service.change_status(order_id, payload)
    except OrderServiceError as e:
        raise _http_error(e)
    return OrderStatusChanged.from_order(order)


@router.post("/discounts/validate", response_model=DiscountValidation)
async def validate_discount_code(
    payload: DiscountValidateRequest,
    service: OrderService = Depends(get_order_service),
    current_user: Optional[User] = Depends(get_current_user),
):
    try:
        return await service.validate_discount(payload, current_user)
    except OrderServiceError as e:
        raise _http_error(e)


@router.get("/transactions", response_model=TransactionPage)
async def list_my_transactions(
    page: Optional[int] = Query(1, description="Page number, starting at 1"),
    limit: Optional[int] = Query(None, description="Page size"),
    service: OrderService = Depends(get_order_service),
    current_user: Optional[User] = Depends(get_current_user),
):
    """Order history of the calling customer, newest first."""
    if current_user is None:
        raise _http_error(ForbiddenError())
    return await service.get_user_transactions(current_user.id, page, limit)


@router.get("/transactions/{order_id}", response_model=TransactionDetail)
async def get_transaction(
    order_id: int = Path(..., description="Order id"),
    service: OrderService = Depends(get_order_service),
    current_user: Optional[User] = Depends(get_current_user),
):
    """Visible to the order's customer and to staff."""
    try:
        return await service.get_transaction_detail(order_id, current_user)
    except OrderServiceError as e:
        raise _http_error(e)


@router.get("/pending", response_model=PendingOrderPage)
async def list_pending_orders(
    status: Optional[str] = Query(None, description="Exact status, used when type is neither TABLE nor SHIPPING"),
    order_type: Optional[str] = Query(None, alias="type", description="TABLE or SHIPPING"),
    page: Optional[int] = Query(1, description="Page number, starting at 1"),
    limit: Optional[int] = Query(None, description="Page size"),
    service: OrderService = Depends(get_order_service),
):
    return await service.list_pending(status, order_type, page, limit)
