from decimal import Decimal

import pytest

from kopi_cafe.models import Address, User

from fakes import make_detail, make_order, make_product, make_table


@pytest.fixture
def board(stores):
    kopi = make_product(id=1, name="Kopi Susu")
    shipper = User(id=40, full_name="Eko")
    orders = [
        make_order(id=1, status="PENDING", table=make_table(number=3), details=[make_detail(kopi, quantity=1)]),
        make_order(id=2, status="PREPARING", address=Address(id=1, address_line="Jl. Asia Afrika 8"),
                   shipper=shipper, total_amount=Decimal("42000")),
        make_order(id=3, status="COMPLETED", table=make_table(number=5)),
        make_order(id=4, status="PAID", address=Address(id=2, address_line="Jl. Dago 1")),
        make_order(id=5, status="READY"),
        make_order(id=6, status="CANCELLED"),
    ]
    for order in orders:
        stores.orders.add(order)
    return orders


class TestListPending:

    async def test_table_orders_are_open_dine_in_orders(self, stores, service, board):
        page = await service.list_pending(None, "TABLE")

        assert [item.id for item in page.data] == [1, 5]
        name, statuses, _ = stores.orders.calls[0]
        assert name == "find_by_status_not_in_and_address_is_null"
        assert statuses == ["CANCELLED", "COMPLETED", "PAID"]

    async def test_shipping_orders_are_open_delivery_orders(self, stores, service, board):
        page = await service.list_pending("COMPLETED", "shipping")

        (item,) = page.data
        assert item.id == 2
        assert item.address == "Jl. Asia Afrika 8"
        assert item.shipper_id == 40
        assert item.total == Decimal("42000")
        assert item.table_number is None
        assert stores.orders.calls[0][0] == "find_by_status_not_in_and_address_is_not_null"

    @pytest.mark.parametrize("order_type", [None, "", "TAKEAWAY"])
    async def test_anything_else_filters_on_exact_status(self, stores, service, board, order_type):
        page = await service.list_pending("COMPLETED", order_type)

        (item,) = page.data
        assert item.id == 3
        assert item.table_number == 5
        assert stores.orders.calls[0][:2] == ("find_by_status", "COMPLETED")

    async def test_items_carry_their_lines(self, service, board):
        page = await service.list_pending(None, "TABLE", page=1, limit=1)

        (item,) = page.data
        assert item.status == "PENDING"
        assert item.table_number == 3
        assert item.products[0].product_name == "Kopi Susu"
        assert (page.meta.current_page, page.meta.total_page) == (1, 2)
        assert page.meta.next is True
