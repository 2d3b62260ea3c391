"""
Customer transaction history and the single transaction view.
"""
from datetime import datetime
from decimal import Decimal

import pytest

from kopi_cafe.config import settings
from kopi_cafe.exceptions import ForbiddenError, OrderNotFoundError
from kopi_cafe.models import Address, OrderDetailAddOn, PaymentMethodEnum, Role, User

from fakes import make_add_on, make_detail, make_order, make_payment, make_product, make_size, make_table


@pytest.fixture
def kopi():
    return make_product(id=1, name="Kopi Susu", img_url="https://cdn.kopi.test/kopi-susu.png")


def shipped_order(customer, kopi, **fields):
    fields.setdefault("address", Address(id=3, address_line="Jl. Braga 12, Bandung"))
    return make_order(
        id=fields.pop("id", 70),
        status="SHIPPING",
        customer=customer,
        total_amount=Decimal("27000"),
        subtotal_amount=Decimal("25000"),
        shipping_amount=Decimal("5000"),
        discount_amount=Decimal("3000"),
        note="less ice",
        created_at=datetime(2026, 10, 1, 9, 30),
        details=[make_detail(kopi, quantity=2, unit_price="12500", line_total="25000", id=700)],
        payments=[make_payment(method=PaymentMethodEnum.BANKING)],
        **fields,
    )


class TestUserTransactions:

    async def test_projects_orders_of_the_customer(self, stores, service, customer, other_customer, kopi):
        stores.orders.add(shipped_order(customer, kopi, id=70))
        stores.orders.add(shipped_order(other_customer, kopi, id=71))

        page = await service.get_user_transactions(customer.id, page=1, limit=10)

        (item,) = page.data
        assert item.id == 70
        assert item.receiver_name == "Ani Wijaya"
        assert item.payment_name == "BANKING"
        assert item.delivery_name == "Shipping"
        assert item.delivery_address == "Jl. Braga 12, Bandung"
        assert item.grand_total == Decimal("27000")
        assert item.subtotal == Decimal("25000")
        assert item.shipping_fee == Decimal("5000")
        assert item.discount == Decimal("3000")
        (line,) = item.products
        assert line.product_name == "Kopi Susu"
        assert line.product_img == "https://cdn.kopi.test/kopi-susu.png"
        assert line.qty == 2
        assert line.subtotal == Decimal("25000")

    async def test_page_meta(self, stores, service, customer, kopi):
        for order_id in range(1, 26):
            stores.orders.add(shipped_order(customer, kopi, id=order_id))

        page = await service.get_user_transactions(customer.id, page=2, limit=10)

        assert [item.id for item in page.data] == list(range(11, 21))
        assert page.meta.current_page == 2
        assert page.meta.total_page == 3
        assert page.meta.prev is True
        assert page.meta.next is True
        assert page.meta.model_dump(by_alias=True) == {
            "currentPage": 2, "totalPage": 3, "prev": True, "next": True,
        }

    async def test_last_page_has_no_next(self, stores, service, customer, kopi):
        for order_id in range(1, 12):
            stores.orders.add(shipped_order(customer, kopi, id=order_id))

        page = await service.get_user_transactions(customer.id, page=2, limit=10)

        assert len(page.data) == 1
        assert (page.meta.prev, page.meta.next) == (True, False)

    @pytest.mark.parametrize("page, limit", [(0, 10), (-3, 10), (1, -1), (None, None), (1, 0)])
    async def test_out_of_range_paging_is_clamped(self, stores, service, customer, page, limit):
        result = await service.get_user_transactions(customer.id, page=page, limit=limit)

        (_, _, page_request) = stores.orders.calls[0]
        assert page_request.page == 0
        assert page_request.size == 10
        assert result.meta.current_page == 1
        assert result.meta.total_page == 0
        assert (result.meta.prev, result.meta.next) == (False, False)

    async def test_default_page_size_comes_from_the_service(self, stores, customer):
        await stores.service(default_page_size=25).get_user_transactions(customer.id)

        assert stores.orders.calls[0][2].size == 25


class TestProjectionDefaults:

    async def test_dine_in_order(self, stores, service, customer, kopi):
        stores.orders.add(make_order(id=80, customer=customer, table=make_table(number=7)))

        (item,) = (await service.get_user_transactions(customer.id)).data

        assert item.delivery_name == "Table 7"
        assert item.delivery_address is None

    async def test_address_wins_over_table(self, stores, service, customer, kopi):
        stores.orders.add(shipped_order(customer, kopi, id=81, table=make_table(number=7)))

        (item,) = (await service.get_user_transactions(customer.id)).data

        assert item.delivery_name == "Shipping"

    async def test_empty_order(self, stores, service, customer):
        stores.orders.add(make_order(id=82, customer=customer))

        (item,) = (await service.get_user_transactions(customer.id)).data

        assert item.delivery_name == ""
        assert item.payment_name is None
        assert item.grand_total == Decimal("0")
        assert item.shipping_fee == Decimal("0")
        assert item.discount == Decimal("0")
        assert item.products == []

    async def test_payment_without_method(self, stores, service, customer):
        stores.orders.add(make_order(id=83, customer=customer, payments=[make_payment(method=None)]))

        (item,) = (await service.get_user_transactions(customer.id)).data

        assert item.payment_name is None

    async def test_line_details(self, stores, service, customer, kopi):
        large = make_size(id=2, name="L")
        detail = make_detail(kopi, quantity=1, unit_price="15000", size=large, name_snapshot="Kopi Susu Gula Aren",
                             id=900)
        stores.orders.add(make_order(id=84, customer=customer, details=[detail]))
        stores.order_detail_add_ons.rows.extend([
            OrderDetailAddOn(order_detail=detail, add_on=make_add_on(name="Extra shot"),
                             unit_price_snapshot=Decimal("3000")),
            OrderDetailAddOn(order_detail=detail, add_on=None, unit_price_snapshot=None),
        ])

        (item,) = (await service.get_user_transactions(customer.id)).data

        (line,) = item.products
        assert line.product_name == "Kopi Susu Gula Aren"
        assert line.size == "L"
        assert line.price == Decimal("15000")
        assert line.subtotal == Decimal("0")
        assert [(a.name, a.price) for a in line.add_ons] == [("Extra shot", Decimal("3000")), (None, Decimal("0"))]

    async def test_line_without_product(self, stores, service, customer):
        detail = make_detail(None, quantity=1, name_snapshot="Discontinued blend", size=make_size(name=None))
        stores.orders.add(make_order(id=85, customer=customer, details=[detail]))

        (item,) = (await service.get_user_transactions(customer.id)).data

        (line,) = item.products
        assert line.product_name == "Discontinued blend"
        assert line.product_img is None
        assert line.size is None


class TestTransactionDetail:

    async def test_no_user_is_forbidden(self, stores, service, customer, kopi):
        stores.orders.add(shipped_order(customer, kopi, id=90))

        with pytest.raises(ForbiddenError) as exc:
            await service.get_transaction_detail(90, None)

        assert exc.value.status_code == 403
        assert exc.value.message == "Forbidden"
        assert stores.orders.calls == []

    async def test_no_user_is_forbidden_even_for_missing_order(self, service):
        with pytest.raises(ForbiddenError):
            await service.get_transaction_detail(404, None)

    async def test_owner_sees_the_order(self, stores, service, customer, kopi):
        stores.orders.add(shipped_order(customer, kopi, id=91))

        result = await service.get_transaction_detail(91, customer)

        (item,) = result.data
        assert item.id == 91
        assert item.receiver_name == "Ani Wijaya"
        assert item.status_name == "SHIPPING"
        assert item.notes == "less ice"
        assert item.delivery_fee == Decimal("5000")
        assert item.payment_fee == Decimal("0")

    async def test_other_customer_is_forbidden(self, stores, service, customer, other_customer, kopi):
        stores.orders.add(shipped_order(customer, kopi, id=92))

        with pytest.raises(ForbiddenError):
            await service.get_transaction_detail(92, other_customer)

    @pytest.mark.parametrize("role_name", ["STAFF", "staff", "Admin", "employee"])
    async def test_staff_roles_see_any_order(self, stores, service, customer, kopi, role_name):
        stores.orders.add(shipped_order(customer, kopi, id=93))
        barista = User(id=50, full_name="Dewi", role=Role(name=role_name))

        result = await service.get_transaction_detail(93, barista)

        assert result.data[0].id == 93

    @pytest.mark.parametrize("role", [None, Role(name=None), Role(name="SHIPPER")])
    async def test_user_without_staff_role_is_forbidden(self, stores, service, customer, kopi, role):
        stores.orders.add(shipped_order(customer, kopi, id=94))

        with pytest.raises(ForbiddenError):
            await service.get_transaction_detail(94, User(id=51, role=role))

    async def test_order_without_customer(self, stores, service, staff_user):
        stores.orders.add(make_order(id=95, customer=None))

        result = await service.get_transaction_detail(95, staff_user)

        assert result.data[0].receiver_name == ""

    async def test_customer_without_name(self, stores, service):
        nameless = User(id=60, full_name=None)
        stores.orders.add(make_order(id=96, customer=nameless))

        result = await service.get_transaction_detail(96, nameless)

        assert result.data[0].receiver_name == ""

    async def test_missing_order_propagates(self, service, staff_user):
        with pytest.raises(OrderNotFoundError):
            await service.get_transaction_detail(404, staff_user)

    async def test_staff_roles_default_to_settings(self, stores, customer, kopi, monkeypatch):
        monkeypatch.setattr(settings, "STAFF_ROLES", ["BARISTA"])
        service = stores.service()
        stores.orders.add(shipped_order(customer, kopi, id=97))

        result = await service.get_transaction_detail(97, User(id=52, role=Role(name="barista")))

        assert result.data[0].id == 97
        with pytest.raises(ForbiddenError):
            await service.get_transaction_detail(97, User(id=53, role=Role(name="STAFF")))
