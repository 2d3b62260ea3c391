from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from kopi_cafe.pricing import parse_int


def _add_on_id(entry) -> Optional[int]:
    # ids come as 7, "7", {"id": "7"} or {"add_on_id": 7}
    if isinstance(entry, dict):
        entry = entry.get("id") if entry.get("id") is not None else entry.get("add_on_id")
    return parse_int(entry)


def _add_on_ids(raw) -> List[int]:
    """
    A list of add-on references, or a single one.
    Any other shape makes the whole line unreadable.
    """
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return [add_on_id for add_on_id in map(_add_on_id, raw) if add_on_id is not None]
    if isinstance(raw, (int, str, dict)) and not isinstance(raw, bool):
        add_on_id = _add_on_id(raw)
        if add_on_id is None:
            raise ValueError(f"Unreadable add-on reference: {raw!r}")
        return [add_on_id]
    raise ValueError(f"Unreadable add-on list: {raw!r}")


class LineDescriptor(BaseModel):
    """
    One requested line of an order as the client sent it:
    product, quantity, optional size and the chosen add-ons.
    """
    product_id: int
    qty: int = 1
    size_id: Optional[int] = None
    add_on_ids: List[int] = []

    @model_validator(mode="before")
    @classmethod
    def collect_add_on_ids(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        raw = data.get("add_on_ids")
        if raw is None:
            raw = data.get("add_ons")
        data["add_on_ids"] = _add_on_ids(raw)
        data.pop("add_ons", None)
        return data

    @field_validator("size_id", mode="before")
    @classmethod
    def lenient_size_id(cls, value):
        return parse_int(value)

    @field_validator("qty", mode="before")
    @classmethod
    def default_qty(cls, value):
        return 1 if value is None else value

    @classmethod
    def parse_line(cls, raw) -> Optional["LineDescriptor"]:
        """None for a line that cannot be understood (bad product id, bad qty)."""
        if isinstance(raw, cls):
            return raw
        try:
            return cls.model_validate(raw)
        except ValidationError:
            return None


class ChangeStatusRequest(BaseModel):
    status: Optional[str] = None


class OrderStatusChanged(BaseModel):
    id: int
    status: str
    payment_status: Optional[str] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_order(cls, order):
        payment_status = None
        if order.payments and order.payments[0].status is not None:
            payment_status = getattr(order.payments[0].status, "value", order.payments[0].status)
        return cls(
            id=order.id,
            status=order.status,
            payment_status=payment_status,
            updated_at=order.updated_at,
        )

    class Config:
        from_attributes = True
