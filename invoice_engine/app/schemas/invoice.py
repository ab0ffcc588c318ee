"""Invoice record schemas.

An ``InvoiceRecord`` is the value object describing one invoice. Its ``total``
is derived: it is recomputed from the line items whenever the record is
validated and after every line-item mutation, so a caller-supplied total is
never trusted.
"""

import itertools
import random
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from invoice_engine.app.core.settings import get_settings
from invoice_engine.app.core.time import epoch_millis, utc_now

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")
# Keeps rate * quantity well inside the 28 digit decimal context
MAX_RATE_DIGITS = 15
MAX_QUANTITY_DIGITS = 9

_item_counter = itertools.count(1)


def to_money(value) -> Decimal:
    """Round to cents; a value too large to round raises ``ValueError``."""
    try:
        return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Amount {value} is out of range")


def generate_bill_number(prefix: Optional[str] = None) -> str:
    """``<prefix>-<last 6 digits of epoch millis>-<3 digit random>``."""
    prefix = prefix or get_settings().bill_number_prefix
    timestamp = str(epoch_millis())[-6:]
    suffix = f"{random.randint(0, 999):03d}"
    return f"{prefix}-{timestamp}-{suffix}"


def _new_item_id() -> str:
    return f"item_{epoch_millis()}_{next(_item_counter)}"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Customer(_CamelModel):
    id: str
    name: str
    contact: str = ""
    address: Optional[str] = None
    avatar: Optional[str] = None


class VehicleInfo(_CamelModel):
    vehicle_number: Optional[str] = None
    vehicle_type: Optional[str] = None
    vehicle_model: Optional[str] = None
    meter_reading: Optional[str] = None


class LineItem(_CamelModel):
    id: str = Field(default_factory=_new_item_id)
    description: str = ""
    unit_rate: Decimal = Field(default=ZERO, ge=0, max_digits=MAX_RATE_DIGITS)
    quantity: Decimal = Field(default=Decimal("1"), ge=0, max_digits=MAX_QUANTITY_DIGITS)
    amount: Decimal = ZERO

    @model_validator(mode="after")
    def _derive_amount(self):
        self.amount = to_money(self.unit_rate * self.quantity)
        return self


def calculate_total(line_items: List[LineItem]) -> Decimal:
    return to_money(sum((item.amount for item in line_items), ZERO))


class InvoiceRecord(_CamelModel):
    bill_number: str = Field(default_factory=generate_bill_number, frozen=True)
    issue_date: datetime = Field(default_factory=utc_now)
    due_date: Optional[datetime] = None
    customer: Optional[Customer] = None
    line_items: List[LineItem] = Field(default_factory=list)
    subject: str = ""
    vehicle_info: VehicleInfo = Field(default_factory=VehicleInfo)
    total: Decimal = ZERO
    is_draft: bool = False

    @model_validator(mode="after")
    def _derive_total(self):
        self.total = calculate_total(self.line_items)
        return self

    def _recalculate(self) -> None:
        self.total = calculate_total(self.line_items)

    def _index_of(self, item_id: str) -> int:
        for index, item in enumerate(self.line_items):
            if item.id == item_id:
                return index
        raise KeyError(item_id)

    def add_line_item(
        self,
        description: str = "",
        unit_rate=ZERO,
        quantity=Decimal("1"),
        item_id: Optional[str] = None,
    ) -> LineItem:
        data = {"description": description, "unit_rate": unit_rate, "quantity": quantity}
        if item_id is not None:
            if any(item.id == item_id for item in self.line_items):
                raise ValueError(f"Duplicate line item id {item_id!r}")
            data["id"] = item_id
        item = LineItem(**data)
        total = calculate_total(self.line_items + [item])
        self.line_items.append(item)
        self.total = total
        return item

    def update_line_item(self, item_id: str, **changes) -> LineItem:
        """Replace fields of one item in place; position in the list is kept."""
        index = self._index_of(item_id)
        data = self.line_items[index].model_dump()
        changes.pop("id", None)
        changes.pop("amount", None)
        data.update({key: value for key, value in changes.items() if value is not None})
        item = LineItem.model_validate(data)
        self.line_items[index] = item
        self._recalculate()
        return item

    def remove_line_item(self, item_id: str) -> LineItem:
        index = self._index_of(item_id)
        item = self.line_items.pop(index)
        self._recalculate()
        return item


class LineItemCreate(_CamelModel):
    id: Optional[str] = None
    description: str = ""
    unit_rate: Decimal = Field(default=ZERO, ge=0, max_digits=MAX_RATE_DIGITS)
    quantity: Decimal = Field(default=Decimal("1"), ge=0, max_digits=MAX_QUANTITY_DIGITS)


class LineItemUpdate(_CamelModel):
    description: Optional[str] = None
    unit_rate: Optional[Decimal] = Field(default=None, ge=0, max_digits=MAX_RATE_DIGITS)
    quantity: Optional[Decimal] = Field(default=None, ge=0, max_digits=MAX_QUANTITY_DIGITS)
