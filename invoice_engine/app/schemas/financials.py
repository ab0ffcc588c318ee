"""Financial derivation schemas."""

from decimal import Decimal
from typing import List, Tuple

from pydantic import BaseModel, Field

from invoice_engine.app.core.settings import get_settings


class FinancialRates(BaseModel):
    discount_rate: Decimal
    tax_rate: Decimal
    split_tax_rate: Decimal
    split_tax_labels: Tuple[str, str]
    currency_code: str = "USD"

    @classmethod
    def from_settings(cls, app_settings=None) -> "FinancialRates":
        app_settings = app_settings or get_settings()
        return cls(
            discount_rate=app_settings.discount_rate,
            tax_rate=app_settings.tax_rate,
            split_tax_rate=app_settings.split_tax_rate,
            split_tax_labels=app_settings.split_tax_labels,
            currency_code=app_settings.currency_code,
        )


class TaxLine(BaseModel):
    label: str
    rate: Decimal
    amount: Decimal


class Financials(BaseModel):
    subtotal: Decimal
    discount_rate: Decimal
    discount_amount: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    split_tax_lines: List[TaxLine] = Field(default_factory=list)
    amount_due: Decimal
    amount_in_words: str
    currency_code: str
    show_discount: bool
    show_tax: bool
