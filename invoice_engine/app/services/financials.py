"""Financial derivation: subtotal, discount, tax and amount due."""

from decimal import Decimal
from typing import Optional

from invoice_engine.app.schemas.financials import FinancialRates, Financials, TaxLine
from invoice_engine.app.schemas.invoice import ZERO, to_money
from invoice_engine.app.schemas.template_settings import TemplateSettings
from invoice_engine.app.services.amount_words import amount_in_words


def _percent_label(rate: Decimal) -> str:
    return f"{(rate * 100).normalize():f}%"


def compute_financials(
    total: Decimal | float,
    settings: TemplateSettings,
    rates: Optional[FinancialRates] = None,
) -> Financials:
    """Derive every payable figure from the invoice total.

    Tax is always computed on the original subtotal, never on the discounted
    amount. The split tax lines are an extra breakdown shown next to the
    single tax line and do not change the amount due.
    """
    rates = rates or FinancialRates.from_settings()
    subtotal = to_money(total)

    discount_amount = to_money(subtotal * rates.discount_rate) if settings.show_discount else ZERO
    tax_amount = to_money(subtotal * rates.tax_rate) if settings.show_tax else ZERO

    split_tax_lines = []
    if settings.include_tax_fields:
        half = to_money(subtotal * rates.split_tax_rate)
        split_tax_lines = [
            TaxLine(label=f"{label} {_percent_label(rates.split_tax_rate)}", rate=rates.split_tax_rate, amount=half)
            for label in rates.split_tax_labels
        ]

    amount_due = to_money(subtotal - discount_amount + tax_amount)
    return Financials(
        subtotal=subtotal,
        discount_rate=rates.discount_rate,
        discount_amount=discount_amount,
        tax_rate=rates.tax_rate,
        tax_amount=tax_amount,
        split_tax_lines=split_tax_lines,
        amount_due=amount_due,
        amount_in_words=amount_in_words(amount_due, rates.currency_code),
        currency_code=rates.currency_code,
        show_discount=settings.show_discount,
        show_tax=settings.show_tax,
    )
