"""Assemble the view model consumed by the preview and by PDF export."""

import logging
import re
from typing import Any, List, Optional

from invoice_engine.app.core.settings import get_settings
from invoice_engine.app.schemas.financials import FinancialRates
from invoice_engine.app.schemas.invoice import InvoiceRecord
from invoice_engine.app.schemas.template_settings import CustomField, TemplateSettings
from invoice_engine.app.schemas.view_model import (
    NO_CUSTOMER,
    NO_ITEMS,
    NOT_SPECIFIED,
    SIGNATURE_CAPTION,
    ExportPlan,
    LabeledValue,
    PreTableFields,
    Sections,
    TextBlock,
    ViewModel,
)
from invoice_engine.app.services.date_format import format_date
from invoice_engine.app.services.exceptions import ExportTargetNotFoundError
from invoice_engine.app.services.financials import compute_financials
from invoice_engine.app.services.styles import invoice_number_sites, resolve_styles

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_RE = re.compile(r"[^A-Za-z0-9]+")


def _labeled(fields: List[CustomField]) -> List[LabeledValue]:
    return [LabeledValue(label=field.label, value=field.value or NOT_SPECIFIED) for field in fields]


def _text_block(enabled: bool, text: str) -> TextBlock:
    # an enabled block with nothing to say stays hidden
    return TextBlock(visible=bool(enabled and text), text=text if enabled else "")


def _pre_table_fields(invoice: InvoiceRecord, settings: TemplateSettings, issue_date: str, due_date: str) -> PreTableFields:
    fields = PreTableFields(custom_fields=_labeled(settings.pre_table_custom_fields))
    vehicle = invoice.vehicle_info
    if settings.show_meter_reading:
        fields.meter_reading = vehicle.meter_reading or NOT_SPECIFIED
    if settings.show_vehicle_info:
        fields.show_vehicle_info = True
        fields.vehicle_type = vehicle.vehicle_type or NOT_SPECIFIED
        fields.vehicle_model = vehicle.vehicle_model or None
        fields.vehicle_number = vehicle.vehicle_number or None
    if invoice_number_sites(settings).under_header:
        fields.invoice_number = invoice.bill_number
    if settings.show_customer_info:
        customer = invoice.customer
        if customer is None:
            fields.customer_empty_message = NO_CUSTOMER
        else:
            fields.customer_lines = [line for line in (customer.name, customer.contact, customer.address) if line]
    if settings.show_due_date:
        fields.due_date = due_date
    if settings.show_invoice_date:
        fields.invoice_date = issue_date
    return fields


def build_sections(invoice: InvoiceRecord, settings: TemplateSettings, amount_in_words: str) -> Sections:
    issue_date = format_date(invoice.issue_date, settings.date_format) or NOT_SPECIFIED
    due_date = format_date(invoice.due_date or invoice.issue_date, settings.date_format) or NOT_SPECIFIED
    return Sections(
        issue_date=issue_date,
        due_date=due_date,
        header_custom_fields=_labeled(settings.custom_fields),
        pre_table=_pre_table_fields(invoice, settings, issue_date, due_date),
        items_empty_message=None if invoice.line_items else NO_ITEMS,
        watermark=_text_block(settings.include_watermark, settings.watermark_text),
        amount_in_words=_text_block(settings.include_amount_in_words, amount_in_words),
        notes=_text_block(settings.include_notes, settings.notes),
        terms_and_conditions=_text_block(settings.include_terms_and_conditions, settings.terms_and_conditions),
        footer=_text_block(settings.include_footer_text, settings.footer_text),
        signature=_text_block(settings.include_signature_line, SIGNATURE_CAPTION),
    )


def build_view_model(
    invoice: InvoiceRecord,
    settings: TemplateSettings,
    rates: Optional[FinancialRates] = None,
) -> ViewModel:
    financials = compute_financials(invoice.total, settings, rates)
    return ViewModel(
        settings=settings.to_wire(),
        styles=resolve_styles(settings, row_count=len(invoice.line_items)),
        financials=financials,
        invoice=invoice.model_dump(mode="json", by_alias=True),
        sections=build_sections(invoice, settings, financials.amount_in_words),
    )


def _filename_part(value: str) -> str:
    return _UNSAFE_FILENAME_RE.sub("_", value).strip("_")


def export_filename(invoice: InvoiceRecord, settings: TemplateSettings) -> str:
    business = _filename_part(settings.business_name) or get_settings().export_fallback_name
    return f"{business}_Invoice_{invoice.bill_number}.pdf"


def page_size_for(line_item_count: int) -> str:
    if line_item_count > get_settings().large_invoice_item_threshold:
        return "a4"
    return "a5"


def plan_export(element_handle: Any, invoice: InvoiceRecord, settings: TemplateSettings) -> ExportPlan:
    """Describe the PDF an export collaborator should produce.

    ``element_handle`` identifies the rendered preview to rasterize. Without it
    there is nothing to export and :class:`ExportTargetNotFoundError` is raised.
    """
    if not element_handle:
        logger.error("Export target not found for invoice %s", invoice.bill_number)
        raise ExportTargetNotFoundError("Element not found")
    count = len(invoice.line_items)
    return ExportPlan(
        filename=export_filename(invoice, settings),
        page_size=page_size_for(count),
        line_item_count=count,
    )
