"""Render-ready view model handed to the preview and export collaborators."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from invoice_engine.app.schemas.financials import Financials
from invoice_engine.app.schemas.styles import StyleSet

NOT_SPECIFIED = "Not specified"
NO_CUSTOMER = "No customer selected"
NO_ITEMS = "No items added yet"
SIGNATURE_CAPTION = "Authorized Signature"


class LabeledValue(BaseModel):
    label: str
    value: str


class TextBlock(BaseModel):
    visible: bool = False
    text: str = ""


class PreTableFields(BaseModel):
    meter_reading: Optional[str] = None
    vehicle_type: Optional[str] = None
    vehicle_model: Optional[str] = None
    vehicle_number: Optional[str] = None
    show_vehicle_info: bool = False
    invoice_number: Optional[str] = None
    customer_lines: Optional[List[str]] = None
    customer_empty_message: Optional[str] = None
    due_date: Optional[str] = None
    invoice_date: Optional[str] = None
    custom_fields: List[LabeledValue] = Field(default_factory=list)


class Sections(BaseModel):
    issue_date: str
    due_date: str
    header_custom_fields: List[LabeledValue] = Field(default_factory=list)
    pre_table: PreTableFields
    items_empty_message: Optional[str] = None
    watermark: TextBlock
    amount_in_words: TextBlock
    notes: TextBlock
    terms_and_conditions: TextBlock
    footer: TextBlock
    signature: TextBlock


class ViewModel(BaseModel):
    settings: Dict[str, Any]
    styles: StyleSet
    financials: Financials
    invoice: Dict[str, Any]
    sections: Sections


class ExportPlan(BaseModel):
    filename: str
    page_size: str
    line_item_count: int
