"""Built-in template presets and the directional merge that applies them."""

import logging
from typing import List, Optional

from pydantic import BaseModel

from invoice_engine.app.schemas.template_settings import (
    TemplateSettings,
    TemplateSettingsPatch,
    merge_settings,
    patch_fields,
)

logger = logging.getLogger(__name__)

DOCUMENT = "document"
HEADER = "header"


class TemplatePreset(BaseModel):
    id: str
    name: str
    description: str
    kind: str = DOCUMENT
    default_settings: TemplateSettingsPatch

    def fields(self) -> dict:
        return patch_fields(self.default_settings)


def _preset(preset_id: str, name: str, description: str, kind: str = DOCUMENT, **settings) -> TemplatePreset:
    settings["template_id"] = preset_id
    return TemplatePreset(
        id=preset_id,
        name=name,
        description=description,
        kind=kind,
        default_settings=TemplateSettingsPatch(**settings),
    )


_DOCUMENT_PRESETS = [
    _preset(
        "classic",
        "Classic",
        "A professional, clean template with a colored header",
        header_color="#2e7d32",
        text_color="#000000",
        accent_color="#2e7d32",
        font_family="Helvetica",
        show_lines=True,
        company_info_position="left",
        show_logo=True,
        show_discount=True,
        show_tax=True,
        date_format="MM/dd/yyyy",
        border_style="none",
        corner_style="square",
        background_style="solid",
        background_value="#ffffff",
        include_watermark=False,
        watermark_text="",
        include_signature_line=True,
        include_amount_in_words=False,
        include_footer_text=False,
        footer_text="",
    ),
    _preset(
        "modern",
        "Modern",
        "A sleek, minimal design with accent colors",
        header_color="#1976d2",
        text_color="#333333",
        accent_color="#1976d2",
        font_family="Arial",
        show_lines=False,
        company_info_position="right",
        show_logo=True,
        show_discount=True,
        show_tax=True,
        date_format="dd MMM yyyy",
        border_style="none",
        corner_style="rounded",
        background_style="solid",
        background_value="#ffffff",
        include_watermark=False,
        watermark_text="",
        include_signature_line=True,
        include_amount_in_words=False,
        include_footer_text=False,
        footer_text="",
    ),
    _preset(
        "elegant",
        "Elegant",
        "A sophisticated template with formal styling",
        header_color="#512da8",
        text_color="#212121",
        accent_color="#9575cd",
        font_family="Times",
        show_lines=True,
        company_info_position="center",
        show_logo=True,
        show_discount=True,
        show_tax=True,
        date_format="MMMM dd, yyyy",
        border_style="full",
        corner_style="square",
        background_style="solid",
        background_value="#ffffff",
        include_watermark=False,
        watermark_text="",
        include_signature_line=True,
        include_amount_in_words=True,
        include_footer_text=False,
        footer_text="",
    ),
    _preset(
        "creative",
        "Creative",
        "A bold, colorful design for creative businesses",
        header_color="#ff4081",
        text_color="#424242",
        accent_color="#ff4081",
        font_family="Tahoma",
        show_lines=False,
        company_info_position="left",
        show_logo=True,
        show_discount=True,
        show_tax=True,
        date_format="dd/MM/yyyy",
        border_style="none",
        corner_style="rounded",
        background_style="gradient",
        background_value="linear-gradient(135deg, #f5f7fa 0%, #c3cfe2 100%)",
        include_watermark=False,
        watermark_text="",
        include_signature_line=True,
        include_amount_in_words=False,
        include_footer_text=False,
        footer_text="",
    ),
    _preset(
        "minimalist",
        "Minimalist",
        "A clean, simple design with minimal elements",
        header_color="#607d8b",
        text_color="#37474f",
        accent_color="#607d8b",
        font_family="Roboto",
        show_lines=False,
        company_info_position="right",
        show_logo=False,
        show_discount=False,
        show_tax=True,
        date_format="yyyy-MM-dd",
        border_style="none",
        corner_style="square",
        background_style="solid",
        background_value="#ffffff",
        include_watermark=False,
        watermark_text="",
        include_signature_line=True,
        include_amount_in_words=False,
        include_footer_text=False,
        footer_text="",
    ),
    _preset(
        "car-line",
        "Car Line",
        "Classic auto service invoice with detailed header",
        header_color="#000000",
        text_color="#000000",
        accent_color="#333333",
        font_family="Arial",
        show_lines=True,
        company_info_position="center",
        show_logo=True,
        show_discount=False,
        show_tax=False,
        date_format="MM/dd/yyyy",
        border_style="full",
        corner_style="square",
        background_style="solid",
        background_value="#ffffff",
        include_watermark=True,
        watermark_text="Car Line Garage",
        include_signature_line=True,
        include_amount_in_words=False,
        include_footer_text=False,
        footer_text="",
    ),
    _preset(
        "teal-modern",
        "Teal Modern",
        "Vibrant teal header with clean layout",
        header_color="#009688",
        text_color="#ffffff",
        accent_color="#009688",
        font_family="Roboto",
        show_lines=True,
        company_info_position="center",
        show_logo=True,
        show_discount=False,
        show_tax=False,
        date_format="dd/MM/yyyy",
        border_style="none",
        corner_style="rounded",
        background_style="solid",
        background_value="#e0f2f1",
        include_watermark=False,
        watermark_text="",
        include_signature_line=True,
        include_amount_in_words=True,
        include_footer_text=True,
        footer_text="Thank you for your business!",
    ),
    _preset(
        "bamboo",
        "Bamboo",
        "Clean design with colored text and simple borders",
        header_color="#ffffff",
        text_color="#00796b",
        accent_color="#00796b",
        font_family="Times",
        show_lines=True,
        company_info_position="center",
        show_logo=False,
        show_discount=True,
        show_tax=True,
        date_format="dd/MM/yyyy",
        border_style="full",
        corner_style="square",
        background_style="solid",
        background_value="#ffffff",
        include_watermark=False,
        watermark_text="",
        include_signature_line=True,
        include_amount_in_words=True,
        include_footer_text=False,
        footer_text="",
    ),
    _preset(
        "yellow-stripe",
        "Yellow Stripe",
        "Modern design with diagonal yellow stripes",
        header_color="#ffffff",
        text_color="#000000",
        accent_color="#fdd835",
        font_family="Arial",
        show_lines=True,
        company_info_position="left",
        show_logo=False,
        show_discount=True,
        show_tax=True,
        date_format="dd/MM/yyyy",
        border_style="none",
        corner_style="square",
        background_style="pattern",
        background_value="diagonal-stripes",
        include_watermark=False,
        watermark_text="",
        include_signature_line=True,
        include_amount_in_words=True,
        include_footer_text=True,
        footer_text="Terms & Conditions Apply",
    ),
]

# Header layouts also carry sample branding text, which they overwrite.
_HEADER_PRESETS = [
    _preset(
        "car-line-header",
        "Car Line Garage",
        "Minimal header with the invoice number at the top right",
        kind=HEADER,
        business_name="Car Line Garage",
        tagline="Professional Auto Service",
        contact_info="Phone: 030-35419671 | Email: carlinegarage1@gmail.com",
        address="Car Line Garage 10-B1 Samsani Road Johar Town, Lahore Punjab",
        header_color="#333333",
        text_color="#000000",
        accent_color="#333333",
        font_family="Arial",
        show_lines=True,
        company_info_position="left",
        header_style="minimal",
        invoice_number_position="top-right",
        show_logo=True,
        logo_position="left",
    ),
    _preset(
        "memo-style",
        "Memo Style",
        "Boxed header with the invoice number below it",
        kind=HEADER,
        business_name="YOUR COMPANY NAME",
        tagline="Write here your company slogan",
        contact_info="Mob: 1234-567890 | Email: yourcompany@gmail.com",
        address="Write here your company address",
        logo_url="",
        header_color="#333333",
        text_color="#000000",
        accent_color="#333333",
        font_family="Arial",
        show_lines=True,
        company_info_position="center",
        header_style="box",
        invoice_number_position="under-header",
        show_logo=True,
        logo_position="left",
    ),
    _preset(
        "graphical-market",
        "Graphical Market",
        "Full-color teal header, centered company details",
        kind=HEADER,
        business_name="GRAPHICAL MARKET",
        tagline="Cash Memo",
        contact_info="First Floor, D/T Mansion-1207",
        address="Address: 75/A New Street, Road#1, House 75, Near Park Street",
        logo_url="",
        header_color="#00a99d",
        text_color="#ffffff",
        accent_color="#00a99d",
        font_family="Arial",
        show_lines=True,
        company_info_position="center",
        header_style="full-color",
        invoice_number_position="under-header",
        show_logo=True,
        logo_position="left",
    ),
    _preset(
        "yellow-fold",
        "Yellow Fold",
        "Side-colored header over a striped background",
        kind=HEADER,
        business_name="COMPANY NAME",
        tagline="Your Company Slogan",
        contact_info="youremail@email.com | www.companyname.com | 0123456789",
        address="Address Line 1, Address Line 2, Address Line 3, Address Line 4",
        logo_url="",
        header_color="#ffeb3b",
        text_color="#000000",
        accent_color="#000000",
        font_family="Arial",
        show_lines=True,
        company_info_position="left",
        header_style="side-color",
        invoice_number_position="top-right",
        show_logo=False,
        logo_position="left",
        background_style="pattern",
        background_value="diagonal-stripes",
        corner_style="square",
    ),
    _preset(
        "bamboo-cafeteria",
        "Bamboo Cafeteria",
        "Minimal teal header inside a full document border",
        kind=HEADER,
        business_name="BAMBOO CAFETERIA",
        tagline="Tax invoice bill",
        contact_info="",
        address="Street 12 Downtown Shoppe No1 France",
        logo_url="",
        header_color="#00796b",
        text_color="#00796b",
        accent_color="#00796b",
        font_family="Times",
        show_lines=True,
        company_info_position="center",
        header_style="minimal",
        invoice_number_position="under-header",
        show_logo=False,
        logo_position="left",
        border_style="full",
    ),
    _preset(
        "company-memo",
        "Company Memo",
        "Centered logo and details, no border",
        kind=HEADER,
        business_name="COMPANY NAME",
        tagline="",
        contact_info="www.example.com",
        address="ADDRESS/CONTACT HERE: Mob: 123-4567890",
        logo_url="",
        header_color="#000000",
        text_color="#000000",
        accent_color="#000000",
        font_family="Arial",
        show_lines=True,
        company_info_position="center",
        header_style="minimal",
        invoice_number_position="top-right",
        show_logo=True,
        logo_position="center",
        border_style="none",
    ),
    _preset(
        "colorful-memo",
        "Colorful Memo",
        "Blue full-color header with pink accents",
        kind=HEADER,
        business_name="LOREM IPSUM",
        tagline="CASH MEMO",
        contact_info="",
        address="",
        logo_url="",
        header_color="#1976d2",
        text_color="#ffffff",
        accent_color="#e91e63",
        font_family="Arial",
        show_lines=True,
        company_info_position="left",
        header_style="full-color",
        invoice_number_position="top-right",
        show_logo=True,
        logo_position="left",
        border_style="none",
        corner_style="rounded",
    ),
]

PRESETS: List[TemplatePreset] = _DOCUMENT_PRESETS + _HEADER_PRESETS


def list_presets(kind: Optional[str] = None) -> List[TemplatePreset]:
    if kind is None:
        return list(PRESETS)
    return [preset for preset in PRESETS if preset.kind == kind]


def get_preset(preset_id: str) -> Optional[TemplatePreset]:
    for preset in PRESETS:
        if preset.id == preset_id:
            return preset
    return None


def apply_preset(settings: TemplateSettings, preset: TemplatePreset) -> TemplateSettings:
    """Overwrite exactly the fields the preset defines; keep everything else."""
    logger.info("Applying preset %s (%d fields)", preset.id, len(preset.fields()))
    return merge_settings(settings, preset.default_settings)
