"""Style resolution: enumerated template settings to concrete style descriptors.

Every resolver is a pure function of the settings it is given (plus the row
index for row styles). Values outside the known set are not errors; they take
the last, default branch of each resolver.
"""

from enum import Enum
from typing import Any, Optional

from invoice_engine.app.schemas.styles import (
    BackgroundDescriptor,
    DocumentBorder,
    HeaderStyleDescriptor,
    InvoiceNumberPlacement,
    InvoiceNumberSites,
    LogoPlacement,
    RowStyle,
    StyleSet,
    TableHeaderDescriptor,
)
from invoice_engine.app.schemas.template_settings import TemplateSettings

ROUNDED_RADIUS = "8px"
SQUARE_RADIUS = "0"
TRANSPARENT = "transparent"
DOCUMENT_BORDER = "1px solid #d1d5db"
NEUTRAL_RULE = "1px solid #e5e7eb"
DEFAULT_SOLID_BACKGROUND = "#ffffff"
DEFAULT_GRADIENT = "linear-gradient(135deg, #f5f7fa 0%, #c3cfe2 100%)"

HEADER_TINT_ALPHA = "20"
ROW_TINT_ALPHA = "0d"

PATTERN_ASSETS = {
    "diagonal-stripes": "/patterns/diagonal-stripes.png",
    "dots": "/patterns/dots.png",
}


def _choice(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def tint(color: str, alpha: str) -> str:
    """Append a two-digit hex alpha to a ``#rgb``/``#rrggbb`` color."""
    if not isinstance(color, str) or not color.startswith("#"):
        return color
    digits = color[1:]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) != 6:
        return color
    return f"#{digits}{alpha}"


def get_border_radius(settings: TemplateSettings) -> str:
    if _choice(settings.corner_style) == "rounded":
        return ROUNDED_RADIUS
    return SQUARE_RADIUS


def resolve_header_style(settings: TemplateSettings) -> HeaderStyleDescriptor:
    style = _choice(settings.header_style)
    radius = get_border_radius(settings)
    if style == "full-color":
        return HeaderStyleDescriptor(
            background=settings.header_color,
            radius="8px 8px 0 0" if radius != SQUARE_RADIUS else SQUARE_RADIUS,
            text_color=settings.text_color,
        )
    if style == "top-border":
        return HeaderStyleDescriptor(
            background=TRANSPARENT,
            border={"top": f"5px solid {settings.header_color}"},
            radius=radius,
            text_color=settings.accent_color,
        )
    if style == "box":
        return HeaderStyleDescriptor(
            background=TRANSPARENT,
            border={side: f"2px solid {settings.header_color}" for side in ("top", "right", "bottom", "left")},
            radius=radius,
            text_color=settings.accent_color,
        )
    if style == "side-color":
        return HeaderStyleDescriptor(
            background=TRANSPARENT,
            border={"left": f"8px solid {settings.header_color}"},
            radius=radius,
            text_color=settings.accent_color,
        )
    # minimal
    return HeaderStyleDescriptor(
        background=TRANSPARENT,
        border={"bottom": f"1px solid {settings.accent_color}"},
        radius=radius,
        text_color=settings.accent_color,
    )


def resolve_logo_placement(settings: TemplateSettings) -> Optional[LogoPlacement]:
    """Where the logo sits relative to the company info block.

    ``auto_margin`` is the side that absorbs free space: ``"right"`` pushes the
    logo to the start of the row, ``"left"`` pushes it to the end.
    """
    if not settings.show_logo:
        return None
    info_position = _choice(settings.company_info_position)
    logo_position = _choice(settings.logo_position)
    if info_position == "center":
        return LogoPlacement(alignment="center", stacked=True)
    if info_position == "right":
        if logo_position == "left":
            return LogoPlacement(alignment="start", auto_margin="right")
        return LogoPlacement(alignment="end", auto_margin="left")
    # left
    if logo_position == "right":
        return LogoPlacement(alignment="end", auto_margin="left")
    return LogoPlacement(alignment="start", auto_margin="right")


def resolve_invoice_number_placement(settings: TemplateSettings) -> InvoiceNumberPlacement:
    position = _choice(settings.invoice_number_position)
    if position == "hidden":
        return InvoiceNumberPlacement.OMITTED_HERE
    if position == "top-left":
        return InvoiceNumberPlacement.TOP_LEFT
    if position == "header-left":
        return InvoiceNumberPlacement.HEADER_LEFT
    if position == "header-right":
        return InvoiceNumberPlacement.HEADER_RIGHT
    if position == "under-header":
        return InvoiceNumberPlacement.UNDER_HEADER
    return InvoiceNumberPlacement.TOP_RIGHT


def invoice_number_sites(settings: TemplateSettings) -> InvoiceNumberSites:
    """Which rendering site shows the invoice number; at most one is on."""
    placement = resolve_invoice_number_placement(settings)
    if placement in (InvoiceNumberPlacement.TOP_LEFT, InvoiceNumberPlacement.TOP_RIGHT):
        alignment = "left" if placement == InvoiceNumberPlacement.TOP_LEFT else "right"
        return InvoiceNumberSites(top=True, alignment=alignment)
    if placement in (InvoiceNumberPlacement.HEADER_LEFT, InvoiceNumberPlacement.HEADER_RIGHT):
        if _choice(settings.company_info_position) == "center":
            alignment = "center"
        else:
            alignment = "left" if placement == InvoiceNumberPlacement.HEADER_LEFT else "right"
        return InvoiceNumberSites(header=True, alignment=alignment)
    if placement == InvoiceNumberPlacement.UNDER_HEADER:
        return InvoiceNumberSites(under_header=True, alignment="left")
    return InvoiceNumberSites()


def resolve_border_style(settings: TemplateSettings) -> DocumentBorder:
    style = _choice(settings.border_style)
    if style == "full":
        return DocumentBorder(
            top=DOCUMENT_BORDER,
            right=DOCUMENT_BORDER,
            bottom=DOCUMENT_BORDER,
            left=DOCUMENT_BORDER,
            table_border=True,
        )
    if style == "header-only":
        return DocumentBorder(top=DOCUMENT_BORDER, right=DOCUMENT_BORDER, left=DOCUMENT_BORDER)
    if style == "table-only":
        return DocumentBorder(table_border=True)
    return DocumentBorder()


def resolve_background_style(settings: TemplateSettings) -> BackgroundDescriptor:
    style = _choice(settings.background_style)
    if style == "gradient":
        return BackgroundDescriptor(kind="gradient", value=settings.background_value or DEFAULT_GRADIENT)
    if style == "pattern":
        asset = PATTERN_ASSETS.get(settings.background_value)
        if asset is None:
            return BackgroundDescriptor(kind="none")
        return BackgroundDescriptor(kind="pattern", value=asset)
    return BackgroundDescriptor(kind="solid", value=settings.background_value or DEFAULT_SOLID_BACKGROUND)


def resolve_table_header_style(settings: TemplateSettings) -> TableHeaderDescriptor:
    style = _choice(settings.table_header_style)
    accent = settings.accent_color
    if style == "filled":
        return TableHeaderDescriptor(
            fill=tint(accent, HEADER_TINT_ALPHA),
            text_color=accent,
            border_bottom=f"1px solid {accent}",
        )
    if style == "bordered":
        return TableHeaderDescriptor(fill=TRANSPARENT, text_color=accent, border_bottom=f"2px solid {accent}")
    return TableHeaderDescriptor(fill=TRANSPARENT, text_color=accent, border_bottom=NEUTRAL_RULE)


def resolve_row_style(settings: TemplateSettings, row_index: int) -> RowStyle:
    if settings.alternate_row_colors and row_index % 2 == 1:
        return RowStyle(fill=tint(settings.accent_color, ROW_TINT_ALPHA))
    return RowStyle()


def resolve_styles(settings: TemplateSettings, row_count: int = 0) -> StyleSet:
    return StyleSet(
        header=resolve_header_style(settings),
        logo=resolve_logo_placement(settings),
        invoice_number=resolve_invoice_number_placement(settings),
        invoice_number_sites=invoice_number_sites(settings),
        border=resolve_border_style(settings),
        background=resolve_background_style(settings),
        table_header=resolve_table_header_style(settings),
        rows=[resolve_row_style(settings, index) for index in range(row_count)],
        border_radius=get_border_radius(settings),
        font_family=settings.font_family,
        show_lines=settings.show_lines,
    )
