"""Style descriptors handed to the renderer."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class HeaderStyleDescriptor(BaseModel):
    background: str
    border: Dict[str, str] = Field(default_factory=dict)
    radius: str = "0"
    text_color: str
    padding: str = "20px"


class LogoPlacement(BaseModel):
    alignment: str
    auto_margin: Optional[str] = None
    stacked: bool = False


class InvoiceNumberPlacement(str, Enum):
    OMITTED_HERE = "omitted-here"
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    HEADER_LEFT = "header-left"
    HEADER_RIGHT = "header-right"
    UNDER_HEADER = "under-header"


class InvoiceNumberSites(BaseModel):
    top: bool = False
    header: bool = False
    under_header: bool = False
    alignment: Optional[str] = None


class DocumentBorder(BaseModel):
    top: Optional[str] = None
    right: Optional[str] = None
    bottom: Optional[str] = None
    left: Optional[str] = None
    table_border: bool = False


class BackgroundDescriptor(BaseModel):
    kind: str
    value: Optional[str] = None


class TableHeaderDescriptor(BaseModel):
    fill: str
    text_color: str
    border_bottom: str


class RowStyle(BaseModel):
    fill: Optional[str] = None


class StyleSet(BaseModel):
    header: HeaderStyleDescriptor
    logo: Optional[LogoPlacement] = None
    invoice_number: InvoiceNumberPlacement
    invoice_number_sites: InvoiceNumberSites
    border: DocumentBorder
    background: BackgroundDescriptor
    table_header: TableHeaderDescriptor
    rows: List[RowStyle] = Field(default_factory=list)
    border_radius: str
    font_family: str
    show_lines: bool
