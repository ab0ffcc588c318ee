"""Template settings schemas.

``TemplateSettings`` is the persisted, evolvable configuration that decides how
an invoice is laid out. Every field carries a hard-coded default so that a blob
written by an older revision always loads into a fully populated object. The
wire format uses camelCase keys; Python code uses the snake_case field names.
"""

import logging
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, create_model, field_validator
from pydantic.alias_generators import to_camel

from invoice_engine.app.core.time import epoch_millis

logger = logging.getLogger(__name__)


class HeaderStyle(str, Enum):
    FULL_COLOR = "full-color"
    TOP_BORDER = "top-border"
    BOX = "box"
    SIDE_COLOR = "side-color"
    MINIMAL = "minimal"


class CompanyInfoPosition(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class LogoPosition(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class InvoiceNumberPosition(str, Enum):
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    HEADER_LEFT = "header-left"
    HEADER_RIGHT = "header-right"
    UNDER_HEADER = "under-header"
    HIDDEN = "hidden"


class BorderStyle(str, Enum):
    FULL = "full"
    HEADER_ONLY = "header-only"
    TABLE_ONLY = "table-only"
    NONE = "none"


class CornerStyle(str, Enum):
    ROUNDED = "rounded"
    SQUARE = "square"


class BackgroundStyle(str, Enum):
    SOLID = "solid"
    GRADIENT = "gradient"
    PATTERN = "pattern"


class TableHeaderStyle(str, Enum):
    FILLED = "filled"
    BORDERED = "bordered"
    MINIMAL = "minimal"


ENUM_FIELDS = (
    "header_style",
    "company_info_position",
    "invoice_number_position",
    "logo_position",
    "border_style",
    "corner_style",
    "background_style",
    "table_header_style",
)


def _new_field_id() -> str:
    return f"field-{epoch_millis()}"


class CustomField(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=_new_field_id)
    label: str
    value: str = ""


class TemplateSettings(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    template_id: str = "classic"

    business_name: str = "Car Line Garage"
    tagline: str = "Professional Auto Service"
    contact_info: str = "Phone: 123-456-7890 | Email: info@carlinegarage.com"
    address: str = "123 Auto Street, Mechanic City"
    logo_url: str = ""

    header_color: str = "#2e7d32"
    text_color: str = "#000000"
    accent_color: str = "#2e7d32"
    font_family: str = "Helvetica"

    header_style: HeaderStyle = HeaderStyle.MINIMAL
    company_info_position: CompanyInfoPosition = CompanyInfoPosition.LEFT
    invoice_number_position: InvoiceNumberPosition = InvoiceNumberPosition.TOP_RIGHT
    logo_position: LogoPosition = LogoPosition.LEFT
    border_style: BorderStyle = BorderStyle.NONE
    corner_style: CornerStyle = CornerStyle.SQUARE
    background_style: BackgroundStyle = BackgroundStyle.SOLID
    background_value: str = "#ffffff"
    table_header_style: TableHeaderStyle = TableHeaderStyle.MINIMAL

    show_logo: bool = True
    show_lines: bool = True
    show_discount: bool = True
    show_tax: bool = True
    include_tax_fields: bool = False
    alternate_row_colors: bool = False
    include_watermark: bool = False
    include_signature_line: bool = True
    include_amount_in_words: bool = False
    include_footer_text: bool = False
    include_notes: bool = False
    include_terms_and_conditions: bool = False
    show_meter_reading: bool = True
    show_vehicle_info: bool = True
    show_customer_info: bool = True
    show_due_date: bool = True
    show_invoice_date: bool = True

    watermark_text: str = ""
    footer_text: str = ""
    notes: str = ""
    terms_and_conditions: str = ""

    date_format: str = "MM/dd/yyyy"

    custom_fields: List[CustomField] = Field(default_factory=list)
    pre_table_custom_fields: List[CustomField] = Field(default_factory=list)

    @field_validator(*ENUM_FIELDS, mode="before")
    @classmethod
    def _coerce_unknown_enum(cls, value: Any, info):
        enum_type = cls.model_fields[info.field_name].annotation
        if isinstance(value, enum_type):
            return value
        allowed = {member.value for member in enum_type}
        if isinstance(value, str) and value in allowed:
            return value
        default = cls.model_fields[info.field_name].default
        logger.warning("Unrecognized %s value %r; using %r", info.field_name, value, default.value)
        return default

    def to_wire(self) -> dict:
        """JSON-ready dict with camelCase keys, extras included."""
        return self.model_dump(mode="json", by_alias=True)


def canonical_defaults() -> TemplateSettings:
    return TemplateSettings()


def _patch_annotation(name: str, annotation: Any) -> Any:
    # Enum fields accept any string here; unknown values are coerced once the
    # patch is merged into a full TemplateSettings.
    if name in ENUM_FIELDS:
        return Optional[str]
    return Optional[annotation]


TemplateSettingsPatch = create_model(
    "TemplateSettingsPatch",
    __config__=ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore"),
    **{
        name: (_patch_annotation(name, field.annotation), None)
        for name, field in TemplateSettings.model_fields.items()
    },
)
TemplateSettingsPatch.__doc__ = "Partial TemplateSettings; only explicitly set fields are meaningful."


def patch_fields(patch: BaseModel) -> dict:
    """Fields explicitly set on a patch, by Python name.

    Unset fields mean "does not care"; a field explicitly set to ``False`` or
    ``""`` is kept. Explicit ``None`` is dropped because no settings field is
    nullable.
    """
    return {key: value for key, value in patch.model_dump(exclude_unset=True).items() if value is not None}


def merge_settings(settings: TemplateSettings, patch: BaseModel) -> TemplateSettings:
    """Directional merge: patch fields overwrite, everything else is retained."""
    data = settings.model_dump()
    data.update(patch_fields(patch))
    return TemplateSettings.model_validate(data)
