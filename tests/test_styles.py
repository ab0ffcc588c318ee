import pytest

from invoice_engine.app.schemas.styles import InvoiceNumberPlacement
from invoice_engine.app.schemas.template_settings import (
    BackgroundStyle,
    BorderStyle,
    HeaderStyle,
    InvoiceNumberPosition,
    TableHeaderStyle,
    TemplateSettings,
)
from invoice_engine.app.services.styles import (
    DEFAULT_GRADIENT,
    DOCUMENT_BORDER,
    NEUTRAL_RULE,
    get_border_radius,
    invoice_number_sites,
    resolve_background_style,
    resolve_border_style,
    resolve_header_style,
    resolve_invoice_number_placement,
    resolve_logo_placement,
    resolve_row_style,
    resolve_styles,
    resolve_table_header_style,
    tint,
)


def make_settings(**overrides) -> TemplateSettings:
    return TemplateSettings(**overrides)


def test_border_radius_follows_corner_style():
    assert get_border_radius(make_settings(corner_style="rounded")) == "8px"
    assert get_border_radius(make_settings(corner_style="square")) == "0"


def test_full_color_header():
    settings = make_settings(header_style="full-color", header_color="#123456", text_color="#eeeeee", corner_style="rounded")
    header = resolve_header_style(settings)
    assert header.background == "#123456"
    assert header.text_color == "#eeeeee"
    assert header.radius == "8px 8px 0 0"
    assert header.border == {}


@pytest.mark.parametrize(
    "style, border",
    [
        ("top-border", {"top": "5px solid #123456"}),
        ("box", {side: "2px solid #123456" for side in ("top", "right", "bottom", "left")}),
        ("side-color", {"left": "8px solid #123456"}),
        ("minimal", {"bottom": "1px solid #abcdef"}),
    ],
)
def test_outline_headers_are_transparent_with_accent_text(style, border):
    settings = make_settings(header_style=style, header_color="#123456", accent_color="#abcdef")
    header = resolve_header_style(settings)
    assert header.background == "transparent"
    assert header.text_color == "#abcdef"
    assert header.border == border


def test_unknown_header_style_behaves_as_minimal():
    settings = make_settings(header_style="zigzag")
    assert resolve_header_style(settings) == resolve_header_style(make_settings(header_style="minimal"))


def test_logo_hidden_when_show_logo_off():
    assert resolve_logo_placement(make_settings(show_logo=False)) is None


@pytest.mark.parametrize(
    "info, logo, alignment, auto_margin",
    [
        ("left", "left", "start", "right"),
        ("left", "right", "end", "left"),
        ("right", "left", "start", "right"),
        ("right", "right", "end", "left"),
        ("right", "center", "end", "left"),
    ],
)
def test_logo_placement_beside_company_info(info, logo, alignment, auto_margin):
    placement = resolve_logo_placement(make_settings(company_info_position=info, logo_position=logo))
    assert placement.alignment == alignment
    assert placement.auto_margin == auto_margin
    assert placement.stacked is False


def test_logo_centered_above_centered_info():
    placement = resolve_logo_placement(make_settings(company_info_position="center", logo_position="right"))
    assert placement.alignment == "center"
    assert placement.stacked is True


def test_hidden_invoice_number_is_omitted_everywhere():
    settings = make_settings(invoice_number_position="hidden")
    assert resolve_invoice_number_placement(settings) == InvoiceNumberPlacement.OMITTED_HERE
    sites = invoice_number_sites(settings)
    assert not (sites.top or sites.header or sites.under_header)


@pytest.mark.parametrize(
    "position, site",
    [
        ("top-left", "top"),
        ("top-right", "top"),
        ("header-left", "header"),
        ("header-right", "header"),
        ("under-header", "under_header"),
    ],
)
def test_invoice_number_appears_at_exactly_one_site(position, site):
    sites = invoice_number_sites(make_settings(invoice_number_position=position))
    flags = {"top": sites.top, "header": sites.header, "under_header": sites.under_header}
    assert [name for name, on in flags.items() if on] == [site]


def test_header_invoice_number_centers_with_centered_info():
    sites = invoice_number_sites(make_settings(invoice_number_position="header-right", company_info_position="center"))
    assert sites.alignment == "center"


def test_border_styles():
    full = resolve_border_style(make_settings(border_style="full"))
    assert (full.top, full.right, full.bottom, full.left) == (DOCUMENT_BORDER,) * 4
    assert full.table_border is True

    header_only = resolve_border_style(make_settings(border_style="header-only"))
    assert header_only.bottom is None
    assert header_only.top == DOCUMENT_BORDER
    assert header_only.table_border is False

    table_only = resolve_border_style(make_settings(border_style="table-only"))
    assert table_only.top is None and table_only.table_border is True

    none = resolve_border_style(make_settings(border_style="none"))
    assert none.top is None and none.table_border is False


def test_background_styles():
    assert resolve_background_style(make_settings(background_style="solid", background_value="#fafafa")).value == "#fafafa"
    gradient = resolve_background_style(make_settings(background_style="gradient", background_value=""))
    assert (gradient.kind, gradient.value) == ("gradient", DEFAULT_GRADIENT)
    pattern = resolve_background_style(make_settings(background_style="pattern", background_value="dots"))
    assert (pattern.kind, pattern.value) == ("pattern", "/patterns/dots.png")
    unknown = resolve_background_style(make_settings(background_style="pattern", background_value="plaid"))
    assert unknown.kind == "none"


def test_table_header_styles():
    filled = resolve_table_header_style(make_settings(table_header_style="filled", accent_color="#2e7d32"))
    assert filled.fill == "#2e7d3220"
    assert filled.border_bottom == "1px solid #2e7d32"
    bordered = resolve_table_header_style(make_settings(table_header_style="bordered", accent_color="#2e7d32"))
    assert bordered.fill == "transparent"
    assert bordered.border_bottom == "2px solid #2e7d32"
    minimal = resolve_table_header_style(make_settings(table_header_style="minimal"))
    assert minimal.border_bottom == NEUTRAL_RULE


def test_alternate_rows_tint_odd_rows_only():
    settings = make_settings(alternate_row_colors=True, accent_color="#abc")
    assert resolve_row_style(settings, 0).fill is None
    assert resolve_row_style(settings, 1).fill == "#aabbcc0d"
    assert resolve_row_style(make_settings(), 1).fill is None


def test_tint_leaves_non_hex_colors_alone():
    assert tint("rgb(0, 0, 0)", "20") == "rgb(0, 0, 0)"
    assert tint("#12345", "20") == "#12345"


def test_resolve_styles_is_pure():
    settings = make_settings(header_style="box", alternate_row_colors=True)
    first = resolve_styles(settings, row_count=3)
    assert first == resolve_styles(settings, row_count=3)
    assert len(first.rows) == 3


@pytest.mark.parametrize(
    "enum_type, field, resolver, default",
    [
        (HeaderStyle, "header_style", resolve_header_style, HeaderStyle.MINIMAL),
        (BorderStyle, "border_style", resolve_border_style, BorderStyle.NONE),
        (TableHeaderStyle, "table_header_style", resolve_table_header_style, TableHeaderStyle.MINIMAL),
        (BackgroundStyle, "background_style", resolve_background_style, BackgroundStyle.SOLID),
        (InvoiceNumberPosition, "invoice_number_position", resolve_invoice_number_placement, InvoiceNumberPosition.TOP_RIGHT),
    ],
)
def test_every_enum_member_has_its_own_branch(enum_type, field, resolver, default):
    results = {member: resolver(make_settings(**{field: member.value, "background_value": "dots"})) for member in enum_type}
    for member, result in results.items():
        if member != default:
            assert result != results[default], member
