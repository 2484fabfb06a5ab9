"""
Certifica Certificate Theme Configuration

Visual configuration for generated certificates: page geometry, palette,
per-role typography and vertical advances. Layout constants are expressed
in millimetres and converted to points by the compositor.

Example usage:
    from core.theme import CERTIFICATE_THEME, get_role_style
    brand = CERTIFICATE_THEME['colors']['brand']
    title_style = get_role_style('title')
"""

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape

PAGE_SIZE = landscape(A4)

CERTIFICATE_THEME = {
    'name': 'Certifica Padrão',
    'page': {
        'size': PAGE_SIZE,
        'cursor_start_mm': 40,
    },
    'colors': {
        'brand': colors.HexColor("#2563eb"),
        'accent': colors.HexColor("#f59e0b"),
        'muted': colors.HexColor("#666666"),
        'neutral': colors.HexColor("#333333"),
        'grey': colors.HexColor("#6b7280"),
    },
    'borders': {
        'outer': {'inset_mm': 10, 'width': 3, 'color': 'brand'},
        'inner': {'inset_mm': 15, 'width': 1, 'color': 'accent'},
    },
    'footer': {
        'font': 'Helvetica',
        'size': 10,
        'color': 'muted',
        'margin_mm': 20,
        'baseline_mm': 25,
        'certificate_label': 'Certificado Nº',
        'verification_label': 'Código de Verificação',
    },
    # rule offsets are measured downwards from the text baseline
    'roles': {
        'title': {
            'font': 'Helvetica-Bold', 'size': 36, 'color': 'brand', 'advance_mm': 25,
            'rule': {'color': 'accent', 'width': 2, 'offset_mm': 5},
        },
        'recipient': {
            'font': 'Helvetica-Bold', 'size': 28, 'color': 'brand', 'advance_mm': 20,
            'rule': {'color': 'accent', 'width': 1, 'offset_mm': 5},
        },
        'course': {
            'font': 'Helvetica-Bold', 'size': 18, 'color': 'brand', 'advance_mm': 15,
            'rule': None,
        },
        'signature': {
            'font': 'Helvetica', 'size': 12, 'color': 'muted', 'advance_mm': 12,
            'rule': None,
        },
        'body': {
            'font': 'Helvetica', 'size': 14, 'color': 'neutral', 'advance_mm': 12,
            'rule': None,
        },
        'blank': {
            'font': None, 'size': 0, 'color': None, 'advance_mm': 8,
            'rule': None,
        },
        'organization': {
            'font': 'Helvetica-Bold', 'size': 14, 'color': 'brand', 'advance_mm': 12,
            'rule': {'color': 'grey', 'width': 0.5, 'offset_mm': 5},
        },
    },
}


def get_color(name: str) -> colors.Color:
    """Look up a palette colour by its theme name."""
    return CERTIFICATE_THEME['colors'][name]


def get_role_style(role: str) -> dict:
    """
    Get the typography block for a line role.

    Args:
        role: Role value such as "title" or "body"

    Returns:
        Style dictionary with font, size, color, advance_mm and rule keys

    Example:
        >>> get_role_style('course')['size']
        18
    """
    return CERTIFICATE_THEME['roles'][role]
