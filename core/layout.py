"""
Certifica Layout Compositor

Turns an ordered list of role-tagged lines into absolute draw instructions
on a landscape A4 page, then applies them to a ReportLab canvas.

Composition is pure: ``compose`` threads an immutable ``LayoutCursor``
through the lines and returns a ``ComposedLayout``. Drawing happens in a
``CertificateRenderer`` bound to one canvas for one generation call, so
concurrent generations never share layout state.

Page structure:
- Two concentric borders (heavy brand outer, light accent inner)
- Each line centred individually from its measured width
- Rules under title/recipient lines spanning the measured text width
- Footer metadata pinned to the bottom corners, independent of the cursor

Example usage:
    from core.layout import compose, CertificateRenderer

    layout = compose(lines, data)
    CertificateRenderer(canvas_obj).render(layout)
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from reportlab.lib import colors
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth

from core.models import CertificateData, ComposedLine, LineRole
from core.theme import CERTIFICATE_THEME, PAGE_SIZE, get_color, get_role_style

PAGE_WIDTH, PAGE_HEIGHT = PAGE_SIZE


@dataclass(frozen=True)
class LayoutCursor:
    """Vertical position measured in millimetres from the top of the page."""
    top_mm: float = CERTIFICATE_THEME['page']['cursor_start_mm']

    @property
    def y(self) -> float:
        """Baseline in ReportLab points (origin bottom-left)."""
        return PAGE_HEIGHT - self.top_mm * mm

    def advance(self, delta_mm: float) -> "LayoutCursor":
        return LayoutCursor(self.top_mm + delta_mm)


@dataclass(frozen=True)
class ResolvedStyle:
    font: Optional[str]
    size: float
    color: Optional[colors.Color]
    advance_mm: float
    rule: Optional[dict]


@dataclass(frozen=True)
class TextInstruction:
    text: str
    x: float
    y: float
    font: str
    size: float
    color: colors.Color
    role: Optional[LineRole] = None

    @property
    def width(self) -> float:
        return stringWidth(self.text, self.font, self.size)


@dataclass(frozen=True)
class RuleInstruction:
    x1: float
    x2: float
    y: float
    width: float
    color: colors.Color


@dataclass(frozen=True)
class RectInstruction:
    x: float
    y: float
    width: float
    height: float
    line_width: float
    color: colors.Color


Instruction = Union[TextInstruction, RuleInstruction, RectInstruction]


@dataclass
class ComposedLayout:
    """Ordered draw instructions for one page."""
    instructions: List[Instruction] = field(default_factory=list)
    cursor: LayoutCursor = field(default_factory=LayoutCursor)

    @property
    def texts(self) -> List[TextInstruction]:
        return [i for i in self.instructions if isinstance(i, TextInstruction)]

    @property
    def rules(self) -> List[RuleInstruction]:
        return [i for i in self.instructions if isinstance(i, RuleInstruction)]

    @property
    def overflows(self) -> bool:
        """
        True when body content reaches the footer band.

        Overflowing lines are still drawn; this only reports the condition.
        """
        footer_cfg = CERTIFICATE_THEME['footer']
        footer_top = footer_cfg['baseline_mm'] * mm + footer_cfg['size']
        return any(t.y <= footer_top for t in self.texts if t.role is not None)


def resolve_style(line: ComposedLine) -> ResolvedStyle:
    """Merge a line's optional overrides over its role style from the theme."""
    base = get_role_style(line.role.value)
    override = line.style

    font = base['font']
    size = base['size']
    color_name = base['color']
    advance_mm = base['advance_mm']

    if override is not None:
        font = override.font or font
        size = override.size if override.size is not None else size
        color_name = override.color or color_name
        advance_mm = override.advance_mm if override.advance_mm is not None else advance_mm

    return ResolvedStyle(
        font=font,
        size=size,
        color=get_color(color_name) if color_name else None,
        advance_mm=advance_mm,
        rule=base['rule'],
    )


def centered_x(text: str, font: str, size: float, page_width: float = PAGE_WIDTH) -> Tuple[float, float]:
    """Return (x, width) placing ``text`` centred horizontally on the page."""
    width = stringWidth(text, font, size)
    return (page_width - width) / 2, width


def frame_instructions() -> List[RectInstruction]:
    """Outer and inner decorative borders."""
    rects = []
    for key in ('outer', 'inner'):
        border = CERTIFICATE_THEME['borders'][key]
        inset = border['inset_mm'] * mm
        rects.append(RectInstruction(
            x=inset,
            y=inset,
            width=PAGE_WIDTH - 2 * inset,
            height=PAGE_HEIGHT - 2 * inset,
            line_width=border['width'],
            color=get_color(border['color']),
        ))
    return rects


def place_line(line: ComposedLine, cursor: LayoutCursor) -> Tuple[List[Instruction], LayoutCursor]:
    """
    Position one line at the cursor.

    Args:
        line: Role-tagged line
        cursor: Current vertical position

    Returns:
        Instructions for the line and the advanced cursor
    """
    style = resolve_style(line)

    if line.role is LineRole.BLANK or not line.text:
        return [], cursor.advance(style.advance_mm)

    x, width = centered_x(line.text, style.font, style.size)
    y = cursor.y
    placed: List[Instruction] = [TextInstruction(
        text=line.text,
        x=x,
        y=y,
        font=style.font,
        size=style.size,
        color=style.color,
        role=line.role,
    )]

    if style.rule:
        placed.append(RuleInstruction(
            x1=x,
            x2=x + width,
            y=y - style.rule['offset_mm'] * mm,
            width=style.rule['width'],
            color=get_color(style.rule['color']),
        ))

    return placed, cursor.advance(style.advance_mm)


def footer_instructions(data: CertificateData) -> List[TextInstruction]:
    """
    Certificate number bottom-left and verification code bottom-right.

    Positions are absolute so the footer survives any amount of body text.
    """
    cfg = CERTIFICATE_THEME['footer']
    font, size = cfg['font'], cfg['size']
    color = get_color(cfg['color'])
    margin = cfg['margin_mm'] * mm
    y = cfg['baseline_mm'] * mm

    footer = [TextInstruction(
        text=f"{cfg['certificate_label']}: {data.certificate_number}",
        x=margin,
        y=y,
        font=font,
        size=size,
        color=color,
    )]

    if data.verification_code:
        text = f"{cfg['verification_label']}: {data.verification_code}"
        footer.append(TextInstruction(
            text=text,
            x=PAGE_WIDTH - stringWidth(text, font, size) - margin,
            y=y,
            font=font,
            size=size,
            color=color,
        ))

    return footer


def compose(lines: List[ComposedLine], data: CertificateData) -> ComposedLayout:
    """
    Lay out a full certificate page.

    Args:
        lines: Ordered role-tagged lines from either generation path
        data: Record supplying footer metadata

    Returns:
        ComposedLayout with frame, line and footer instructions
    """
    instructions: List[Instruction] = list(frame_instructions())
    cursor = LayoutCursor()

    for line in lines:
        placed, cursor = place_line(line, cursor)
        instructions.extend(placed)

    instructions.extend(footer_instructions(data))
    return ComposedLayout(instructions=instructions, cursor=cursor)


class CertificateRenderer:
    """Applies a composed layout to a single ReportLab canvas."""

    def __init__(self, canvas_obj):
        self.canvas = canvas_obj

    def render(self, layout: ComposedLayout) -> None:
        self.canvas.saveState()
        for instruction in layout.instructions:
            if isinstance(instruction, RectInstruction):
                self._draw_rect(instruction)
            elif isinstance(instruction, RuleInstruction):
                self._draw_rule(instruction)
            else:
                self._draw_text(instruction)
        self.canvas.restoreState()

    def _draw_rect(self, rect: RectInstruction) -> None:
        self.canvas.setStrokeColor(rect.color)
        self.canvas.setLineWidth(rect.line_width)
        self.canvas.rect(rect.x, rect.y, rect.width, rect.height, stroke=1, fill=0)

    def _draw_rule(self, rule: RuleInstruction) -> None:
        self.canvas.setStrokeColor(rule.color)
        self.canvas.setLineWidth(rule.width)
        self.canvas.line(rule.x1, rule.y, rule.x2, rule.y)

    def _draw_text(self, text: TextInstruction) -> None:
        self.canvas.setFont(text.font, text.size)
        self.canvas.setFillColor(text.color)
        self.canvas.drawString(text.x, text.y, text.text)
