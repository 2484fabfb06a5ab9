"""
Certifica Certificate Generator

Creates single-page landscape A4 completion certificates with ReportLab.
Two generation paths share one compositor:

- Default path: a fixed script of lines (title, lead-ins, recipient,
  course, category, duration, optional score, completion date,
  organization signature heading)
- Template path: the operator's custom template, resolved and classified
  line by line

The exporter derives the file name and delivers the PDF into the output
directory in one step; a failure leaves no file behind.

Example usage:
    from core.models import CertificateData
    from core.render_certificate import generate_certificate_pdf

    result = generate_certificate_pdf(data, output_dir="certificates")
    print(result.path)
"""

import os
import re
import tempfile
from dataclasses import dataclass
from datetime import date
from io import BytesIO
from pathlib import Path
from typing import List, Optional, Tuple, Union

from reportlab.pdfgen import canvas

from core.classify import TITLE_WORD, classify_template
from core.errors import CertificateGenerationError, MissingRequiredFieldError
from core.layout import CertificateRenderer, ComposedLayout, compose
from core.logging import get_logger
from core.models import (
    REQUIRED_TEXT_FIELDS, CertificateData, ComposedLine, GenerationMode,
    LineRole, LineStyle,
)
from core.theme import PAGE_SIZE
from core.variables import format_number, resolve_template

logger = get_logger(__name__)

FILE_PREFIX = "certificado"
FILE_EXTENSION = ".pdf"
DEFAULT_OUTPUT_DIR = "certificates"
# Base-14 fonts draw WinAnsi text only
FONT_ENCODING = "cp1252"

_PATH_SEPARATORS = re.compile(r"[\\/]")

_LEAD_IN = LineStyle(size=16, color='grey')


@dataclass(frozen=True)
class GeneratedCertificate:
    """A delivered certificate document."""
    filename: str
    content: bytes
    mode: GenerationMode
    path: Optional[Path] = None

    @property
    def size_bytes(self) -> int:
        return len(self.content)


def select_mode(data: CertificateData) -> GenerationMode:
    """Template mode iff the custom template is non-blank."""
    return GenerationMode.TEMPLATE if data.has_template else GenerationMode.DEFAULT


def build_default_script(data: CertificateData) -> List[ComposedLine]:
    """
    Fixed line script for certificates without a custom template.

    Only the score line depends on content: it appears when both the
    overall and pass scores are present.
    """
    script = [
        ComposedLine(text=TITLE_WORD, role=LineRole.TITLE),
        ComposedLine(text="Certificamos que", role=LineRole.BODY, style=_LEAD_IN),
        ComposedLine(text=data.recipient_name, role=LineRole.RECIPIENT),
        ComposedLine(text="concluiu com êxito o curso", role=LineRole.BODY, style=_LEAD_IN),
        ComposedLine(text=data.course_name, role=LineRole.COURSE, style=LineStyle(size=22)),
        ComposedLine(
            text=f"Categoria: {data.course_category}",
            role=LineRole.BODY,
            style=LineStyle(font='Helvetica-Oblique', color='grey', advance_mm=10),
        ),
        ComposedLine(
            text=f"Carga Horária: {format_number(data.course_hours)} horas",
            role=LineRole.BODY,
            style=LineStyle(size=12, color='grey', advance_mm=8),
        ),
    ]

    if data.has_score:
        script.append(ComposedLine(
            text=(
                f"Aproveitamento: {format_number(data.overall_score)}% "
                f"(Nota mínima: {format_number(data.pass_score)}%)"
            ),
            role=LineRole.BODY,
            style=LineStyle(size=12, color='grey', advance_mm=8),
        ))

    script.extend([
        ComposedLine(
            text=f"Concluído em {data.completion_date}",
            role=LineRole.BODY,
            style=LineStyle(size=12, color='grey', advance_mm=14),
        ),
        ComposedLine(text=data.organization_name, role=LineRole.ORGANIZATION),
    ])
    return script


def build_template_script(data: CertificateData, today: Optional[date] = None) -> List[ComposedLine]:
    """Resolve the custom template and classify each resulting line."""
    resolved = resolve_template(data.custom_template or "", data, today=today)
    return classify_template(resolved, data)


def build_script(data: CertificateData, today: Optional[date] = None) -> Tuple[GenerationMode, List[ComposedLine]]:
    """Pick the generation path for a record and build its line script."""
    mode = select_mode(data)
    if mode is GenerationMode.TEMPLATE:
        return mode, build_template_script(data, today=today)
    return mode, build_default_script(data)


def certificate_filename(data: CertificateData) -> str:
    """
    Derive the download name: ``certificado_<name>_<number>.pdf``.

    Example:
        "João da Silva" + "X1" -> "certificado_joão_da_silva_x1.pdf"
    """
    name = re.sub(r"\s+", "_", data.recipient_name.strip())
    name = _PATH_SEPARATORS.sub("-", name)
    number = _PATH_SEPARATORS.sub("-", data.certificate_number.strip())
    return f"{FILE_PREFIX}_{name}_{number}".lower() + FILE_EXTENSION


def check_required_fields(data: CertificateData) -> None:
    """
    Raise MissingRequiredFieldError for absent or blank required fields.

    Validated records always pass; this guards records built without
    validation.
    """
    missing = [
        name for name in REQUIRED_TEXT_FIELDS
        if not isinstance(getattr(data, name, None), str) or not getattr(data, name).strip()
    ]
    if missing:
        raise MissingRequiredFieldError(missing)


def unsupported_characters(layout: ComposedLayout) -> List[str]:
    """Characters in the layout's text that fall outside the font encoding."""
    found = set()
    for text in layout.texts:
        for char in text.text:
            try:
                char.encode(FONT_ENCODING)
            except UnicodeEncodeError:
                found.add(char)
    return sorted(found)


def render_certificate_pdf(data: CertificateData, today: Optional[date] = None) -> bytes:
    """
    Compose and export a certificate as PDF bytes.

    Args:
        data: Certificate record
        today: Date for the ``issueDate`` fallback in template mode

    Returns:
        PDF document content; equal inputs produce equal bytes
    """
    _, lines = build_script(data, today=today)
    layout = compose(lines, data)

    missing_glyphs = unsupported_characters(layout)
    if missing_glyphs:
        logger.warning(
            "Certificate text has characters the fonts cannot draw",
            extra={
                "certificate_number": data.certificate_number,
                "characters": missing_glyphs,
            }
        )

    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=PAGE_SIZE, invariant=1)
    pdf.setTitle(f"Certificado - {data.recipient_name}")
    pdf.setAuthor(data.organization_name)
    pdf.setSubject(data.course_name)
    pdf.setCreator("Certifica")

    CertificateRenderer(pdf).render(layout)
    pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def _deliver(content: bytes, filename: str, output_dir: Path) -> Path:
    """Write the document atomically; the final path only ever holds a complete file."""
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / filename

    temp_fd, temp_path = tempfile.mkstemp(dir=str(output_dir), suffix=FILE_EXTENSION + ".part")
    try:
        with os.fdopen(temp_fd, 'wb') as f:
            f.write(content)
        os.replace(temp_path, target)
    except BaseException:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise

    return target


def generate_certificate_pdf(
    data: CertificateData,
    output_dir: Optional[Union[str, Path]] = None,
    today: Optional[date] = None,
    deliver: bool = True
) -> GeneratedCertificate:
    """
    Generate a certificate and deliver it as a file.

    Args:
        data: Certificate record
        output_dir: Destination directory (defaults to ``CERTIFICA_OUTPUT_DIR``
            or ./certificates)
        today: Date for the ``issueDate`` fallback in template mode
        deliver: When False the document is returned without being written

    Returns:
        GeneratedCertificate with filename, content and delivered path

    Raises:
        MissingRequiredFieldError: If a required field is absent
        CertificateGenerationError: If rendering, export or delivery fails
    """
    try:
        check_required_fields(data)
    except MissingRequiredFieldError as e:
        logger.error(
            "Certificate generation failed",
            extra={
                "certificate_number": getattr(data, "certificate_number", None),
                "missing_fields": e.missing_fields,
                "error": str(e),
            }
        )
        raise

    mode = select_mode(data)
    filename = certificate_filename(data)

    try:
        content = render_certificate_pdf(data, today=today)
        path = None
        if deliver:
            directory = Path(output_dir or os.environ.get("CERTIFICA_OUTPUT_DIR", DEFAULT_OUTPUT_DIR))
            path = _deliver(content, filename, directory)
    except Exception as e:
        logger.error(
            "Certificate generation failed",
            extra={
                "certificate_file": filename,
                "certificate_number": data.certificate_number,
                "mode": mode.value,
                "error": str(e),
            },
            exc_info=True
        )
        raise CertificateGenerationError(
            f"Failed to generate certificate {filename}", filename=filename, cause=e
        ) from e

    logger.info(
        "Certificate generated",
        extra={
            "certificate_file": filename,
            "certificate_number": data.certificate_number,
            "mode": mode.value,
            "size_bytes": len(content),
            "delivered_to": str(path) if path else None,
        }
    )
    return GeneratedCertificate(filename=filename, content=content, mode=mode, path=path)
