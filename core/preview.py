"""
On-screen certificate preview.

A lightweight summary of the record shown for confirmation before the
PDF is exported. No document is rendered here.
"""

from typing import Optional

from pydantic import BaseModel

from core.models import CertificateData, GenerationMode
from core.render_certificate import certificate_filename, select_mode
from core.variables import format_number

PREVIEW_HEADING = "Certificado Disponível"


class CertificatePreview(BaseModel):
    """Summary card for a certificate that is ready to export."""
    heading: str = PREVIEW_HEADING
    recipient_name: str
    course_name: str
    completion: str
    duration: str
    mode: GenerationMode
    filename: str
    verification_code: Optional[str] = None


def build_preview(data: CertificateData) -> CertificatePreview:
    return CertificatePreview(
        recipient_name=data.recipient_name,
        course_name=data.course_name,
        completion=f"Concluído em {data.completion_date}",
        duration=f"Duração: {format_number(data.course_hours)}h",
        mode=select_mode(data),
        filename=certificate_filename(data),
        verification_code=data.verification_code,
    )


def render_preview_text(preview: CertificatePreview) -> str:
    """Plain-text rendering of the preview card."""
    lines = [
        preview.heading,
        preview.course_name,
        "",
        preview.recipient_name,
        preview.completion,
        preview.duration,
    ]
    if preview.verification_code:
        lines.append(f"Código de Verificação: {preview.verification_code}")
    return "\n".join(lines)
