"""
Certificate API routes

Render certificates for download and expose the preview helpers used by
the course editor.
"""

import unicodedata
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Request
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict, Field

from core.logging import get_logger, log_with_context
from core.models import CertificateData
from core.preview import build_preview
from core.render_certificate import generate_certificate_pdf
from core.variables import (
    DEFAULT_CERTIFICATE_TEMPLATE, available_variables, find_unknown_tokens, preview_template,
)

router = APIRouter(prefix="/api/certificates", tags=["certificates"])
logger = get_logger(__name__)


class TemplatePreviewRequest(BaseModel):
    """Template text plus optional course details for the sample record."""
    model_config = ConfigDict(populate_by_name=True)

    template: str = DEFAULT_CERTIFICATE_TEMPLATE
    course_title: Optional[str] = Field(None, alias="courseTitle")
    course_duration: Optional[float] = Field(None, alias="courseDuration", ge=0)


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback and the UTF-8 name."""
    ascii_name = unicodedata.normalize("NFKD", filename).encode("ascii", "ignore").decode("ascii")
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"


@router.post("/pdf")
async def download_certificate(data: CertificateData, request: Request):
    """
    Generate a certificate and return it as a PDF download
    """
    result = generate_certificate_pdf(data, deliver=False)

    log_with_context(
        logger, "info", "Certificate served",
        request=request,
        certificate_file=result.filename,
        mode=result.mode.value,
        size_bytes=result.size_bytes,
    )

    return Response(
        content=result.content,
        media_type="application/pdf",
        headers={"Content-Disposition": content_disposition(result.filename)}
    )


@router.post("/preview")
async def certificate_preview(data: CertificateData):
    """
    Summary card for on-screen confirmation before export
    """
    return build_preview(data).model_dump(mode="json")


@router.get("/variables")
async def list_variables():
    """
    Placeholders available to certificate templates
    """
    return {
        "variables": available_variables(),
        "default_template": DEFAULT_CERTIFICATE_TEMPLATE,
    }


@router.post("/template-preview")
async def template_preview(body: TemplatePreviewRequest):
    """
    Resolve a template against the editor's sample record.

    Tokens the resolver does not know are listed in ``unknown_tokens``.
    """
    return {
        "preview": preview_template(
            body.template,
            course_title=body.course_title,
            course_duration=body.course_duration,
        ),
        "unknown_tokens": find_unknown_tokens(body.template),
    }
