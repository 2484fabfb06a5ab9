"""
Certifica CLI Main Module

Command-line interface for Certifica using Typer.
Generates certificate PDFs and previews from JSON completion records.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from core.errors import CertificateError
from core.models import CertificateData
from core.preview import build_preview, render_preview_text
from core.render_certificate import generate_certificate_pdf
from core.variables import (
    DEFAULT_CERTIFICATE_TEMPLATE, available_variables, find_unknown_tokens, preview_template,
)

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)

app = typer.Typer(
    name="certifica",
    help="Certifica - Course completion certificate generator",
    add_completion=False
)


def load_record(record_json: Path, template: Optional[Path] = None) -> CertificateData:
    """
    Load a completion record from a JSON file.

    Args:
        record_json: JSON object using the platform's camelCase field names
        template: Optional text file overriding ``customTemplate``

    Raises:
        typer.Exit: If the file is missing, unreadable or fails validation
    """
    if not record_json.exists():
        typer.echo(f"Record file not found: {record_json}", err=True)
        raise typer.Exit(1)

    try:
        payload = json.loads(record_json.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        typer.echo(f"Invalid JSON in {record_json}: {e}", err=True)
        raise typer.Exit(1)

    if template is not None:
        if not template.exists():
            typer.echo(f"Template file not found: {template}", err=True)
            raise typer.Exit(1)
        payload["customTemplate"] = template.read_text(encoding="utf-8")

    try:
        return CertificateData.model_validate(payload)
    except ValidationError as e:
        typer.echo("Invalid certificate record:", err=True)
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            typer.echo(f"  - {field}: {error['msg']}", err=True)
        raise typer.Exit(1)


@app.command()
def generate(
    record_json: Path = typer.Argument(..., help="Path to certificate record JSON"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Directory for the generated PDF"),
    template: Optional[Path] = typer.Option(None, "--template", "-t", help="Custom template text file")
) -> None:
    """
    Generate a certificate PDF from a completion record.

    Uses the record's custom template when present, otherwise the default
    layout. The file name is derived from the recipient and certificate number.
    """
    data = load_record(record_json, template)

    try:
        result = generate_certificate_pdf(data, output_dir=output_dir)
    except CertificateError as e:
        typer.echo(f"Failed to generate certificate: {e}", err=True)
        logger.exception("Certificate generation failed")
        raise typer.Exit(1)

    typer.echo("✓ Certificate generated successfully")
    typer.echo(f"  Mode: {result.mode.value}")
    typer.echo(f"  Path: {result.path}")
    typer.echo(f"  Size: {result.size_bytes:,} bytes")


@app.command()
def preview(
    record_json: Path = typer.Argument(..., help="Path to certificate record JSON"),
    as_json: bool = typer.Option(False, "--json", help="Print the preview as JSON")
) -> None:
    """Show the certificate summary without generating the PDF."""
    data = load_record(record_json)
    card = build_preview(data)

    if as_json:
        typer.echo(card.model_dump_json(indent=2))
    else:
        typer.echo(render_preview_text(card))
        typer.echo("")
        typer.echo(f"Arquivo: {card.filename}")


@app.command()
def variables() -> None:
    """List the placeholders available to certificate templates."""
    for variable in available_variables():
        typer.echo(f"{variable['token']:<22} {variable['description']}")


@app.command("template-preview")
def template_preview(
    template: Optional[Path] = typer.Argument(None, help="Template text file (default template if omitted)"),
    course_title: Optional[str] = typer.Option(None, "--course-title", help="Course title for the sample record"),
    course_duration: Optional[float] = typer.Option(None, "--course-duration", help="Course hours for the sample record")
) -> None:
    """Resolve a template against sample data, as the course editor preview does."""
    if template is None:
        text = DEFAULT_CERTIFICATE_TEMPLATE
    elif not template.exists():
        typer.echo(f"Template file not found: {template}", err=True)
        raise typer.Exit(1)
    else:
        text = template.read_text(encoding="utf-8")

    for token in find_unknown_tokens(text):
        typer.echo(f"Warning: unknown placeholder {token} is left as written", err=True)

    typer.echo(preview_template(text, course_title=course_title, course_duration=course_duration))


if __name__ == "__main__":
    app()
