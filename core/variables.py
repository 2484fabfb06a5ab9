"""
Template variable resolution for operator-authored certificates.

Templates are free text with ``{{identifier}}`` tokens. Resolution is one
regex pass: each token is looked up in ``PLACEHOLDERS`` and replaced by
the record's value or its fallback. Unknown identifiers are left exactly
as written, and replacement text is never scanned again.

Example usage:
    from core.variables import resolve_template

    text = resolve_template("{{studentName}} - {{courseTitle}}", data)
"""

import re
from datetime import date
from typing import Callable, Dict, List, Optional, Tuple

from core.models import CertificateData

TOKEN_PATTERN = re.compile(r"\{\{([A-Za-z_][A-Za-z0-9_]*)\}\}")

NOT_INFORMED = "Não informado"
DEFAULT_GRADE = "100"
DEFAULT_INSTRUCTOR_NAME = "Equipe de Capacitação"
DEFAULT_INSTRUCTOR_TITLE = "Instrutor(a)"
DEFAULT_CITY = "São Paulo"

MONTHS_PT_BR = (
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
)

DEFAULT_CERTIFICATE_TEMPLATE = """CERTIFICADO

{{organizationName}} certifica que

{{studentName}}

CPF nº {{studentCpf}}, concluiu o curso de {{courseTitle}}, com aproveitamento de {{grade}}% e duração de {{courseDuration}} horas, no período de {{startDate}} a {{completionDate}}.

{{city}}, {{issueDate}}.

Certificado digital nº: {{certificateId}}

___________________________
{{instructorName}}
{{instructorTitle}}"""


def format_long_date(value: date) -> str:
    """
    Format a date the way pt-BR long dates read.

    Example:
        >>> format_long_date(date(2024, 3, 10))
        '10 de março de 2024'
    """
    return f"{value.day} de {MONTHS_PT_BR[value.month - 1]} de {value.year}"


def format_number(value: float) -> str:
    """Render a number without a trailing ``.0`` for integral values."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


Resolver = Callable[[CertificateData, date], str]

# token -> (resolver, editor description); order is the editor's display order
PLACEHOLDERS: Dict[str, Tuple[Resolver, str]] = {
    "studentName": (lambda d, today: d.recipient_name, "Nome do aluno"),
    "studentCpf": (lambda d, today: d.student_cpf or NOT_INFORMED, "CPF do aluno"),
    "courseTitle": (lambda d, today: d.course_name, "Título do curso"),
    "courseDuration": (lambda d, today: format_number(d.course_hours), "Duração em horas"),
    "startDate": (lambda d, today: d.start_date or NOT_INFORMED, "Data de início"),
    "completionDate": (lambda d, today: d.completion_date, "Data de conclusão"),
    "grade": (
        lambda d, today: format_number(d.overall_score) if d.overall_score is not None else DEFAULT_GRADE,
        "Nota final (%)",
    ),
    "certificateId": (lambda d, today: d.certificate_number, "ID único do certificado"),
    "organizationName": (lambda d, today: d.organization_name, "Nome da organização"),
    "instructorName": (lambda d, today: d.instructor_name or DEFAULT_INSTRUCTOR_NAME, "Nome do instrutor"),
    "instructorTitle": (lambda d, today: d.instructor_title or DEFAULT_INSTRUCTOR_TITLE, "Cargo do instrutor"),
    "issueDate": (lambda d, today: d.issue_date or format_long_date(today), "Data de emissão"),
    "city": (lambda d, today: d.city or DEFAULT_CITY, "Cidade"),
}


def resolve_template(template: str, data: CertificateData, today: Optional[date] = None) -> str:
    """
    Substitute every recognized placeholder in a template.

    Args:
        template: Operator-authored text with ``{{identifier}}`` tokens
        data: Certificate record supplying the values
        today: Date used for the ``issueDate`` fallback (defaults to today)

    Returns:
        Resolved text; unknown tokens are kept verbatim
    """
    if today is None:
        today = date.today()

    def _substitute(match: re.Match) -> str:
        entry = PLACEHOLDERS.get(match.group(1))
        if entry is None:
            return match.group(0)
        resolver, _ = entry
        return resolver(data, today)

    return TOKEN_PATTERN.sub(_substitute, template)


def find_unknown_tokens(template: str) -> List[str]:
    """List tokens in a template that the resolver will leave untouched."""
    return [
        match.group(0)
        for match in TOKEN_PATTERN.finditer(template)
        if match.group(1) not in PLACEHOLDERS
    ]


def available_variables() -> List[Dict[str, str]]:
    """
    Describe the placeholders operators can use.

    Returns:
        List of {"token": "{{name}}", "description": ...} in display order
    """
    return [
        {"token": "{{%s}}" % name, "description": description}
        for name, (_, description) in PLACEHOLDERS.items()
    ]


def sample_data(course_title: Optional[str] = None, course_duration: Optional[float] = None) -> CertificateData:
    """Fixed example record used to preview templates in the course editor."""
    return CertificateData(
        recipient_name="João Silva Santos",
        course_name=course_title or "Nome do Curso",
        organization_name="Instituto Esperança",
        completion_date="30 de janeiro de 2025",
        course_hours=course_duration if course_duration is not None else 40,
        certificate_number="CERT-2025-001234",
        overall_score=95,
        student_cpf="123.456.789-00",
        start_date="10 de janeiro de 2025",
        instructor_name="Maria Silva",
        instructor_title="Instrutora do Curso",
        issue_date="30 de janeiro de 2025",
        city="São Paulo",
    )


def preview_template(
    template: str,
    course_title: Optional[str] = None,
    course_duration: Optional[float] = None
) -> str:
    """Resolve a template against the editor's sample record."""
    return resolve_template(template, sample_data(course_title, course_duration))
