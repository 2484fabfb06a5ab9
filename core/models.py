"""
Certifica Core Models

Pydantic v2 models for certificate generation inputs and the intermediate
line representation shared by the default and template layouts.

Example usage:
    from core.models import CertificateData

    data = CertificateData(
        recipientName="Maria Silva",
        courseName="Introdução à Tecnologia",
        organizationName="Instituto Esperança",
        completionDate="10 de março de 2024",
        courseHours=40,
        certificateNumber="CERT-ABC123",
    )
    print(f"{data.recipient_name} concluiu {data.course_name}")
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class LineRole(str, Enum):
    """Semantic role of one line of certificate text."""
    TITLE = "title"
    RECIPIENT = "recipient"
    COURSE = "course"
    SIGNATURE = "signature"
    BODY = "body"
    BLANK = "blank"
    # Only produced by the default layout script, never by the classifier
    ORGANIZATION = "organization"


class GenerationMode(str, Enum):
    """Document generation path selected for a record."""
    DEFAULT = "default"
    TEMPLATE = "template"


REQUIRED_TEXT_FIELDS = (
    "recipient_name",
    "course_name",
    "organization_name",
    "completion_date",
    "certificate_number",
)


class CertificateData(BaseModel):
    """
    Completion data for one certificate.

    Field names follow Python conventions; the camelCase names used by the
    platform's JSON payloads are accepted as aliases. The record is frozen
    so a generation call can never mutate it.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    recipient_name: str = Field(..., alias="recipientName", description="Learner name")
    course_name: str = Field(..., alias="courseName", description="Course title")
    course_category: str = Field("", alias="courseCategory", description="Descriptive course category")
    organization_name: str = Field(..., alias="organizationName", description="Issuing organization")
    completion_date: str = Field(..., alias="completionDate", description="Pre-formatted completion date")
    course_hours: float = Field(..., ge=0, alias="courseHours", description="Course duration in hours")
    certificate_number: str = Field(..., alias="certificateNumber", description="Unique certificate identifier")
    overall_score: Optional[float] = Field(None, alias="overallScore")
    pass_score: Optional[float] = Field(None, alias="passScore")
    verification_code: Optional[str] = Field(None, alias="verificationCode")
    custom_template: Optional[str] = Field(None, alias="customTemplate")

    # Placeholder-only fields
    student_cpf: Optional[str] = Field(None, alias="studentCpf")
    start_date: Optional[str] = Field(None, alias="startDate")
    instructor_name: Optional[str] = Field(None, alias="instructorName")
    instructor_title: Optional[str] = Field(None, alias="instructorTitle")
    city: Optional[str] = Field(None, alias="city")
    issue_date: Optional[str] = Field(None, alias="issueDate")

    @field_validator(*REQUIRED_TEXT_FIELDS)
    @classmethod
    def validate_required_text(cls, v: str) -> str:
        """Reject blank required text; a whitespace-only name would render nothing."""
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v

    @property
    def has_template(self) -> bool:
        """True when a non-blank custom template switches on template mode."""
        return bool(self.custom_template and self.custom_template.strip())

    @property
    def has_score(self) -> bool:
        return self.overall_score is not None and self.pass_score is not None


class LineStyle(BaseModel):
    """Per-line overrides applied on top of the role's theme style."""
    model_config = ConfigDict(frozen=True)

    font: Optional[str] = None
    size: Optional[float] = None
    color: Optional[str] = Field(None, description="Theme colour name")
    advance_mm: Optional[float] = None


class ComposedLine(BaseModel):
    """One line of certificate text tagged with its role."""
    model_config = ConfigDict(frozen=True)

    text: str = ""
    role: LineRole
    style: Optional[LineStyle] = None
