"""
Certifica Test Configuration and Shared Fixtures

Provides pytest fixtures for completion records, templates and temporary
output directories used across the certificate test suite.

Example usage:
    def test_default_layout(scenario_a, temp_dir):
        result = generate_certificate_pdf(scenario_a, output_dir=temp_dir)
"""

import shutil
import tempfile
from pathlib import Path

import pytest

from core.models import CertificateData
from tests.helpers import SCENARIO_C_TEMPLATE


@pytest.fixture
def temp_dir():
    """
    Provide a temporary directory that is cleaned up after test.

    Returns:
        Path: Temporary directory path
    """
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def record_payload():
    """Camel-case JSON payload as the platform sends it."""
    return {
        "recipientName": "Maria Silva",
        "courseName": "Introdução à Tecnologia",
        "courseCategory": "Tecnologia",
        "organizationName": "Instituto Esperança",
        "completionDate": "10 de março de 2024",
        "courseHours": 40,
        "certificateNumber": "CERT-ABC123",
    }


@pytest.fixture
def scenario_a(record_payload):
    """Default-mode record without scores or verification code."""
    return CertificateData.model_validate(record_payload)


@pytest.fixture
def scenario_b(scenario_a):
    """Default-mode record with both performance figures."""
    return scenario_a.model_copy(update={"overall_score": 92, "pass_score": 70})


@pytest.fixture
def scenario_c():
    """Template-mode record with a short template and no instructor."""
    return CertificateData(
        recipient_name="Ana",
        course_name="Excel",
        organization_name="Instituto Esperança",
        completion_date="5 de maio de 2024",
        course_hours=8,
        certificate_number="CERT-EXC001",
        custom_template=SCENARIO_C_TEMPLATE,
    )


@pytest.fixture
def verified_record(scenario_a):
    return scenario_a.model_copy(update={"verification_code": "VRF-7Q2K"})
