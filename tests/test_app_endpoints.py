"""
App Endpoints Testing for Certifica

Tests for the FastAPI application including:
- Health check
- PDF download with Content-Disposition
- Validation errors (400) and generation failures (500)
- Preview, variables and template-preview endpoints

Example usage:
    pytest tests/test_app_endpoints.py -v
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from app import create_app
from api.routes.certificates import content_disposition
from tests.helpers import SCENARIO_C_TEMPLATE, extract_pdf_text


@pytest.fixture
def client():
    return TestClient(create_app())


class TestHealth:

    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "certifica", "version": "0.1.0"}

    def test_request_id_header(self, client):
        response = client.get("/health")

        assert "X-Request-ID" in response.headers


class TestCertificatePdf:

    def test_download(self, client, record_payload, temp_dir, monkeypatch):
        monkeypatch.setenv("CERTIFICA_OUTPUT_DIR", str(temp_dir))

        response = client.post("/api/certificates/pdf", json=record_payload)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"] == (
            "attachment; filename=\"certificado_maria_silva_cert-abc123.pdf\"; "
            "filename*=UTF-8''certificado_maria_silva_cert-abc123.pdf"
        )
        assert "Maria Silva" in extract_pdf_text(response.content)
        assert list(temp_dir.iterdir()) == []

    def test_template_record(self, client, record_payload):
        record_payload["customTemplate"] = SCENARIO_C_TEMPLATE
        record_payload["verificationCode"] = "VRF-7Q2K"

        response = client.post("/api/certificates/pdf", json=record_payload)

        assert response.status_code == 200
        text = extract_pdf_text(response.content)
        assert "Equipe de Capacitação" in text
        assert "VRF-7Q2K" in text

    def test_missing_field_rejected(self, client, record_payload):
        del record_payload["certificateNumber"]

        response = client.post("/api/certificates/pdf", json=record_payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation Error"
        assert any(message.startswith("certificateNumber") for message in body["messages"])

    def test_blank_field_rejected(self, client, record_payload):
        record_payload["recipientName"] = "  "

        response = client.post("/api/certificates/pdf", json=record_payload)

        assert response.status_code == 400
        assert "must not be blank" in response.json()["messages"][0]

    def test_negative_hours_rejected(self, client, record_payload):
        record_payload["courseHours"] = -1

        response = client.post("/api/certificates/pdf", json=record_payload)

        assert response.status_code == 400
        assert "courseHours must be a non-negative number" in response.json()["hints"]

    def test_generation_failure(self, client, record_payload):
        with patch('core.render_certificate.CertificateRenderer.render', side_effect=RuntimeError("boom")):
            response = client.post("/api/certificates/pdf", json=record_payload)

        assert response.status_code == 500
        body = response.json()
        assert body["error_type"] == "CertificateGenerationError"
        assert body["details"]["filename"] == "certificado_maria_silva_cert-abc123.pdf"


class TestContentDisposition:

    def test_non_ascii_name(self):
        header = content_disposition("certificado_joão_da_silva_x1.pdf")

        assert header == (
            "attachment; filename=\"certificado_joao_da_silva_x1.pdf\"; "
            "filename*=UTF-8''certificado_jo%C3%A3o_da_silva_x1.pdf"
        )


class TestPreviewEndpoints:

    def test_preview(self, client, record_payload):
        response = client.post("/api/certificates/preview", json=record_payload)

        assert response.status_code == 200
        body = response.json()
        assert body["heading"] == "Certificado Disponível"
        assert body["duration"] == "Duração: 40h"
        assert body["mode"] == "default"

    def test_variables(self, client):
        response = client.get("/api/certificates/variables")

        assert response.status_code == 200
        body = response.json()
        assert body["variables"][0] == {"token": "{{studentName}}", "description": "Nome do aluno"}
        assert body["default_template"].startswith("CERTIFICADO")

    def test_template_preview(self, client):
        response = client.post("/api/certificates/template-preview", json={
            "template": "{{studentName}} - {{courseTitle}} - {{courseDuration}}h",
            "courseTitle": "Excel",
            "courseDuration": 8,
        })

        assert response.status_code == 200
        assert response.json() == {"preview": "João Silva Santos - Excel - 8h", "unknown_tokens": []}

    def test_template_preview_defaults(self, client):
        response = client.post("/api/certificates/template-preview", json={})

        assert response.status_code == 200
        assert "Certificado digital nº: CERT-2025-001234" in response.json()["preview"]

    def test_template_preview_lists_unknown_tokens(self, client):
        response = client.post("/api/certificates/template-preview", json={
            "template": "{{studentName}} {{nomeAluno}} {{turma}}",
        })

        assert response.status_code == 200
        body = response.json()
        assert body["preview"] == "João Silva Santos {{nomeAluno}} {{turma}}"
        assert body["unknown_tokens"] == ["{{nomeAluno}}", "{{turma}}"]
