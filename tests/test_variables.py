"""
Template variable resolution tests.

Covers every placeholder and fallback, the single-pass guarantee, unknown
tokens and the course editor preview helpers.

Example usage:
    pytest tests/test_variables.py -v
"""

from datetime import date

import pytest
from freezegun import freeze_time

from core.variables import (
    DEFAULT_CERTIFICATE_TEMPLATE,
    PLACEHOLDERS,
    available_variables,
    find_unknown_tokens,
    format_long_date,
    format_number,
    preview_template,
    resolve_template,
    sample_data,
)


@pytest.fixture
def full_record(scenario_a):
    return scenario_a.model_copy(update={
        "student_cpf": "987.654.321-00",
        "start_date": "1 de fevereiro de 2024",
        "overall_score": 88.5,
        "instructor_name": "Carlos Lima",
        "instructor_title": "Coordenador",
        "city": "Recife",
        "issue_date": "12 de março de 2024",
    })


class TestResolveTemplate:

    @pytest.mark.parametrize("token,expected", [
        ("{{organizationName}}", "Instituto Esperança"),
        ("{{studentName}}", "Maria Silva"),
        ("{{studentCpf}}", "987.654.321-00"),
        ("{{courseTitle}}", "Introdução à Tecnologia"),
        ("{{courseDuration}}", "40"),
        ("{{startDate}}", "1 de fevereiro de 2024"),
        ("{{completionDate}}", "10 de março de 2024"),
        ("{{grade}}", "88.5"),
        ("{{certificateId}}", "CERT-ABC123"),
        ("{{instructorName}}", "Carlos Lima"),
        ("{{instructorTitle}}", "Coordenador"),
        ("{{issueDate}}", "12 de março de 2024"),
        ("{{city}}", "Recife"),
    ])
    def test_present_values(self, full_record, token, expected):
        assert resolve_template(token, full_record) == expected

    @pytest.mark.parametrize("token,expected", [
        ("{{studentCpf}}", "Não informado"),
        ("{{startDate}}", "Não informado"),
        ("{{grade}}", "100"),
        ("{{instructorName}}", "Equipe de Capacitação"),
        ("{{instructorTitle}}", "Instrutor(a)"),
        ("{{city}}", "São Paulo"),
    ])
    def test_fallbacks(self, scenario_a, token, expected):
        assert resolve_template(token, scenario_a) == expected

    def test_issue_date_fallback_uses_today(self, scenario_a):
        assert resolve_template("{{issueDate}}", scenario_a, today=date(2024, 3, 10)) == "10 de março de 2024"

    @freeze_time("2026-10-16")
    def test_issue_date_fallback_defaults_to_current_date(self, scenario_a):
        assert resolve_template("{{issueDate}}", scenario_a) == "16 de outubro de 2026"

    def test_zero_grade_is_not_replaced_by_fallback(self, scenario_a):
        data = scenario_a.model_copy(update={"overall_score": 0})
        assert resolve_template("{{grade}}", data) == "0"

    def test_repeated_tokens(self, scenario_a):
        assert resolve_template("{{studentName}} / {{studentName}}", scenario_a) == "Maria Silva / Maria Silva"

    def test_unknown_tokens_left_verbatim(self, scenario_a):
        template = "Olá {{nickname}}, {{ studentName }} {{StudentName}} {{studentName}}"

        resolved = resolve_template(template, scenario_a)

        assert resolved == "Olá {{nickname}}, {{ studentName }} {{StudentName}} Maria Silva"

    def test_substituted_values_not_rescanned(self, scenario_a):
        data = scenario_a.model_copy(update={
            "recipient_name": "{{studentName}}",
            "course_name": "{{city}}",
        })

        resolved = resolve_template("{{studentName}} - {{courseTitle}}", data)

        assert resolved == "{{studentName}} - {{city}}"

    def test_resubstitution_is_idempotent(self, full_record):
        once = resolve_template(DEFAULT_CERTIFICATE_TEMPLATE, full_record)
        twice = resolve_template(once, full_record)

        assert once == twice
        assert "{{" not in once

    def test_line_breaks_preserved(self, scenario_a):
        resolved = resolve_template("A\n\n{{studentName}}\r\nB", scenario_a)
        assert resolved == "A\n\nMaria Silva\r\nB"


class TestFormatting:

    @pytest.mark.parametrize("value,expected", [
        (date(2024, 1, 1), "1 de janeiro de 2024"),
        (date(2024, 3, 10), "10 de março de 2024"),
        (date(2025, 12, 31), "31 de dezembro de 2025"),
    ])
    def test_format_long_date(self, value, expected):
        assert format_long_date(value) == expected

    @pytest.mark.parametrize("value,expected", [
        (40, "40"), (40.0, "40"), (7.5, "7.5"), (0, "0"),
    ])
    def test_format_number(self, value, expected):
        assert format_number(value) == expected


class TestEditorHelpers:

    def test_available_variables_cover_table(self):
        variables = available_variables()

        assert len(variables) == len(PLACEHOLDERS) == 13
        assert variables[0] == {"token": "{{studentName}}", "description": "Nome do aluno"}
        assert {"token": "{{city}}", "description": "Cidade"} in variables

    def test_find_unknown_tokens(self):
        assert find_unknown_tokens("{{studentName}} {{foo}} {{bar}}") == ["{{foo}}", "{{bar}}"]
        assert find_unknown_tokens(DEFAULT_CERTIFICATE_TEMPLATE) == []

    def test_preview_template_uses_sample_record(self):
        preview = preview_template(DEFAULT_CERTIFICATE_TEMPLATE, course_title="Excel Básico")

        assert "Instituto Esperança certifica que" in preview
        assert "\nJoão Silva Santos\n" in preview
        assert "CPF nº 123.456.789-00" in preview
        assert "curso de Excel Básico" in preview
        assert "aproveitamento de 95%" in preview
        assert "duração de 40 horas" in preview
        assert "Certificado digital nº: CERT-2025-001234" in preview
        assert preview.endswith("Maria Silva\nInstrutora do Curso")

    def test_sample_data_defaults(self):
        data = sample_data()

        assert data.course_name == "Nome do Curso"
        assert data.course_hours == 40
        assert sample_data(course_duration=12).course_hours == 12
