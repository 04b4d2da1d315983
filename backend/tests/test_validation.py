"""Unit tests for payload and id validation."""

from __future__ import annotations

import pytest

from gestao_colaboradores.services.validation import (
    DATE_MESSAGE,
    EMAIL_MESSAGE,
    ID_MESSAGE,
    PHONE_MESSAGE,
    is_valid_date,
    is_valid_email,
    validate_colaborador_payload,
    validate_id,
)

VALID_PAYLOAD = {
    "nome": "Ana Souza",
    "cargo": "Analista",
    "departamento": "RH",
    "email": "ana@x.com",
}


def test_valid_payload_has_no_errors() -> None:
    assert validate_colaborador_payload(VALID_PAYLOAD) == []
    assert validate_colaborador_payload(VALID_PAYLOAD, strict=True) == []


def test_collects_every_violation() -> None:
    errors = validate_colaborador_payload({"cargo": "x"})
    assert len(errors) == 4
    assert any(e.startswith("Nome") for e in errors)
    assert any(e.startswith("Cargo") for e in errors)
    assert any(e.startswith("Departamento") for e in errors)
    assert EMAIL_MESSAGE in errors


def test_only_cargo_provided_reports_the_others() -> None:
    errors = validate_colaborador_payload({"cargo": "Analista"})
    assert len(errors) == 3
    assert not any(e.startswith("Cargo") for e in errors)


def test_trailing_newline_is_not_accepted() -> None:
    payload = {**VALID_PAYLOAD, "email": "ana@x.com\n", "telefone": "(11) 99999-9999\n"}
    assert validate_colaborador_payload(payload, strict=True) == [EMAIL_MESSAGE, PHONE_MESSAGE]
    assert is_valid_date("2023-01-15\n") is False


def test_missing_email_is_rejected() -> None:
    payload = {k: v for k, v in VALID_PAYLOAD.items() if k != "email"}
    assert validate_colaborador_payload(payload) == [EMAIL_MESSAGE]


def test_whitespace_is_trimmed_before_length_check() -> None:
    errors = validate_colaborador_payload({**VALID_PAYLOAD, "nome": "  A  "})
    assert errors == ["Nome é obrigatório e deve ter pelo menos 2 caracteres"]


def test_non_string_fields_are_rejected() -> None:
    errors = validate_colaborador_payload({**VALID_PAYLOAD, "nome": 123, "email": ["a@b.com"]})
    assert len(errors) == 2


@pytest.mark.parametrize(
    ("email", "valid"),
    [
        ("ana@x.com", True),
        ("ana.souza@empresa.com.br", True),
        ("ana@x", False),
        ("ana x@y.com", False),
        ("@x.com", False),
        ("", False),
    ],
)
def test_email_shape(email: str, valid: bool) -> None:
    assert is_valid_email(email) is valid


def test_strict_checks_phone_and_date() -> None:
    payload = {**VALID_PAYLOAD, "telefone": "12345", "dataAdmissao": "15/01/2023"}
    assert validate_colaborador_payload(payload) == []
    errors = validate_colaborador_payload(payload, strict=True)
    assert errors == [PHONE_MESSAGE, DATE_MESSAGE]


def test_strict_accepts_known_phone_formats() -> None:
    for telefone in ("(11) 99999-9999", "11999999999", "(11) 3333-4444"):
        payload = {**VALID_PAYLOAD, "telefone": telefone}
        assert validate_colaborador_payload(payload, strict=True) == []


def test_strict_optional_fields_may_be_empty() -> None:
    payload = {**VALID_PAYLOAD, "telefone": "", "dataAdmissao": None}
    assert validate_colaborador_payload(payload, strict=True) == []


@pytest.mark.parametrize(
    ("value", "valid"),
    [
        ("2023-01-15", True),
        ("2024-02-29", True),
        ("2023-02-29", False),
        ("2023-13-01", False),
        ("2023-1-5", False),
        (20230115, False),
    ],
)
def test_admission_date(value: object, valid: bool) -> None:
    assert is_valid_date(value) is valid


def test_strict_enforces_max_lengths() -> None:
    payload = {**VALID_PAYLOAD, "departamento": "D" * 51}
    assert validate_colaborador_payload(payload, strict=True) == ["Departamento deve ter no máximo 50 caracteres"]


def test_partial_only_checks_present_fields() -> None:
    assert validate_colaborador_payload({}, partial=True) == []
    assert validate_colaborador_payload({"cargo": "Gerente"}, partial=True) == []
    assert validate_colaborador_payload({"email": "invalido"}, partial=True) == [EMAIL_MESSAGE]


def test_partial_rejects_non_boolean_ativo() -> None:
    errors = validate_colaborador_payload({"ativo": "sim"}, partial=True)
    assert errors == ["Ativo deve ser verdadeiro ou falso"]


@pytest.mark.parametrize("value", ["", "   ", None])
def test_validate_id_rejects_blank(value: object) -> None:
    assert validate_id(value) == ID_MESSAGE


def test_validate_id_accepts_text() -> None:
    assert validate_id("abc") is None
