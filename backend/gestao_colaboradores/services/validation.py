"""Payload checks for employee records.

Every check runs on each call and all violations are returned together, so a
client sees every problem with its payload in a single 400 response.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date
from typing import Any

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\(?\d{2}\)?\s?\d{4,5}-?\d{4}$")
DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

MIN_TEXT_LENGTH = 2
MAX_LENGTHS = {
    "nome": 100,
    "cargo": 100,
    "departamento": 50,
    "email": 255,
}

_REQUIRED_TEXT_MESSAGES = {
    "nome": "Nome é obrigatório e deve ter pelo menos 2 caracteres",
    "cargo": "Cargo é obrigatório e deve ter pelo menos 2 caracteres",
    "departamento": "Departamento é obrigatório e deve ter pelo menos 2 caracteres",
}
_LABELS = {"nome": "Nome", "cargo": "Cargo", "departamento": "Departamento", "email": "Email"}

EMAIL_MESSAGE = "Email é obrigatório e deve ser válido"
PHONE_MESSAGE = "Telefone deve estar no formato (11) 99999-9999"
DATE_MESSAGE = "Data de admissão deve ser uma data válida no formato YYYY-MM-DD"
ATIVO_MESSAGE = "Ativo deve ser verdadeiro ou falso"
ID_MESSAGE = "ID é obrigatório"


def is_valid_email(email: Any) -> bool:
    return isinstance(email, str) and EMAIL_RE.fullmatch(email) is not None


def is_valid_phone(telefone: Any) -> bool:
    return isinstance(telefone, str) and PHONE_RE.fullmatch(telefone) is not None


def is_valid_date(value: Any) -> bool:
    """True for a YYYY-MM-DD string naming a real calendar day."""
    if not isinstance(value, str) or DATE_RE.fullmatch(value) is None:
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def _is_present(value: Any) -> bool:
    return value is not None and value != ""


def validate_colaborador_payload(
    body: Mapping[str, Any],
    *,
    strict: bool = False,
    partial: bool = False,
) -> list[str]:
    """Return the list of violations for a record payload (empty when valid).

    ``strict`` adds the phone, admission date and maximum length checks.
    ``partial`` only checks the fields present in ``body``, as for updates.
    """
    errors: list[str] = []

    for field, message in _REQUIRED_TEXT_MESSAGES.items():
        if partial and field not in body:
            continue
        value = body.get(field)
        if not isinstance(value, str) or len(value.strip()) < MIN_TEXT_LENGTH:
            errors.append(message)

    if not partial or "email" in body:
        if not is_valid_email(body.get("email")):
            errors.append(EMAIL_MESSAGE)

    if strict:
        for field, max_length in MAX_LENGTHS.items():
            value = body.get(field)
            if isinstance(value, str) and len(value) > max_length:
                errors.append(f"{_LABELS[field]} deve ter no máximo {max_length} caracteres")

        telefone = body.get("telefone")
        if _is_present(telefone) and not is_valid_phone(telefone):
            errors.append(PHONE_MESSAGE)

        data_admissao = body.get("dataAdmissao")
        if _is_present(data_admissao) and not is_valid_date(data_admissao):
            errors.append(DATE_MESSAGE)

    if partial and "ativo" in body and not isinstance(body["ativo"], bool):
        errors.append(ATIVO_MESSAGE)

    return errors


def validate_id(colaborador_id: Any) -> str | None:
    """Return a violation message when the path id is empty or blank."""
    if not isinstance(colaborador_id, str) or not colaborador_id.strip():
        return ID_MESSAGE
    return None
