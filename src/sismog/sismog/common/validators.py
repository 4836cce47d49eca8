from __future__ import annotations

from typing import Any, Iterable

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} é obrigatório")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} deve ter pelo menos {min_len} caracteres")
    return value


def require_choice(value: Any, field_name: str, choices: Iterable[str]) -> str:
    allowed = list(choices)
    if value not in allowed:
        raise ValidationError(f"{field_name} inválido")
    return value


def parse_bool(value: Any) -> bool:
    """Coerce HTML form values ("on", "1", "true", ...) into a bool."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in {"1", "true", "on", "yes", "sim"}


def validate_email(value: str, field_name: str = "E-mail") -> str:
    value = (value or "").strip()
    local, sep, domain = value.partition("@")
    if not local or not sep or "." not in domain or " " in value or domain.startswith(".") or domain.endswith("."):
        raise ValidationError(f"{field_name} inválido")
    return value
