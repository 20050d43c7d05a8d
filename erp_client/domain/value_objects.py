# =============================================================================
# FILE: domain/value_objects.py
# =============================================================================
"""
===============================================================================
DOMAIN: Value Objects (Immutable Domain Primitives)
===============================================================================

Name:
    Domain Value Objects

Qué es:
    Objetos de valor inmutables y funciones puras sobre documentos brasileños.

Contenido:
    - Notification: mensaje visible al usuario (toast) con nivel y campo opcional
    - CNPJ: máscara, limpieza y validación de dígitos verificadores
    - CPF: validación de dígitos verificadores

Principios:
    - Inmutabilidad (frozen dataclasses)
    - Sin side effects
===============================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final, Literal, Optional

NotificationLevel = Literal["success", "error", "warning", "info"]

_NON_DIGITS: Final[re.Pattern[str]] = re.compile(r"\D")
_CNPJ_LENGTH: Final[int] = 14
_CPF_LENGTH: Final[int] = 11
_CNPJ_FIRST_WEIGHTS: Final[tuple[int, ...]] = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
_CNPJ_SECOND_WEIGHTS: Final[tuple[int, ...]] = (6,) + _CNPJ_FIRST_WEIGHTS


# -----------------------------------------------------------------------------
# Notification
# -----------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class Notification:
    """
    Mensaje fire-and-forget para el usuario.

    Attributes:
        level: success | error | warning | info
        message: Texto a mostrar (ya localizado)
        field: Campo del formulario al que refiere (errores 422), si aplica
    """

    level: NotificationLevel
    message: str
    field: Optional[str] = None


# -----------------------------------------------------------------------------
# CNPJ
# -----------------------------------------------------------------------------
def strip_cnpj(value: str) -> str:
    """Quita todo lo que no sea dígito."""
    return _NON_DIGITS.sub("", value or "")


def mask_cnpj(value: str) -> str:
    """Aplica la máscara XX.XXX.XXX/XXXX-XX de forma progresiva."""
    digits = strip_cnpj(value)[:_CNPJ_LENGTH]
    if len(digits) <= 2:
        return digits
    if len(digits) <= 5:
        return f"{digits[:2]}.{digits[2:]}"
    if len(digits) <= 8:
        return f"{digits[:2]}.{digits[2:5]}.{digits[5:]}"
    if len(digits) <= 12:
        return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:]}"
    return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"


def _cnpj_check_digit(digits: list[int], weights: tuple[int, ...]) -> int:
    remainder = sum(d * w for d, w in zip(digits, weights)) % 11
    return 0 if remainder < 2 else 11 - remainder


def is_valid_cnpj(value: str) -> bool:
    """
    Valida un CNPJ (con o sin máscara).

    Vacío es válido: el campo es opcional en los formularios.
    """
    numeric = strip_cnpj(value)
    if numeric == "":
        return True
    if len(numeric) != _CNPJ_LENGTH:
        return False
    if len(set(numeric)) == 1:
        return False

    digits = [int(c) for c in numeric]
    if digits[12] != _cnpj_check_digit(digits[:12], _CNPJ_FIRST_WEIGHTS):
        return False
    return digits[13] == _cnpj_check_digit(digits[:13], _CNPJ_SECOND_WEIGHTS)


def cnpj_validation_message(value: str) -> Optional[str]:
    """Mensaje de error detallado, o None si es válido."""
    numeric = strip_cnpj(value)
    if numeric == "":
        return None
    if len(numeric) < _CNPJ_LENGTH:
        return f"CNPJ incompleto ({len(numeric)}/14 dígitos)"
    if len(numeric) > _CNPJ_LENGTH:
        return "CNPJ deve ter exatamente 14 dígitos"
    if len(set(numeric)) == 1:
        return "CNPJ não pode ter todos os dígitos iguais"
    if not is_valid_cnpj(numeric):
        return "CNPJ com dígitos verificadores inválidos"
    return None


# -----------------------------------------------------------------------------
# CPF
# -----------------------------------------------------------------------------
def is_valid_cpf(value: str) -> bool:
    """Valida un CPF de 11 dígitos (con o sin máscara)."""
    numeric = _NON_DIGITS.sub("", value or "")
    if len(numeric) != _CPF_LENGTH or len(set(numeric)) == 1:
        return False

    digits = [int(c) for c in numeric]
    for position in (9, 10):
        total = sum(d * w for d, w in zip(digits[:position], range(position + 1, 1, -1)))
        check = (total * 10) % 11
        if check == 10:
            check = 0
        if digits[position] != check:
            return False
    return True
