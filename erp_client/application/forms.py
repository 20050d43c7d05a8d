"""
===============================================================================
TARJETA CRC — application/forms.py
===============================================================================

Módulo:
    Validación de formularios guiada por tablas (campo -> lista de reglas)

Responsabilidades:
    - Modelar reglas reutilizables (Required, MinLength, Email, OneOf, ...).
    - Evaluar un FormSchema sobre un payload: primer error por campo.
    - Reglas cruzadas (confirmación de contraseña, CNPJ según tipo de persona).
    - Validación parcial para updates (sólo los campos presentes).

Colaboradores:
    - application.form_schemas: tablas por entidad.
    - services.base.ResourceService: valida antes de salir a la red.
    - crosscutting.exceptions.FormValidationError

Reglas:
    - Valores vacíos (None, "", sólo espacios) sólo fallan en Required.
    - Números aceptan int/float o strings numéricos; bool NO es número.
===============================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, Sequence, Tuple

from ..crosscutting.exceptions import FormValidationError
from ..domain.value_objects import cnpj_validation_message

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def to_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip().replace(",", "."))
        except ValueError:
            return None
    return None


class Rule(Protocol):
    message: str

    def check(self, value: Any) -> Optional[str]: ...


# -----------------------------------------------------------------------------
# Reglas por campo
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Required:
    message: str = "Campo obrigatório"

    def check(self, value: Any) -> Optional[str]:
        return self.message if is_empty(value) else None


@dataclass(frozen=True)
class MinLength:
    length: int
    message: str

    def check(self, value: Any) -> Optional[str]:
        return self.message if len(str(value)) < self.length else None


@dataclass(frozen=True)
class MaxLength:
    length: int
    message: str

    def check(self, value: Any) -> Optional[str]:
        return self.message if len(str(value)) > self.length else None


@dataclass(frozen=True)
class Email:
    message: str = "E-mail inválido"

    def check(self, value: Any) -> Optional[str]:
        return None if _EMAIL_RE.match(str(value).strip()) else self.message


@dataclass(frozen=True)
class OneOf:
    choices: Tuple[str, ...]
    message: str = "Valor inválido"

    def check(self, value: Any) -> Optional[str]:
        return None if value in self.choices else self.message


@dataclass(frozen=True)
class Pattern:
    regex: str
    message: str

    def check(self, value: Any) -> Optional[str]:
        return None if re.fullmatch(self.regex, str(value)) else self.message


@dataclass(frozen=True)
class IsNumber:
    message: str = "Deve ser um número"

    def check(self, value: Any) -> Optional[str]:
        return self.message if to_number(value) is None else None


@dataclass(frozen=True)
class MinValue:
    minimum: float
    message: str

    def check(self, value: Any) -> Optional[str]:
        number = to_number(value)
        return self.message if number is None or number < self.minimum else None


@dataclass(frozen=True)
class MaxValue:
    maximum: float
    message: str

    def check(self, value: Any) -> Optional[str]:
        number = to_number(value)
        return self.message if number is None or number > self.maximum else None


@dataclass(frozen=True)
class Positive:
    message: str = "Deve ser um número positivo"

    def check(self, value: Any) -> Optional[str]:
        number = to_number(value)
        return self.message if number is None or number <= 0 else None


@dataclass(frozen=True)
class Integer:
    message: str = "Deve ser um número inteiro"

    def check(self, value: Any) -> Optional[str]:
        number = to_number(value)
        return self.message if number is None or not number.is_integer() else None


@dataclass(frozen=True)
class Cnpj:
    """Sin mensaje fijo usa el detalle (incompleto, dígitos iguales, ...)."""

    message: str = ""

    def check(self, value: Any) -> Optional[str]:
        detail = cnpj_validation_message(str(value))
        if detail is None:
            return None
        return self.message or detail


# -----------------------------------------------------------------------------
# Reglas cruzadas
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class CrossFieldRule:
    """
    Regla sobre el payload completo; el error se reporta en `field`.

    `depends_on`: en validación parcial, la regla sólo corre si TODOS esos
    campos vienen en el payload.
    """

    field: str
    predicate: Callable[[Mapping[str, Any]], bool]
    message: str
    depends_on: Tuple[str, ...] = ()

    def check(self, payload: Mapping[str, Any]) -> Optional[str]:
        return None if self.predicate(payload) else self.message


def fields_match(field_a: str, field_b: str, message: str) -> CrossFieldRule:
    return CrossFieldRule(
        field=field_b,
        predicate=lambda p: p.get(field_a) == p.get(field_b),
        message=message,
        depends_on=(field_a, field_b),
    )


def at_least_one_of(fields: Sequence[str], message: str) -> CrossFieldRule:
    return CrossFieldRule(
        field=fields[0],
        predicate=lambda p: any(not is_empty(p.get(f)) for f in fields),
        message=message,
        depends_on=tuple(fields),
    )


def when_equals(
    field: str,
    other: str,
    expected: Any,
    rule: Rule,
) -> CrossFieldRule:
    """Aplica `rule` a `field` sólo cuando payload[other] == expected."""

    def predicate(payload: Mapping[str, Any]) -> bool:
        if payload.get(other) != expected or is_empty(payload.get(field)):
            return True
        return rule.check(payload.get(field)) is None

    return CrossFieldRule(
        field=field,
        predicate=predicate,
        message=rule.message,
        depends_on=(field, other),
    )


# -----------------------------------------------------------------------------
# Schema
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class FormSchema:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      FormSchema

    Responsabilidades:
      - validate(payload, partial) -> {campo: mensaje}
      - ensure_valid(payload, partial) -> FormValidationError si hay errores

    Colaboradores:
      - Reglas (Rule / CrossFieldRule)
    ----------------------------------------------------------------------------
    """

    name: str
    fields: Mapping[str, Sequence[Rule]]
    cross_rules: Sequence[CrossFieldRule] = field(default_factory=tuple)

    def validate(
        self, payload: Mapping[str, Any], *, partial: bool = False
    ) -> Dict[str, str]:
        errors: Dict[str, str] = {}

        for name, rules in self.fields.items():
            if partial and name not in payload:
                continue
            message = _first_error(rules, payload.get(name))
            if message:
                errors[name] = message

        for cross in self.cross_rules:
            if cross.field in errors:
                continue
            if partial and not all(dep in payload for dep in cross.depends_on):
                continue
            message = cross.check(payload)
            if message:
                errors[cross.field] = message

        return errors

    def ensure_valid(self, payload: Mapping[str, Any], *, partial: bool = False) -> None:
        errors = self.validate(payload, partial=partial)
        if errors:
            raise FormValidationError(self.name, errors)


def _first_error(rules: Sequence[Rule], value: Any) -> Optional[str]:
    if is_empty(value):
        for rule in rules:
            if isinstance(rule, Required):
                return rule.check(value)
        return None
    for rule in rules:
        message = rule.check(value)
        if message:
            return message
    return None
