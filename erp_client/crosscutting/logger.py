"""
===============================================================================
MÓDULO: Logging del cliente ERP (líneas JSON, sin credenciales)
===============================================================================

Cada línea lleva nivel, logger y mensaje, el request saliente en curso (si hay)
y los `extra=` del call site. Las credenciales de sesión y de login nunca se
escriben: las claves sensibles se redactan y un valor "Bearer ..." suelto
pierde el token aunque venga bajo una clave inocente.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JSONFormatter + setup_logger()

Responsabilidades:
  - Serializar LogRecord -> JSON (una línea)
  - Sumar request_id / method / path del request en curso
  - Redactar credenciales y acotar valores grandes

Colaboradores:
  - erp_client/context.py (request saliente)
  - crosscutting/config.py (log_level, log_json)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from ..context import get_context_dict

REDACTED = "***REDACTADO***"
MAX_VALUE_CHARS = 4_000
MAX_DEPTH = 4

# Comparadas sin mayúsculas, "_" ni "-": refreshToken == refresh_token.
SENSITIVE_KEYS = frozenset(
    {
        "password",
        "confirmpassword",
        "currentpassword",
        "newpassword",
        "token",
        "accesstoken",
        "refreshtoken",
        "authorization",
        "cookie",
        "setcookie",
        "secret",
    }
)

# Atributos propios de LogRecord; el resto vino por extra=.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def _is_sensitive(key: str) -> bool:
    return key.lower().replace("_", "").replace("-", "") in SENSITIVE_KEYS


def redact(value: Any, *, key: str | None = None, depth: int = 0) -> Any:
    if key is not None and _is_sensitive(key):
        return REDACTED
    if depth > MAX_DEPTH:
        return "…"
    if isinstance(value, str):
        if value.startswith("Bearer "):
            return "Bearer " + REDACTED
        if len(value) > MAX_VALUE_CHARS:
            return value[:MAX_VALUE_CHARS] + "…(truncado)"
        return value
    if isinstance(value, dict):
        return {str(k): redact(v, key=str(k), depth=depth + 1) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [redact(v, depth=depth + 1) for v in value]
    if value is None or isinstance(value, (bool, int, float)):
        return value
    return str(value)


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        line.update(get_context_dict())
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                line[key] = redact(value, key=key)
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, separators=(",", ":"))


def setup_logger(name: str = "erp-client") -> logging.Logger:
    """
    Logger del paquete. Si Settings no carga (env inválido), arranca con
    INFO + JSON y el error aparece recién en build_client().
    """
    level, use_json = "INFO", True
    try:
        from .config import get_settings

        settings = get_settings()
        level, use_json = (settings.log_level or "INFO").upper(), settings.log_json
    except ValueError:
        pass

    log = logging.getLogger(name)
    log.setLevel(getattr(logging, level, logging.INFO))
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            JSONFormatter() if use_json else logging.Formatter("%(levelname)s %(message)s")
        )
        log.addHandler(handler)
    return log


logger = setup_logger()
