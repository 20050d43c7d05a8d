"""Adapters de infraestructura: cliente HTTP, interceptor y envelopes."""

from . import envelope
from .api_client import ApiClient
from .error_interceptor import ErrorInterceptor, normalize_path

__all__ = ["ApiClient", "ErrorInterceptor", "envelope", "normalize_path"]
