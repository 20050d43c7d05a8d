"""
===============================================================================
MÓDULO: Paginación de colecciones de la API (page/limit)
===============================================================================

Objetivo
--------
Listados consistentes para todas las features:
- QueryParams -> query string que entiende la API (page, limit, search, ...)
- Page[T] genérico con metadata (total, total_pages, has_next/has_prev)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  QueryParams + Page[T]

Responsabilidades:
  - Validar parámetros de paginación antes de salir a la red
  - Calcular total_pages cuando la API no lo envía

Colaboradores:
  - infrastructure/http/envelope.py (arma Page desde el body)
  - services/* (reciben QueryParams)
===============================================================================
"""

from __future__ import annotations

import math
from typing import Any, Dict, Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class QueryParams(BaseModel):
    """Filtros de listado. `filters` viaja tal cual (ej: {"funcionarioId": 3})."""

    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1)
    search: Optional[str] = None
    sort_by: Optional[str] = None
    sort_order: Optional[Literal["asc", "desc"]] = None
    filters: Dict[str, Any] = Field(default_factory=dict)

    def to_query(self) -> dict[str, Any]:
        query: dict[str, Any] = {"page": self.page, "limit": self.limit}
        if self.search and self.search.strip():
            query["search"] = self.search.strip()
        if self.sort_by:
            query["sortBy"] = self.sort_by
        if self.sort_order:
            query["sortOrder"] = self.sort_order
        for key, value in self.filters.items():
            if value is not None:
                query[key] = value
        return query


class Page(BaseModel, Generic[T]):
    items: List[T] = Field(description="Items de la página actual")
    total: int = Field(0, description="Total de registros en el servidor")
    page: int = Field(1, description="Página actual (1-based)")
    limit: int = Field(10, description="Tamaño de página")
    total_pages: Optional[int] = Field(None, description="Total de páginas")

    def model_post_init(self, __context: Any) -> None:
        if self.total_pages is None:
            self.total_pages = math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_next(self) -> bool:
        return self.page < (self.total_pages or 0)

    @property
    def has_prev(self) -> bool:
        return self.page > 1
