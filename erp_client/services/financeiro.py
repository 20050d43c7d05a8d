"""
===============================================================================
TARJETA CRC — services/financeiro.py
===============================================================================

Servicios (por empresa):
    ContaService, CentroCustoService, TerceiroService,
    TransacaoFinanceiraService, EmprestimoService

Responsabilidades:
    - CRUD financiero con el envelope propio de cada recurso:
      terceiros responde sin wrapper (página plana + record crudo),
      el resto con {data} y página anidada.

Colaboradores:
    - services.base.CompanyResourceService
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from ..application import form_schemas
from ..crosscutting.pagination import Page, QueryParams
from ..domain.entities import (
    CentroCusto,
    Conta,
    Emprestimo,
    Id,
    Terceiro,
    TransacaoFinanceira,
)
from ..infrastructure.http import envelope
from ..infrastructure.http.api_client import ApiClient
from .base import CompanyResourceService


class ContaService(CompanyResourceService[Conta]):
    resource = "contas"

    def __init__(self, api: ApiClient, empresa_id: Id, *, default_page_size: int = 10) -> None:
        super().__init__(
            api,
            empresa_id,
            model=Conta,
            schema=form_schemas.CONTA,
            default_page_size=default_page_size,
        )


class CentroCustoService(CompanyResourceService[CentroCusto]):
    resource = "centro-custos"

    def __init__(self, api: ApiClient, empresa_id: Id, *, default_page_size: int = 10) -> None:
        super().__init__(
            api,
            empresa_id,
            model=CentroCusto,
            schema=form_schemas.CENTRO_CUSTO,
            default_page_size=default_page_size,
        )


class TerceiroService(CompanyResourceService[Terceiro]):
    resource = "terceiros"

    def __init__(self, api: ApiClient, empresa_id: Id, *, default_page_size: int = 10) -> None:
        super().__init__(
            api,
            empresa_id,
            model=Terceiro,
            list_envelope=envelope.flat_page,
            item_envelope=envelope.raw,
            schema=form_schemas.TERCEIRO,
            default_page_size=default_page_size,
        )


class TransacaoFinanceiraService(CompanyResourceService[TransacaoFinanceira]):
    resource = "transacao-financeiras"

    def __init__(self, api: ApiClient, empresa_id: Id, *, default_page_size: int = 10) -> None:
        super().__init__(
            api,
            empresa_id,
            model=TransacaoFinanceira,
            schema=form_schemas.TRANSACAO,
            default_page_size=default_page_size,
        )


class EmprestimoService(CompanyResourceService[Emprestimo]):
    resource = "emprestimos"

    def __init__(self, api: ApiClient, empresa_id: Id, *, default_page_size: int = 10) -> None:
        super().__init__(
            api,
            empresa_id,
            model=Emprestimo,
            schema=form_schemas.EMPRESTIMO,
            default_page_size=default_page_size,
        )

    def search(
        self, term: Optional[str] = None, *, page: int = 1, limit: Optional[int] = None
    ) -> Page[Emprestimo]:
        params = QueryParams(page=page, limit=limit or self._default_page_size, search=term)
        return self.list(params)
