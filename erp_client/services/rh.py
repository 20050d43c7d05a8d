"""
===============================================================================
TARJETA CRC — services/rh.py
===============================================================================

Servicios (por empresa):
    FuncionarioService, FuncionarioContratoService,
    FuncionarioBeneficioDescontoService

Responsabilidades:
    - CRUD de funcionarios (página anidada + búsqueda).
    - Contratos por funcionario y activación/desactivación.
    - Beneficios/descuentos por contrato.

Colaboradores:
    - services.base.CompanyResourceService
===============================================================================
"""

from __future__ import annotations

from typing import List, Optional

from ..application import form_schemas
from ..crosscutting.pagination import Page, QueryParams
from ..domain.entities import Funcionario, FuncionarioBeneficioDesconto, FuncionarioContrato, Id
from ..infrastructure.http import envelope
from ..infrastructure.http.api_client import ApiClient
from .base import CompanyResourceService


class FuncionarioService(CompanyResourceService[Funcionario]):
    resource = "funcionarios"

    def __init__(self, api: ApiClient, empresa_id: Id, *, default_page_size: int = 10) -> None:
        super().__init__(
            api,
            empresa_id,
            model=Funcionario,
            schema=form_schemas.FUNCIONARIO,
            default_page_size=default_page_size,
        )

    def search(
        self, term: Optional[str] = None, *, page: int = 1, limit: Optional[int] = None
    ) -> Page[Funcionario]:
        params = QueryParams(page=page, limit=limit or self._default_page_size, search=term)
        return self.list(params)


class FuncionarioContratoService(CompanyResourceService[FuncionarioContrato]):
    resource = "funcionario-contratos"

    def __init__(self, api: ApiClient, empresa_id: Id) -> None:
        super().__init__(
            api,
            empresa_id,
            model=FuncionarioContrato,
            list_envelope=envelope.data_list,
            schema=form_schemas.CONTRATO,
        )

    def list_by_employee(self, funcionario_id: Id) -> List[FuncionarioContrato]:
        return self.list({"funcionarioId": funcionario_id})

    def toggle_active(self, contrato_id: Id) -> FuncionarioContrato:
        response = self._api.patch(self._url(contrato_id, "toggle-active"))
        return self._unwrap_item(response)


class FuncionarioBeneficioDescontoService(
    CompanyResourceService[FuncionarioBeneficioDesconto]
):
    resource = "funcionario-beneficio-descontos"

    def __init__(self, api: ApiClient, empresa_id: Id) -> None:
        super().__init__(
            api,
            empresa_id,
            model=FuncionarioBeneficioDesconto,
            list_envelope=envelope.data_list,
            schema=form_schemas.BENEFICIO_DESCONTO,
        )

    def list_by_contract(self, contrato_id: Id) -> List[FuncionarioBeneficioDesconto]:
        return self.list({"contratoId": contrato_id})
