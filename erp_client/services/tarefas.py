"""
===============================================================================
TARJETA CRC — services/tarefas.py
===============================================================================

Servicios (por empresa):
    PedidoCompraService, TarefaService, TarefaTipoService,
    TarefaFuncionarioStatusService

Responsabilidades:
    - CRUD de pedidos de compra y tareas con cambio de estado (PATCH /status).
    - Tipos de tarea (lista simple) con activación.
    - Asignaciones tarea <-> funcionario, filtradas por tarea o por funcionario.

Colaboradores:
    - services.base.CompanyResourceService
===============================================================================
"""

from __future__ import annotations

from typing import List

from ..application import form_schemas
from ..domain.entities import Id, PedidoCompra, Tarefa, TarefaFuncionarioStatus, TarefaTipo
from ..infrastructure.http import envelope
from ..infrastructure.http.api_client import ApiClient
from .base import CompanyResourceService, T


class _StatusService(CompanyResourceService[T]):
    """PATCH {id}/status con {status}."""

    def update_status(self, id: Id, status: str) -> T:
        response = self._api.patch(self._url(id, "status"), json={"status": status})
        return self._unwrap_item(response)


class PedidoCompraService(_StatusService[PedidoCompra]):
    resource = "pedido-compras"

    def __init__(self, api: ApiClient, empresa_id: Id, *, default_page_size: int = 10) -> None:
        super().__init__(
            api,
            empresa_id,
            model=PedidoCompra,
            schema=form_schemas.PEDIDO_COMPRA,
            default_page_size=default_page_size,
        )


class TarefaService(_StatusService[Tarefa]):
    resource = "tarefas"

    def __init__(self, api: ApiClient, empresa_id: Id, *, default_page_size: int = 10) -> None:
        super().__init__(
            api,
            empresa_id,
            model=Tarefa,
            schema=form_schemas.TAREFA,
            default_page_size=default_page_size,
        )


class TarefaTipoService(CompanyResourceService[TarefaTipo]):
    resource = "tarefa-tipos"

    def __init__(self, api: ApiClient, empresa_id: Id) -> None:
        super().__init__(
            api,
            empresa_id,
            model=TarefaTipo,
            list_envelope=envelope.data_list,
            schema=form_schemas.TAREFA_TIPO,
        )

    def toggle_active(self, tipo_id: Id, ativo: bool) -> TarefaTipo:
        response = self._api.patch(self._url(tipo_id, "toggle-ativo"), json={"ativo": ativo})
        return self._unwrap_item(response)


class TarefaFuncionarioStatusService(_StatusService[TarefaFuncionarioStatus]):
    resource = "tarefa-funcionario-status"

    def __init__(self, api: ApiClient, empresa_id: Id) -> None:
        super().__init__(
            api,
            empresa_id,
            model=TarefaFuncionarioStatus,
            list_envelope=envelope.data_list,
            schema=form_schemas.TAREFA_FUNCIONARIO_STATUS,
        )

    def list_by_task(self, tarefa_id: Id) -> List[TarefaFuncionarioStatus]:
        return self.list({"tarefaId": tarefa_id})

    def list_by_employee(self, funcionario_id: Id) -> List[TarefaFuncionarioStatus]:
        return self.list({"funcionarioId": funcionario_id})
