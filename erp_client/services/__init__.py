"""Servicios por feature (un servicio por entidad del ERP)."""

from .base import CompanyResourceService, ResourceService
from .empresas import EmpresaService, RoleService, UserService
from .financeiro import (
    CentroCustoService,
    ContaService,
    EmprestimoService,
    TerceiroService,
    TransacaoFinanceiraService,
)
from .rh import (
    FuncionarioBeneficioDescontoService,
    FuncionarioContratoService,
    FuncionarioService,
)
from .tarefas import (
    PedidoCompraService,
    TarefaFuncionarioStatusService,
    TarefaService,
    TarefaTipoService,
)

__all__ = [
    "ResourceService",
    "CompanyResourceService",
    "EmpresaService",
    "UserService",
    "RoleService",
    "FuncionarioService",
    "FuncionarioContratoService",
    "FuncionarioBeneficioDescontoService",
    "ContaService",
    "CentroCustoService",
    "TerceiroService",
    "TransacaoFinanceiraService",
    "EmprestimoService",
    "PedidoCompraService",
    "TarefaService",
    "TarefaTipoService",
    "TarefaFuncionarioStatusService",
]
