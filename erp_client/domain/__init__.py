"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio

Responsabilidades:
    - Centralizar exports para imports limpios en application/services.
    - Evitar imports profundos y acoplamientos innecesarios.

Reglas:
    - Solo re-exporta contratos/records del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .entities import (
    ApiRecord,
    AuthResponse,
    CentroCusto,
    Conta,
    Empresa,
    Emprestimo,
    Funcionario,
    FuncionarioBeneficioDesconto,
    FuncionarioContrato,
    PedidoCompra,
    Role,
    Tarefa,
    TarefaFuncionarioStatus,
    TarefaTipo,
    Terceiro,
    TransacaoFinanceira,
    User,
    UsuarioEmpresa,
)
from .services import KeyValueStorage, Navigator, Notifier
from .value_objects import (
    Notification,
    cnpj_validation_message,
    is_valid_cnpj,
    is_valid_cpf,
    mask_cnpj,
    strip_cnpj,
)

__all__ = [
    # Records
    "ApiRecord",
    "User",
    "AuthResponse",
    "Role",
    "Empresa",
    "UsuarioEmpresa",
    "Funcionario",
    "FuncionarioContrato",
    "FuncionarioBeneficioDesconto",
    "Conta",
    "CentroCusto",
    "Terceiro",
    "TransacaoFinanceira",
    "Emprestimo",
    "PedidoCompra",
    "Tarefa",
    "TarefaTipo",
    "TarefaFuncionarioStatus",
    # Ports
    "KeyValueStorage",
    "Notifier",
    "Navigator",
    # Value Objects
    "Notification",
    "mask_cnpj",
    "strip_cnpj",
    "is_valid_cnpj",
    "cnpj_validation_message",
    "is_valid_cpf",
]
