"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Registros del ERP (User, Empresa, Funcionario, Conta, Tarefa, ...)

Responsabilidades:
    - Tipar las filas que devuelve la API como records planos.
    - Mapear camelCase del wire <-> snake_case de Python (aliases).
    - Conservar campos desconocidos (la API es la autoridad, no este cliente).

Colaboradores:
    - application.session_store: persiste User dentro de la sesión.
    - services/*: validan respuestas contra estos modelos.

Principios:
    - Sin invariantes del lado cliente más allá de tipos y opcionales.
    - Serialización siempre por alias (lo que la API espera).
===============================================================================
"""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Los ids llegan como número o string según el endpoint.
Id = Union[int, str]


class ApiRecord(BaseModel):
    """Base de todos los records: aliases camelCase + extras conservados."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_payload(self) -> dict:
        """Dict listo para enviar a la API (alias, sin None)."""
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class User(ApiRecord):
    id: Optional[Id] = None
    nome: Optional[str] = None
    email: Optional[str] = None
    avatar: Optional[str] = None
    empresa_id: Optional[Id] = None
    roles: Optional[List[str]] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class AuthResponse(ApiRecord):
    """Respuesta de login/register."""

    user: User
    token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None


class Role(ApiRecord):
    id: Optional[Id] = None
    empresa_id: Optional[Id] = None
    nome: Optional[str] = None
    descricao: Optional[str] = None
    permissions: Optional[List[str]] = None
    is_active: Optional[bool] = None
    ativo: Optional[bool] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


# ---------------------------------------------------------------------------
# Empresa / usuarios
# ---------------------------------------------------------------------------


class Empresa(ApiRecord):
    empresa_id: Optional[Id] = None
    nome: Optional[str] = None
    cnpj: Optional[str] = None
    razao_social: Optional[str] = None
    ativa: Optional[bool] = None
    email: Optional[str] = None
    telefone: Optional[str] = None
    endereco: Optional[str] = None
    cidade: Optional[str] = None
    estado: Optional[str] = None
    cep: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class UsuarioEmpresa(ApiRecord):
    """Usuario listado por /users (vínculo usuario <-> empresa)."""

    id: Optional[Id] = None
    usuario_id: Optional[Id] = None
    empresa_id: Optional[Id] = None
    nome: Optional[str] = None
    email: Optional[str] = None
    role_id: Optional[Id] = None
    ativo: Optional[bool] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


# ---------------------------------------------------------------------------
# RRHH
# ---------------------------------------------------------------------------


class Funcionario(ApiRecord):
    funcionario_id: Optional[Id] = None
    empresa_id: Optional[Id] = None
    usuario_empresa_id: Optional[Id] = None
    nome: Optional[str] = None
    apelido: Optional[str] = None
    cpf: Optional[str] = None
    rg: Optional[str] = None
    data_nascimento: Optional[str] = None
    endereco: Optional[str] = None
    telefone: Optional[str] = None
    email: Optional[str] = None
    ativo: Optional[bool] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class FuncionarioContrato(ApiRecord):
    contrato_id: Optional[Id] = None
    funcionario_id: Optional[Id] = None
    tipo_contrato: Optional[str] = None
    tipo_pagamento: Optional[str] = None
    forma_pagamento: Optional[str] = None
    salario: Optional[float] = None
    carga_horaria_semanal: Optional[float] = None
    data_inicio: Optional[str] = None
    data_fim: Optional[str] = None
    ativo: Optional[bool] = None
    observacoes: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class FuncionarioBeneficioDesconto(ApiRecord):
    beneficio_desconto_id: Optional[Id] = None
    contrato_id: Optional[Id] = None
    tipo: Optional[str] = None
    nome: Optional[str] = None
    descricao: Optional[str] = None
    valor: Optional[float] = None
    valor_fixo: Optional[float] = None
    percentual: Optional[float] = None
    frequencia: Optional[str] = None
    data_inicio: Optional[str] = None
    data_fim: Optional[str] = None
    ativo: Optional[bool] = None


# ---------------------------------------------------------------------------
# Financeiro
# ---------------------------------------------------------------------------


class Conta(ApiRecord):
    id: Optional[Id] = None
    conta_id: Optional[Id] = None
    empresa_id: Optional[Id] = None
    tipo: Optional[str] = None
    nome: Optional[str] = None
    saldo_inicial: Optional[float] = None
    saldo_atual: Optional[float] = None
    ativa: Optional[bool] = None


class CentroCusto(ApiRecord):
    centro_custo_id: Optional[Id] = None
    empresa_id: Optional[Id] = None
    nome: Optional[str] = None
    descricao: Optional[str] = None
    ativo: Optional[bool] = None


class Terceiro(ApiRecord):
    id: Optional[Id] = None
    empresa_id: Optional[Id] = None
    tipo: Optional[str] = None
    tipo_pessoa: Optional[str] = None
    nome: Optional[str] = None
    cpf_cnpj: Optional[str] = None
    documento: Optional[str] = None
    telefone: Optional[str] = None
    email: Optional[str] = None
    endereco: Optional[str] = None
    cidade: Optional[str] = None
    estado: Optional[str] = None
    cep: Optional[str] = None
    is_active: Optional[bool] = None


class TransacaoFinanceira(ApiRecord):
    id: Optional[Id] = None
    empresa_id: Optional[Id] = None
    conta_id: Optional[Id] = None
    tipo: Optional[str] = None
    categoria: Optional[str] = None
    valor: Optional[float] = None
    data: Optional[str] = None
    data_vencimento: Optional[str] = None
    data_pagamento: Optional[str] = None
    descricao: Optional[str] = None
    terceiro_id: Optional[Id] = None
    centro_custo_id: Optional[Id] = None
    status: Optional[str] = None


class Emprestimo(ApiRecord):
    id: Optional[Id] = None
    empresa_id: Optional[Id] = None
    funcionario_id: Optional[Id] = None
    valor_total: Optional[float] = None
    total_parcelas: Optional[int] = None
    parcelas_pagas: Optional[int] = None
    quando_cobrar: Optional[str] = None
    data_emprestimo: Optional[str] = None
    data_inicio_cobranca: Optional[str] = None
    status: Optional[str] = None
    observacoes: Optional[str] = None


# ---------------------------------------------------------------------------
# Compras / Tarefas
# ---------------------------------------------------------------------------


class PedidoCompra(ApiRecord):
    id: Optional[Id] = None
    empresa_id: Optional[Id] = None
    terceiro_id: Optional[Id] = None
    numero: Optional[str] = None
    data: Optional[str] = None
    data_entrega_prevista: Optional[str] = None
    status: Optional[str] = None
    valor_total: Optional[float] = None
    observacoes: Optional[str] = None


class TarefaTipo(ApiRecord):
    id: Optional[Id] = None
    empresa_id: Optional[Id] = None
    nome: Optional[str] = None
    descricao: Optional[str] = None
    cor: Optional[str] = None
    ativo: Optional[bool] = None


class Tarefa(ApiRecord):
    id: Optional[Id] = None
    empresa_id: Optional[Id] = None
    tarefa_tipo_id: Optional[Id] = None
    titulo: Optional[str] = None
    descricao: Optional[str] = None
    prioridade: Optional[str] = None
    status: Optional[str] = None
    data_prazo: Optional[str] = None
    responsavel_id: Optional[Id] = None


class TarefaFuncionarioStatus(ApiRecord):
    id: Optional[Id] = None
    tarefa_id: Optional[Id] = None
    funcionario_id: Optional[Id] = None
    empresa_id: Optional[Id] = None
    status: Optional[str] = None
    data_inicio: Optional[str] = None
    data_fim: Optional[str] = None
    observacoes: Optional[str] = None
    horas_trabalhadas: Optional[float] = None
    percentual_concluido: Optional[float] = None
