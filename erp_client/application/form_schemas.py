"""
===============================================================================
TARJETA CRC — application/form_schemas.py
===============================================================================

Módulo:
    Tablas de validación por entidad (mensajes en portugués, como en la UI)

Responsabilidades:
    - Declarar, por formulario, campo -> reglas y reglas cruzadas.
    - Ser la única fuente de las reglas de formulario del cliente.

Colaboradores:
    - application.forms (motor genérico)
    - services/* y application.auth_service (consumidores)
===============================================================================
"""

from __future__ import annotations

from .forms import (
    Cnpj,
    Email,
    FormSchema,
    Integer,
    IsNumber,
    MaxLength,
    MaxValue,
    MinLength,
    MinValue,
    OneOf,
    Pattern,
    Positive,
    Required,
    at_least_one_of,
    fields_match,
    when_equals,
)

_PASSWORD_MIN = MinLength(6, "Senha deve ter no mínimo 6 caracteres")

# -----------------------------------------------------------------------------
# Auth
# -----------------------------------------------------------------------------

LOGIN = FormSchema(
    name="login",
    fields={
        "email": [Required("E-mail inválido"), Email("E-mail inválido")],
        "password": [Required(_PASSWORD_MIN.message), _PASSWORD_MIN],
    },
)

REGISTER = FormSchema(
    name="register",
    fields={
        "nome": [
            Required("Nome deve ter no mínimo 3 caracteres"),
            MinLength(3, "Nome deve ter no mínimo 3 caracteres"),
        ],
        "email": [Required("E-mail inválido"), Email("E-mail inválido")],
        "password": [Required(_PASSWORD_MIN.message), _PASSWORD_MIN],
        "confirmPassword": [],
    },
    cross_rules=[fields_match("password", "confirmPassword", "As senhas não coincidem")],
)

FORGOT_PASSWORD = FormSchema(
    name="forgot_password",
    fields={"email": [Required("E-mail inválido"), Email("E-mail inválido")]},
)

RESET_PASSWORD = FormSchema(
    name="reset_password",
    fields={
        "token": [Required("Token é obrigatório")],
        "password": [Required(_PASSWORD_MIN.message), _PASSWORD_MIN],
        "confirmPassword": [],
    },
    cross_rules=[fields_match("password", "confirmPassword", "As senhas não coincidem")],
)

PROFILE = FormSchema(
    name="profile",
    fields={
        "nome": [MinLength(3, "Nome deve ter no mínimo 3 caracteres")],
        "email": [Email("E-mail inválido")],
        "newPassword": [_PASSWORD_MIN],
    },
)

# -----------------------------------------------------------------------------
# Empresa / usuarios / cargos
# -----------------------------------------------------------------------------

EMPRESA = FormSchema(
    name="empresa",
    fields={
        "nome": [
            Required("Nome é obrigatório"),
            MinLength(3, "Nome deve ter no mínimo 3 caracteres"),
        ],
        "cnpj": [Cnpj()],
        "email": [Required("E-mail é obrigatório"), Email("E-mail inválido")],
        "estado": [MaxLength(2, "Use a sigla do estado")],
    },
)

USUARIO_CREATE = FormSchema(
    name="usuario",
    fields={
        "nome": [Required("Nome é obrigatório")],
        "email": [Required("Email é obrigatório"), Email("Email inválido")],
        "password": [
            Required("Senha é obrigatória"),
            MinLength(6, "Senha deve ter pelo menos 6 caracteres"),
        ],
    },
)

USUARIO_EDIT = FormSchema(
    name="usuario",
    fields={
        "nome": [Required("Nome é obrigatório")],
        "email": [Required("Email é obrigatório"), Email("Email inválido")],
        "password": [MinLength(6, "Senha deve ter pelo menos 6 caracteres")],
    },
)

CARGO = FormSchema(
    name="cargo",
    fields={
        "nome": [Required("Nome é obrigatório")],
        "ativo": [Required("Ativo é obrigatório")],
    },
)

# -----------------------------------------------------------------------------
# RRHH
# -----------------------------------------------------------------------------

FUNCIONARIO = FormSchema(
    name="funcionario",
    fields={
        "apelido": [Required("Apelido é obrigatório")],
        "cpf": [Pattern(r"\d{11}", "CPF deve conter 11 dígitos")],
        "email": [Email("Email inválido")],
        "usuarioEmpresaId": [IsNumber("Usuário inválido")],
    },
)

CONTRATO = FormSchema(
    name="funcionario_contrato",
    fields={
        "tipoContrato": [
            Required("Tipo de contrato é obrigatório"),
            OneOf(("CLT", "PJ", "ESTAGIARIO", "TERCEIRIZADO"), "Tipo de contrato inválido"),
        ],
        "tipoPagamento": [
            Required("Tipo de pagamento é obrigatório"),
            OneOf(("HORISTA", "DIARISTA", "MENSALISTA"), "Tipo de pagamento inválido"),
        ],
        "salario": [
            Required("Salário é obrigatório"),
            Positive("Salário deve ser positivo"),
        ],
        "cargaHorariaSemanal": [Positive("Carga horária deve ser positiva")],
        "dataInicio": [Required("Data de início é obrigatória")],
    },
)

BENEFICIO_DESCONTO = FormSchema(
    name="funcionario_beneficio_desconto",
    fields={
        "tipo": [
            Required("Tipo é obrigatório"),
            OneOf(("BENEFICIO", "DESCONTO"), "Tipo inválido"),
        ],
        "descricao": [Required("Descrição é obrigatória")],
        "valorFixo": [Positive("Valor deve ser positivo")],
        "percentual": [
            MinValue(0, "Percentual deve ser maior ou igual a 0"),
            MaxValue(100, "Percentual deve ser menor ou igual a 100"),
        ],
    },
    cross_rules=[
        at_least_one_of(("valorFixo", "percentual"), "Informe valor fixo ou percentual")
    ],
)

# -----------------------------------------------------------------------------
# Financeiro
# -----------------------------------------------------------------------------

CONTA = FormSchema(
    name="conta",
    fields={
        "tipo": [
            Required("Tipo é obrigatório"),
            OneOf(("SOCIO", "EMPRESA", "BANCO", "CAIXA"), "Tipo inválido"),
        ],
        "nome": [
            Required("Nome é obrigatório"),
            MaxLength(255, "Nome deve ter no máximo 255 caracteres"),
        ],
        "saldoInicial": [
            Required("Saldo inicial é obrigatório"),
            MinValue(0, "Saldo inicial deve ser positivo"),
        ],
        "ativa": [Required("Status ativo é obrigatório")],
    },
)

CENTRO_CUSTO = FormSchema(
    name="centro_custo",
    fields={"nome": [Required("Nome é obrigatório")]},
)

TERCEIRO = FormSchema(
    name="terceiro",
    fields={
        "tipo": [
            Required("Tipo é obrigatório"),
            OneOf(("CLIENTE", "FORNECEDOR", "AMBOS"), "Tipo inválido"),
        ],
        "tipoPessoa": [
            Required("Tipo de pessoa é obrigatório"),
            OneOf(("FISICA", "JURIDICA"), "Tipo de pessoa inválido"),
        ],
        "nome": [
            Required("Nome é obrigatório"),
            MaxLength(255, "Nome deve ter no máximo 255 caracteres"),
        ],
        "documento": [Required("Documento é obrigatório")],
        "email": [Email("Email inválido")],
    },
    cross_rules=[when_equals("documento", "tipoPessoa", "JURIDICA", Cnpj("CNPJ inválido"))],
)

TRANSACAO = FormSchema(
    name="transacao_financeira",
    fields={
        "contaId": [Required("Conta é obrigatória"), Positive("Selecione uma conta")],
        "tipo": [
            Required("Tipo é obrigatório"),
            OneOf(("RECEITA", "DESPESA"), "Tipo inválido"),
        ],
        "descricao": [
            Required("Descrição é obrigatória"),
            MaxLength(255, "Descrição deve ter no máximo 255 caracteres"),
        ],
        "valor": [Required("Valor é obrigatório"), Positive("Valor deve ser positivo")],
        "data": [Required("Data é obrigatória")],
    },
)

EMPRESTIMO = FormSchema(
    name="emprestimo",
    fields={
        "funcionarioId": [Required("Funcionário é obrigatório")],
        "valorTotal": [
            Required("Valor total é obrigatório"),
            Positive("Valor deve ser positivo"),
        ],
        "totalParcelas": [
            Required("Total de parcelas é obrigatório"),
            Positive("Total de parcelas deve ser positivo"),
            Integer("Total de parcelas deve ser um número inteiro"),
        ],
        "quandoCobrar": [
            Required("Quando cobrar é obrigatório"),
            OneOf(("MENSAL", "FERIAS", "13_SALARIO", "TUDO"), "Quando cobrar inválido"),
        ],
        "dataEmprestimo": [Required("Data do empréstimo é obrigatória")],
        "dataInicioCobranca": [Required("Data início cobrança é obrigatória")],
        "status": [
            Required("Status é obrigatório"),
            OneOf(("ATIVO", "QUITADO", "CANCELADO"), "Status inválido"),
        ],
    },
)

# -----------------------------------------------------------------------------
# Compras / Tarefas
# -----------------------------------------------------------------------------

PEDIDO_COMPRA = FormSchema(
    name="pedido_compra",
    fields={
        "terceiroId": [
            Required("Fornecedor é obrigatório"),
            Positive("Selecione um fornecedor"),
        ],
        "numero": [
            Required("Número do pedido é obrigatório"),
            MaxLength(50, "Número deve ter no máximo 50 caracteres"),
        ],
        "data": [Required("Data do pedido é obrigatória")],
        "status": [
            OneOf(
                ("PENDENTE", "APROVADO", "RECUSADO", "ENTREGUE", "CANCELADO"),
                "Status inválido",
            )
        ],
        "valorTotal": [
            Required("Valor total é obrigatório"),
            MinValue(0, "Valor deve ser positivo"),
        ],
    },
)

TAREFA = FormSchema(
    name="tarefa",
    fields={
        "titulo": [Required("Título é obrigatório")],
        "tarefaTipoId": [Required("Tipo é obrigatório")],
        "status": [Required("Status é obrigatório")],
        "prioridade": [Required("Prioridade é obrigatória")],
    },
)

TAREFA_TIPO = FormSchema(
    name="tarefa_tipo",
    fields={
        "nome": [
            Required("Nome é obrigatório"),
            MaxLength(255, "Nome deve ter no máximo 255 caracteres"),
        ],
        "cor": [Pattern(r"#[0-9A-Fa-f]{6}", "Cor deve estar no formato hexadecimal (#RRGGBB)")],
    },
)

TAREFA_FUNCIONARIO_STATUS = FormSchema(
    name="tarefa_funcionario_status",
    fields={
        "funcionarioId": [Required("Funcionário é obrigatório")],
        "status": [
            OneOf(
                ("ATRIBUIDA", "EM_ANDAMENTO", "PAUSADA", "CONCLUIDA", "CANCELADA"),
                "Status inválido",
            )
        ],
    },
)
