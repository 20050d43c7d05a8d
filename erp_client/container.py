"""
===============================================================================
TARJETA CRC — erp_client/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (storages, session store, cliente HTTP, servicios).
  - Exponer un facade único (ErpClient) con factories por empresa.
  - Centralizar decisiones runtime basadas en Settings (config).

Colaboradores:
  - crosscutting.config.get_settings
  - domain.services.* (puertos)
  - infrastructure.* (implementaciones)
  - application.* / services.* (casos de uso)

Patrones aplicados:
  - Composition Root
  - Dependency Inversion (servicios dependen de puertos)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Un SessionStore por ErpClient: el mismo que lee el ApiClient y el que
    vacía el interceptor ante una sesión expirada.
===============================================================================
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from .application.auth_service import AuthService
from .application.remember_me import RememberMeCache
from .application.session_store import SessionStore
from .crosscutting.config import Settings, get_settings
from .domain.entities import Id
from .domain.services import KeyValueStorage, Navigator, Notifier
from .infrastructure.http import ApiClient, ErrorInterceptor
from .infrastructure.notifications import LoggingNotifier, RecordingNavigator
from .infrastructure.storage import CookieStorage, LocalFileStorage, SessionStorage
from .services import (
    CentroCustoService,
    ContaService,
    EmpresaService,
    EmprestimoService,
    FuncionarioBeneficioDescontoService,
    FuncionarioContratoService,
    FuncionarioService,
    PedidoCompraService,
    RoleService,
    TarefaFuncionarioStatusService,
    TarefaService,
    TarefaTipoService,
    TerceiroService,
    TransacaoFinanceiraService,
    UserService,
)


class ErpClient:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      ErpClient

    Responsabilidades:
      - Dar acceso a session, api, auth y servicios globales
      - Construir servicios por empresa (funcionarios(empresa_id), ...)
      - Cerrar el cliente HTTP al terminar

    Colaboradores:
      - build_client (lo instancia)
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        *,
        settings: Settings,
        session: SessionStore,
        api: ApiClient,
        auth: AuthService,
        remember_me: RememberMeCache,
        notifier: Notifier,
        navigator: Navigator,
    ) -> None:
        self.settings = settings
        self.session = session
        self.api = api
        self.auth = auth
        self.remember_me = remember_me
        self.notifier = notifier
        self.navigator = navigator

        page_size = settings.default_page_size
        self.empresas = EmpresaService(api, default_page_size=page_size)
        self.users = UserService(api, default_page_size=page_size)
        self.roles = RoleService(api, default_page_size=page_size)

    # =========================================================================
    # Servicios por empresa
    # =========================================================================

    def funcionarios(self, empresa_id: Id) -> FuncionarioService:
        return FuncionarioService(self.api, empresa_id, default_page_size=self._page_size)

    def contratos(self, empresa_id: Id) -> FuncionarioContratoService:
        return FuncionarioContratoService(self.api, empresa_id)

    def beneficios_descontos(self, empresa_id: Id) -> FuncionarioBeneficioDescontoService:
        return FuncionarioBeneficioDescontoService(self.api, empresa_id)

    def contas(self, empresa_id: Id) -> ContaService:
        return ContaService(self.api, empresa_id, default_page_size=self._page_size)

    def centros_custo(self, empresa_id: Id) -> CentroCustoService:
        return CentroCustoService(self.api, empresa_id, default_page_size=self._page_size)

    def terceiros(self, empresa_id: Id) -> TerceiroService:
        return TerceiroService(self.api, empresa_id, default_page_size=self._page_size)

    def transacoes(self, empresa_id: Id) -> TransacaoFinanceiraService:
        return TransacaoFinanceiraService(
            self.api, empresa_id, default_page_size=self._page_size
        )

    def emprestimos(self, empresa_id: Id) -> EmprestimoService:
        return EmprestimoService(self.api, empresa_id, default_page_size=self._page_size)

    def pedidos_compra(self, empresa_id: Id) -> PedidoCompraService:
        return PedidoCompraService(self.api, empresa_id, default_page_size=self._page_size)

    def tarefas(self, empresa_id: Id) -> TarefaService:
        return TarefaService(self.api, empresa_id, default_page_size=self._page_size)

    def tarefa_tipos(self, empresa_id: Id) -> TarefaTipoService:
        return TarefaTipoService(self.api, empresa_id)

    def tarefa_funcionario_status(self, empresa_id: Id) -> TarefaFuncionarioStatusService:
        return TarefaFuncionarioStatusService(self.api, empresa_id)

    # =========================================================================
    # Ciclo de vida
    # =========================================================================

    @property
    def _page_size(self) -> int:
        return self.settings.default_page_size

    def close(self) -> None:
        self.api.close()

    def __enter__(self) -> "ErpClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def build_client(
    settings: Optional[Settings] = None,
    *,
    notifier: Optional[Notifier] = None,
    navigator: Optional[Navigator] = None,
    transport: Optional[httpx.BaseTransport] = None,
    http_client: Optional[httpx.Client] = None,
    durable_storage: Optional[KeyValueStorage] = None,
    session_storage: Optional[KeyValueStorage] = None,
    local_storage: Optional[KeyValueStorage] = None,
) -> ErpClient:
    """
    Arma un ErpClient listo para usar.

    Defaults:
      - durable: CookieStorage en storage_dir (max age / secure / sameSite de Settings)
      - sesión: SessionStorage en memoria del proceso
      - remember-me: LocalFileStorage en storage_dir
      - notifier: LoggingNotifier; navigator: RecordingNavigator
    """
    settings = settings or get_settings()
    notifier = notifier or LoggingNotifier()
    navigator = navigator or RecordingNavigator()

    if durable_storage is None:
        durable_storage = CookieStorage(
            settings.cookie_jar_path,
            max_age_days=settings.session_cookie_max_age_days,
            secure=settings.session_cookie_secure,
            same_site=settings.session_cookie_same_site,
        )
    if session_storage is None:
        session_storage = SessionStorage()
    if local_storage is None:
        local_storage = LocalFileStorage(settings.local_storage_path)

    session = SessionStore(
        durable_storage,
        session_storage,
        storage_key=settings.session_storage_key,
    )
    interceptor = ErrorInterceptor(
        session,
        notifier,
        navigator,
        auth_public_paths=settings.auth_public_paths,
        login_route=settings.login_route,
    )
    api = ApiClient(
        session,
        interceptor,
        base_url=settings.api_base_url,
        timeout_s=settings.api_timeout_seconds,
        transport=transport,
        http_client=http_client,
    )
    remember_me = RememberMeCache(local_storage, key=settings.remember_me_storage_key)
    auth = AuthService(api, session, remember_me, notifier)

    return ErpClient(
        settings=settings,
        session=session,
        api=api,
        auth=auth,
        remember_me=remember_me,
        notifier=notifier,
        navigator=navigator,
    )
