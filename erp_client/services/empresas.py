"""
===============================================================================
TARJETA CRC — services/empresas.py
===============================================================================

Servicios:
    EmpresaService (/empresas), UserService (/users), RoleService (/roles)

Responsabilidades:
    - CRUD de empresas (envelope plano: la API devuelve el record sin wrapper).
    - Empresas del usuario logueado y cambio de empresa activa.
    - CRUD de usuarios y cargos (roles) globales.

Colaboradores:
    - services.base.ResourceService
===============================================================================
"""

from __future__ import annotations

from typing import List

from ..application import form_schemas
from ..domain.entities import Empresa, Id, Role, UsuarioEmpresa
from ..infrastructure.http import envelope
from ..infrastructure.http.api_client import ApiClient
from .base import Payload, ResourceService


class EmpresaService(ResourceService[Empresa]):
    def __init__(self, api: ApiClient, *, default_page_size: int = 10) -> None:
        super().__init__(
            api,
            path="/empresas",
            model=Empresa,
            list_envelope=envelope.flat_page,
            item_envelope=envelope.raw,
            schema=form_schemas.EMPRESA,
            default_page_size=default_page_size,
        )

    def my_companies(self) -> List[Empresa]:
        """Empresas a las que pertenece el usuario autenticado."""
        response = self._api.get(f"{self.path}/minhas")
        body = envelope.raw(response)
        if isinstance(body, dict):
            body = body.get("data", [])
        return [self._to_model(item) for item in body]

    def switch(self, empresa_id: Id) -> None:
        self._api.post(self._url(empresa_id, "switch"))


class UserService(ResourceService[UsuarioEmpresa]):
    def __init__(self, api: ApiClient, *, default_page_size: int = 10) -> None:
        super().__init__(
            api,
            path="/users",
            model=UsuarioEmpresa,
            schema=form_schemas.USUARIO_CREATE,
            default_page_size=default_page_size,
        )

    def update(self, id: Id, payload: Payload) -> UsuarioEmpresa:
        # La contraseña es opcional al editar.
        body = self.serialize(payload)
        form_schemas.USUARIO_EDIT.ensure_valid(body, partial=True)
        response = self._api.put(self._url(id), json=body)
        return self._unwrap_item(response)


class RoleService(ResourceService[Role]):
    def __init__(self, api: ApiClient, *, default_page_size: int = 10) -> None:
        super().__init__(
            api,
            path="/roles",
            model=Role,
            schema=form_schemas.CARGO,
            default_page_size=default_page_size,
        )
