"""
===============================================================================
TARJETA CRC — services/base.py
===============================================================================

Módulo:
    Servicio CRUD genérico por recurso (list / get_by_id / create / update / delete)

Responsabilidades:
    - Traducir las cinco operaciones CRUD a requests con un path fijo.
    - Desenvolver cada respuesta con el envelope declarado para el recurso.
    - Validar el payload del lado cliente antes de tocar la red.
    - Serializar records por alias (camelCase), sin None.

Colaboradores:
    - infrastructure.http.ApiClient (único acceso a la red)
    - infrastructure.http.envelope (adaptadores de respuesta)
    - application.forms.FormSchema (validación)
    - domain.entities.ApiRecord (modelos)

Reglas:
    - Sin manejo de errores propio: el interceptor ya notificó, acá se propaga.
    - Servicios por empresa: path /empresas/{empresa_id}/<recurso>.
===============================================================================
"""

from __future__ import annotations

from typing import Any, Generic, List, Mapping, Optional, Type, TypeVar, Union
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from ..application.forms import FormSchema
from ..crosscutting.exceptions import EnvelopeError
from ..crosscutting.pagination import Page, QueryParams
from ..domain.entities import ApiRecord, Id
from ..infrastructure.http import envelope
from ..infrastructure.http.api_client import ApiClient
from ..infrastructure.http.envelope import Unwrapper

T = TypeVar("T", bound=ApiRecord)

Payload = Union[ApiRecord, Mapping[str, Any]]
ListParams = Union[QueryParams, Mapping[str, Any], None]


class ResourceService(Generic[T]):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      ResourceService[T]

    Responsabilidades:
      - CRUD uniforme sobre un path
      - Helpers para operaciones extra (PATCH de estado, toggles)

    Colaboradores:
      - ApiClient, envelopes, FormSchema
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        api: ApiClient,
        *,
        path: str,
        model: Type[T],
        list_envelope: Unwrapper = envelope.nested_page,
        item_envelope: Unwrapper = envelope.data,
        schema: Optional[FormSchema] = None,
        default_page_size: int = 10,
    ) -> None:
        self._api = api
        self._path = "/" + path.strip("/")
        self._model = model
        self._list_envelope = list_envelope
        self._item_envelope = item_envelope
        self._schema = schema
        self._default_page_size = default_page_size

    @property
    def path(self) -> str:
        return self._path

    # =========================================================================
    # CRUD
    # =========================================================================

    def list(self, params: ListParams = None) -> Union[Page[T], List[T]]:
        response = self._api.get(self._path, params=self._query(params))
        return self._unwrap_collection(response)

    def get_by_id(self, id: Id) -> T:
        response = self._api.get(self._url(id))
        return self._unwrap_item(response)

    def create(self, payload: Payload) -> T:
        body = self.serialize(payload)
        if self._schema is not None:
            self._schema.ensure_valid(body)
        response = self._api.post(self._path, json=body)
        return self._unwrap_item(response)

    def update(self, id: Id, payload: Payload) -> T:
        body = self.serialize(payload)
        if self._schema is not None:
            self._schema.ensure_valid(body, partial=True)
        response = self._api.put(self._url(id), json=body)
        return self._unwrap_item(response)

    def delete(self, id: Id) -> None:
        self._api.delete(self._url(id))

    # =========================================================================
    # Helpers (para subclases)
    # =========================================================================

    def serialize(self, payload: Payload) -> dict[str, Any]:
        """Record -> dict por alias sin None; dict -> claves normalizadas a alias."""
        if isinstance(payload, ApiRecord):
            return payload.to_payload()

        fields = self._model.model_fields
        body: dict[str, Any] = {}
        for key, value in payload.items():
            field = fields.get(key)
            body[(field.alias or key) if field else key] = value
        return body

    def _url(self, id: Id, *suffix: str) -> str:
        parts = [self._path, quote(str(id), safe="")]
        parts.extend(s.strip("/") for s in suffix)
        return "/".join(parts)

    def _query(self, params: ListParams) -> dict[str, Any]:
        if params is None:
            return QueryParams(limit=self._default_page_size).to_query()
        if isinstance(params, QueryParams):
            return params.to_query()
        return {k: v for k, v in params.items() if v is not None}

    def _unwrap_item(self, response: httpx.Response) -> T:
        return self._to_model(self._item_envelope(response))

    def _unwrap_collection(self, response: httpx.Response) -> Union[Page[T], List[T]]:
        result = self._list_envelope(response)
        if isinstance(result, Page):
            return result.model_copy(
                update={"items": [self._to_model(item) for item in result.items]}
            )
        if isinstance(result, list):
            return [self._to_model(item) for item in result]
        raise EnvelopeError(f"Se esperaba una colección en {self._path}")

    def _to_model(self, item: Any) -> T:
        if not isinstance(item, dict):
            raise EnvelopeError(f"Se esperaba un objeto en {self._path}")
        try:
            return self._model.model_validate(item)
        except ValidationError as exc:
            raise EnvelopeError(
                f"Record inválido en {self._path}", original_error=exc
            ) from exc


class CompanyResourceService(ResourceService[T]):
    """Recurso anidado bajo una empresa: /empresas/{empresa_id}/<resource>."""

    resource: str = ""

    def __init__(self, api: ApiClient, empresa_id: Id, **kwargs: Any) -> None:
        self.empresa_id = empresa_id
        super().__init__(
            api,
            path=f"/empresas/{quote(str(empresa_id), safe='')}/{self.resource}",
            **kwargs,
        )
