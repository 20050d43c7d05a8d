"""
===============================================================================
TARJETA CRC — application/auth_service.py
===============================================================================

Módulo:
    Caso de uso de autenticación (login / registro / perfil / logout)

Responsabilidades:
    - Validar el formulario localmente antes de llamar a /auth/*.
    - Desenvolver login/register (con o sin wrapper {data}).
    - Poblar el SessionStore al autenticar y vaciarlo al salir.
    - Mantener el cache remember-me (pre-llenado del formulario).
    - Notificar éxitos (los errores ya los notifica el interceptor).

Colaboradores:
    - infrastructure.http.ApiClient
    - application.session_store.SessionStore
    - application.remember_me.RememberMeCache
    - application.form_schemas (LOGIN, REGISTER, ...)
    - domain.services.Notifier

Reglas:
    - logout(): el logout local ocurre SIEMPRE, aunque falle el servidor;
      el error del servidor se propaga igual.
===============================================================================
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import ValidationError

from ..crosscutting.exceptions import EnvelopeError, ErpClientError
from ..crosscutting.logger import logger
from ..domain.entities import AuthResponse, User
from ..domain.services import Notifier
from ..domain.value_objects import Notification
from ..infrastructure.http import envelope
from ..infrastructure.http.api_client import ApiClient
from . import form_schemas
from .remember_me import RememberMeCache
from .session_store import SessionStore

LOGIN_PATH = "/auth/login"
REGISTER_PATH = "/auth/register"
LOGOUT_PATH = "/auth/logout"
FORGOT_PASSWORD_PATH = "/auth/forgot-password"
RESET_PASSWORD_PATH = "/auth/reset-password"
PROFILE_PATH = "/auth/profile"
VALIDATE_PATH = "/auth/validate"

MSG_LOGIN_OK = "Login realizado com sucesso!"
MSG_REGISTER_OK = "Conta criada com sucesso!"
MSG_FORGOT_OK = "E-mail de recuperação enviado!"
MSG_RESET_OK = "Senha redefinida com sucesso!"
MSG_PROFILE_OK = "Perfil atualizado com sucesso!"


class AuthService:
    def __init__(
        self,
        api: ApiClient,
        session_store: SessionStore,
        remember_me: RememberMeCache,
        notifier: Notifier,
    ) -> None:
        self._api = api
        self._session = session_store
        self._remember_me = remember_me
        self._notifier = notifier

    # =========================================================================
    # Login / registro
    # =========================================================================

    def login(self, email: str, password: str, remember_me: bool = False) -> AuthResponse:
        credentials = {"email": email, "password": password}
        form_schemas.LOGIN.ensure_valid(credentials)

        response = self._api.post(LOGIN_PATH, json=credentials)
        auth = _parse_auth(envelope.data_or_raw(response), LOGIN_PATH)

        self._session.login(
            auth.user, auth.token, remember_me=remember_me, refresh_token=auth.refresh_token
        )
        self._remember_me.save(email, password, remember_me)
        self._success(MSG_LOGIN_OK)
        return auth

    def register(
        self, nome: str, email: str, password: str, confirm_password: str
    ) -> AuthResponse:
        form_schemas.REGISTER.ensure_valid(
            {
                "nome": nome,
                "email": email,
                "password": password,
                "confirmPassword": confirm_password,
            }
        )

        # confirmPassword no viaja al servidor.
        response = self._api.post(
            REGISTER_PATH, json={"nome": nome, "email": email, "password": password}
        )
        auth = _parse_auth(envelope.data_or_raw(response), REGISTER_PATH)
        self._session.login(auth.user, auth.token, refresh_token=auth.refresh_token)
        self._success(MSG_REGISTER_OK)
        return auth

    def logout(self) -> None:
        try:
            self._api.post(LOGOUT_PATH)
        finally:
            self._session.logout()

    # =========================================================================
    # Contraseña
    # =========================================================================

    def forgot_password(self, email: str) -> str:
        form_schemas.FORGOT_PASSWORD.ensure_valid({"email": email})
        response = self._api.post(FORGOT_PASSWORD_PATH, json={"email": email})
        message = _message(envelope.raw(response)) or MSG_FORGOT_OK
        self._success(message)
        return message

    def reset_password(self, token: str, password: str, confirm_password: str) -> str:
        form_schemas.RESET_PASSWORD.ensure_valid(
            {"token": token, "password": password, "confirmPassword": confirm_password}
        )
        response = self._api.post(
            RESET_PASSWORD_PATH, json={"token": token, "password": password}
        )
        message = _message(envelope.raw(response)) or MSG_RESET_OK
        self._success(message)
        return message

    # =========================================================================
    # Perfil
    # =========================================================================

    def get_profile(self) -> User:
        response = self._api.get(PROFILE_PATH)
        return _parse_user(envelope.data_or_raw(response), PROFILE_PATH)

    def update_profile(self, patch: Mapping[str, Any]) -> User:
        body = {k: v for k, v in patch.items() if v is not None}
        form_schemas.PROFILE.ensure_valid(body, partial=True)

        response = self._api.put(PROFILE_PATH, json=body)
        user = _parse_user(envelope.data_or_raw(response), PROFILE_PATH)
        self._session.update_user(user.to_payload())
        self._success(MSG_PROFILE_OK)
        return user

    def validate_token(self) -> bool:
        """True si el servidor acepta el token actual."""
        try:
            self._api.get(VALIDATE_PATH)
        except ErpClientError as exc:
            logger.info("Token rechazado", extra={"error_code": exc.error_code})
            return False
        return True

    def _success(self, message: str) -> None:
        self._notifier.notify(Notification(level="success", message=message))


def _parse_auth(body: Any, path: str) -> AuthResponse:
    try:
        return AuthResponse.model_validate(body)
    except ValidationError as exc:
        raise EnvelopeError(
            f"Respuesta de autenticación inválida en {path}", original_error=exc
        ) from exc


def _parse_user(body: Any, path: str) -> User:
    if isinstance(body, dict) and isinstance(body.get("user"), dict):
        body = body["user"]
    if not isinstance(body, dict):
        raise EnvelopeError(f"Se esperaba un usuario en {path}")
    return User.model_validate(body)


def _message(body: Any) -> Optional[str]:
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"] or None
    return None
