"""
===============================================================================
CRC — tests/unit/application/test_auth_service.py

Responsibilities:
    - Validar login/register: envelope con y sin {data}, sesión poblada, toast.
    - Validar que confirmPassword no viaja al servidor.
    - Validar logout local aunque el servidor falle.
    - Validar perfil (update_user en la sesión) y validate_token.

Collaborators:
    - AuthService (SUT)
    - ApiClient sobre httpx.MockTransport
===============================================================================
"""

from __future__ import annotations

import json

import httpx
import pytest
from erp_client.application.auth_service import AuthService
from erp_client.application.remember_me import RememberMeCache
from erp_client.crosscutting.exceptions import (
    AuthenticationError,
    EnvelopeError,
    FormValidationError,
    ServerError,
)
from erp_client.infrastructure.storage import SessionStorage

pytestmark = pytest.mark.unit

USER = {"id": 1, "nome": "Ana", "email": "a@x.com"}


class FakeAuthApi:
    """Handler por path; registra cada request."""

    def __init__(self, routes: dict[tuple[str, str], httpx.Response]):
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")
        return self.routes.get((request.method, path), httpx.Response(404))

    def body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def prefill() -> SessionStorage:
    return SessionStorage()


@pytest.fixture
def make_auth(make_api, store, notifier, prefill):
    def _make(routes):
        api_handler = FakeAuthApi(routes)
        service = AuthService(make_api(api_handler), store, RememberMeCache(prefill), notifier)
        return service, api_handler

    return _make


class TestLogin:
    def test_login_with_wrapped_response(self, make_auth, store, notifier):
        auth, api = make_auth(
            {
                ("POST", "/auth/login"): httpx.Response(
                    200, json={"success": True, "data": {"user": USER, "token": "tok-1"}}
                )
            }
        )

        result = auth.login("a@x.com", "secret1")

        assert result.token == "tok-1"
        assert store.is_authenticated is True
        assert store.user.nome == "Ana"
        assert store.remember_me is False
        assert api.body() == {"email": "a@x.com", "password": "secret1"}
        assert notifier.messages == ["Login realizado com sucesso!"]

    def test_login_with_raw_response_and_remember_me(self, make_auth, store, prefill):
        auth, _ = make_auth(
            {
                ("POST", "/auth/login"): httpx.Response(
                    200,
                    json={"user": USER, "token": "tok-2", "refreshToken": "r", "expiresIn": 3600},
                )
            }
        )

        result = auth.login("a@x.com", "secret1", remember_me=True)

        assert result.expires_in == 3600
        assert store.remember_me is True
        assert store.snapshot().refresh_token == "r"
        assert prefill.get_item("login-remember-me-data") is not None

    def test_login_without_remember_me_clears_prefill(self, make_auth, prefill):
        prefill.set_item("login-remember-me-data", '{"email":"old@x.com"}')
        auth, _ = make_auth(
            {("POST", "/auth/login"): httpx.Response(200, json={"user": USER, "token": "t"})}
        )

        auth.login("a@x.com", "secret1", remember_me=False)

        assert prefill.get_item("login-remember-me-data") is None

    def test_invalid_form_never_reaches_the_network(self, make_auth):
        auth, api = make_auth({})

        with pytest.raises(FormValidationError) as exc_info:
            auth.login("not-an-email", "123")

        assert set(exc_info.value.field_errors) == {"email", "password"}
        assert api.requests == []

    def test_wrong_credentials_surface_server_message(self, make_auth, store, notifier):
        auth, _ = make_auth(
            {
                ("POST", "/auth/login"): httpx.Response(
                    401, json={"message": "Email ou senha incorretos"}
                )
            }
        )

        with pytest.raises(AuthenticationError) as exc_info:
            auth.login("a@x.com", "secret1")

        assert exc_info.value.message == "Email ou senha incorretos"
        assert store.is_authenticated is False
        assert notifier.messages == ["Email ou senha incorretos"]

    def test_response_without_token_is_envelope_error(self, make_auth, store):
        auth, _ = make_auth(
            {("POST", "/auth/login"): httpx.Response(200, json={"data": {"user": USER}})}
        )

        with pytest.raises(EnvelopeError):
            auth.login("a@x.com", "secret1")

        assert store.is_authenticated is False


class TestRegister:
    def test_register_logs_in_and_drops_confirmation(self, make_auth, store, notifier):
        auth, api = make_auth(
            {
                ("POST", "/auth/register"): httpx.Response(
                    201, json={"data": {"user": USER, "token": "tok-3"}}
                )
            }
        )

        auth.register("Ana Maria", "a@x.com", "secret1", "secret1")

        assert api.body() == {"nome": "Ana Maria", "email": "a@x.com", "password": "secret1"}
        assert store.get_token() == "tok-3"
        assert notifier.messages == ["Conta criada com sucesso!"]

    def test_register_password_mismatch(self, make_auth):
        auth, api = make_auth({})

        with pytest.raises(FormValidationError) as exc_info:
            auth.register("Ana Maria", "a@x.com", "secret1", "secret2")

        assert exc_info.value.field_errors == {"confirmPassword": "As senhas não coincidem"}
        assert api.requests == []


class TestLogout:
    def test_logout_calls_server_and_clears_session(self, make_auth, store):
        store.login(USER, "tok-1")
        auth, api = make_auth({("POST", "/auth/logout"): httpx.Response(204)})

        auth.logout()

        assert api.requests[0].headers["Authorization"] == "Bearer tok-1"
        assert store.is_authenticated is False

    def test_local_logout_happens_even_if_server_fails(self, make_auth, store):
        store.login(USER, "tok-1", remember_me=True)
        auth, _ = make_auth({("POST", "/auth/logout"): httpx.Response(500)})

        with pytest.raises(ServerError):
            auth.logout()

        assert store.is_authenticated is False


class TestPassword:
    def test_forgot_password_uses_server_message(self, make_auth, notifier):
        auth, api = make_auth(
            {
                ("POST", "/auth/forgot-password"): httpx.Response(
                    200, json={"message": "Verifique seu e-mail"}
                )
            }
        )

        assert auth.forgot_password("a@x.com") == "Verifique seu e-mail"
        assert api.body() == {"email": "a@x.com"}
        assert notifier.messages == ["Verifique seu e-mail"]

    def test_forgot_password_default_message(self, make_auth):
        auth, _ = make_auth({("POST", "/auth/forgot-password"): httpx.Response(200, json={})})

        assert auth.forgot_password("a@x.com") == "E-mail de recuperação enviado!"

    def test_reset_password_sends_token_and_password(self, make_auth):
        auth, api = make_auth(
            {("POST", "/auth/reset-password"): httpx.Response(200, json={"success": True})}
        )

        auth.reset_password("reset-tok", "secret1", "secret1")

        assert api.body() == {"token": "reset-tok", "password": "secret1"}


class TestProfile:
    def test_get_profile_unwraps_data(self, make_auth):
        auth, _ = make_auth(
            {("GET", "/auth/profile"): httpx.Response(200, json={"data": USER})}
        )

        assert auth.get_profile().email == "a@x.com"

    def test_update_profile_updates_session_user(self, make_auth, store):
        store.login(USER, "tok-1")
        auth, api = make_auth(
            {
                ("PUT", "/auth/profile"): httpx.Response(
                    200, json={"data": {**USER, "nome": "Ana Paula"}}
                )
            }
        )

        user = auth.update_profile({"nome": "Ana Paula", "avatar": None})

        assert api.body() == {"nome": "Ana Paula"}
        assert user.nome == "Ana Paula"
        assert store.user.nome == "Ana Paula"
        assert store.get_token() == "tok-1"


class TestValidateToken:
    def test_valid_token(self, make_auth, store):
        store.login(USER, "tok-1")
        auth, _ = make_auth({("GET", "/auth/validate"): httpx.Response(200, json={"valid": True})})

        assert auth.validate_token() is True

    def test_rejected_token_returns_false_and_expires_session(
        self, make_auth, store, navigator
    ):
        store.login(USER, "tok-1")
        auth, _ = make_auth({("GET", "/auth/validate"): httpx.Response(401)})

        assert auth.validate_token() is False
        assert store.is_authenticated is False
        assert navigator.current == "/login"
