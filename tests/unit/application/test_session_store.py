"""
===============================================================================
CRC — tests/unit/application/test_session_store.py

Responsibilities:
    - Validar la política de durabilidad (remember_me -> medio durable).
    - Validar logout (ambos medios, idempotente).
    - Validar update_user (no toca token ni is_authenticated).
    - Validar hidratación con datos corruptos (nunca lanza).
    - Validar listeners y fallas de storage.

Collaborators:
    - SessionStore (SUT)
    - SessionStorage / CookieStorage (medios)
===============================================================================
"""

from __future__ import annotations

import json

import pytest
from erp_client.application.session_store import (
    DEFAULT_STORAGE_KEY,
    EMPTY_SESSION,
    Session,
    SessionStore,
)
from erp_client.domain.entities import User
from erp_client.infrastructure.storage import (
    CookieStorage,
    SessionStorage,
    StorageReadError,
    StorageWriteError,
)

pytestmark = pytest.mark.unit

KEY = DEFAULT_STORAGE_KEY


def _record(durable_or_session: SessionStorage) -> dict | None:
    raw = durable_or_session.get_item(KEY)
    return json.loads(raw) if raw is not None else None


class _BrokenStorage:
    """Medio que falla en todas las operaciones."""

    def get_item(self, key):
        raise StorageReadError("jar corrupto")

    def set_item(self, key, value):
        raise StorageWriteError("disco lleno")

    def remove_item(self, key):
        raise StorageWriteError("disco lleno")


# ---------------------------------------------------------------------------
# Durability policy
# ---------------------------------------------------------------------------


class TestRememberMePolicy:
    def test_remembered_login_survives_restart(self, durable, session_scoped, sample_user):
        store = SessionStore(durable, session_scoped)
        store.login(sample_user, "tok-1", remember_me=True)

        # Reinicio del "navegador": sólo sobrevive el medio durable.
        restored = SessionStore(durable, SessionStorage())

        assert restored.is_authenticated is True
        assert restored.get_token() == "tok-1"
        assert restored.user.nome == "Ana"
        assert restored.remember_me is True

    def test_non_remembered_login_does_not_survive_restart(
        self, durable, session_scoped, sample_user
    ):
        store = SessionStore(durable, session_scoped)
        store.login(sample_user, "tok-1", remember_me=False)

        restored = SessionStore(durable, SessionStorage())

        assert restored.is_authenticated is False
        assert restored.get_token() is None
        assert restored.user is None

    def test_non_remembered_login_is_restored_within_same_session(
        self, durable, session_scoped, sample_user
    ):
        SessionStore(durable, session_scoped).login(sample_user, "tok-1")

        restored = SessionStore(durable, session_scoped)

        assert restored.is_authenticated is True

    def test_remembered_login_clears_session_copy(self, durable, session_scoped, sample_user):
        store = SessionStore(durable, session_scoped)
        store.login(sample_user, "tok-1", remember_me=False)
        store.login(sample_user, "tok-2", remember_me=True)

        assert _record(session_scoped) is None
        assert _record(durable)["state"]["token"] == "tok-2"

    def test_non_remembered_login_clears_durable_copy(
        self, durable, session_scoped, sample_user
    ):
        store = SessionStore(durable, session_scoped)
        store.login(sample_user, "tok-1", remember_me=True)
        store.login(sample_user, "tok-2", remember_me=False)

        assert _record(durable) is None
        assert _record(session_scoped)["state"]["token"] == "tok-2"

    def test_durable_medium_wins_on_hydration(self, durable, session_scoped, sample_user):
        SessionStore(SessionStorage(), session_scoped).login(sample_user, "session-tok")
        SessionStore(durable, SessionStorage()).login(
            sample_user, "durable-tok", remember_me=True
        )

        store = SessionStore(durable, session_scoped)

        assert store.get_token() == "durable-tok"

    def test_persisted_layout(self, durable, session_scoped, sample_user):
        store = SessionStore(durable, session_scoped)
        store.login(sample_user, "tok-1", remember_me=True, refresh_token="ref-1")

        record = _record(durable)

        assert record["version"] == 0
        assert record["state"] == {
            "user": {"id": 1, "nome": "Ana", "email": "a@x.com", "empresaId": 7},
            "token": "tok-1",
            "refreshToken": "ref-1",
            "isAuthenticated": True,
            "rememberMe": True,
        }

    def test_remembered_login_with_cookie_jar(self, tmp_path, sample_user):
        jar = CookieStorage(tmp_path / "cookies.json")
        SessionStore(jar, SessionStorage()).login(sample_user, "tok-1", remember_me=True)

        restored = SessionStore(CookieStorage(tmp_path / "cookies.json"), SessionStorage())

        assert restored.is_authenticated is True
        assert json.loads(jar.path.read_text(encoding="utf-8"))[KEY]["sameSite"] == "Strict"


# ---------------------------------------------------------------------------
# Logout
# ---------------------------------------------------------------------------


class TestLogout:
    @pytest.mark.parametrize("remember_me", [True, False])
    def test_logout_clears_state_and_both_media(
        self, durable, session_scoped, sample_user, remember_me
    ):
        store = SessionStore(durable, session_scoped)
        store.login(sample_user, "tok-1", remember_me=remember_me)

        store.logout()

        assert store.user is None
        assert store.get_token() is None
        assert store.is_authenticated is False
        assert durable.get_item(KEY) is None
        assert session_scoped.get_item(KEY) is None
        assert SessionStore(durable, session_scoped).snapshot() == EMPTY_SESSION

    def test_logout_removes_leftover_copies_in_both_media(self, durable, session_scoped):
        stale = json.dumps({"state": {"token": "old"}, "version": 0})
        durable.set_item(KEY, stale)
        session_scoped.set_item(KEY, stale)
        store = SessionStore(durable, session_scoped)

        store.logout()

        assert len(durable) == 0
        assert len(session_scoped) == 0

    def test_logout_twice_is_idempotent(self, store, sample_user):
        store.login(sample_user, "tok-1")

        first = store.logout()
        second = store.logout()

        assert first == second == EMPTY_SESSION


# ---------------------------------------------------------------------------
# update_user
# ---------------------------------------------------------------------------


class TestUpdateUser:
    def test_update_user_merges_patch_only(self, store, sample_user):
        store.login(sample_user, "tok-1", remember_me=False)

        store.update_user({"nome": "New Name"})

        assert store.user.nome == "New Name"
        assert store.user.email == "a@x.com"
        assert store.user.empresa_id == 7
        assert store.get_token() == "tok-1"
        assert store.is_authenticated is True

    def test_update_user_accepts_attribute_names(self, store, sample_user):
        store.login(sample_user, "tok-1")

        store.update_user({"empresa_id": 9})

        assert store.user.empresa_id == 9

    def test_update_user_is_persisted(self, durable, session_scoped, sample_user):
        store = SessionStore(durable, session_scoped)
        store.login(sample_user, "tok-1", remember_me=True)

        store.update_user({"nome": "Beatriz"})

        assert _record(durable)["state"]["user"]["nome"] == "Beatriz"

    def test_update_user_without_user_is_noop(self, store):
        result = store.update_user({"nome": "X"})

        assert result == EMPTY_SESSION
        assert store.user is None


# ---------------------------------------------------------------------------
# Hydration with bad data
# ---------------------------------------------------------------------------


class TestHydration:
    @pytest.mark.parametrize(
        "raw",
        [
            "{not json",
            "[]",
            json.dumps({"version": 0}),
            json.dumps({"state": "x", "version": 0}),
            json.dumps({"state": {"user": "ana", "token": "t"}, "version": 0}),
            json.dumps({"state": {"token": 123}, "version": 0}),
            json.dumps({"state": {"token": "t", "rememberMe": "yes"}, "version": 0}),
            json.dumps({"state": {"token": "t"}, "version": 99}),
        ],
    )
    def test_malformed_record_yields_empty_session(self, durable, session_scoped, raw):
        durable.set_item(KEY, raw)

        store = SessionStore(durable, session_scoped)

        assert store.snapshot() == EMPTY_SESSION
        assert durable.get_item(KEY) is None

    def test_corrupted_durable_falls_back_to_session_medium(
        self, durable, session_scoped, sample_user
    ):
        SessionStore(SessionStorage(), session_scoped).login(sample_user, "tok-1")
        durable.set_item(KEY, "{broken")

        store = SessionStore(durable, session_scoped)

        assert store.get_token() == "tok-1"

    def test_unreadable_medium_yields_empty_session(self, session_scoped):
        store = SessionStore(_BrokenStorage(), session_scoped)

        assert store.snapshot() == EMPTY_SESSION

    def test_corrupted_cookie_jar_yields_empty_session(self, tmp_path):
        jar_path = tmp_path / "cookies.json"
        jar_path.write_text("{{{", encoding="utf-8")

        store = SessionStore(CookieStorage(jar_path), SessionStorage())

        assert store.is_authenticated is False

    def test_deeply_nested_record_yields_empty_session(self, durable, session_scoped):
        durable.set_item(KEY, "[" * 100_000 + "]" * 100_000)

        store = SessionStore(durable, session_scoped)

        assert store.snapshot() == EMPTY_SESSION
        assert durable.get_item(KEY) is None

    def test_deeply_nested_cookie_jar_yields_empty_session(self, tmp_path):
        jar_path = tmp_path / "cookies.json"
        jar_path.write_text('{"a":' * 100_000 + "1" + "}" * 100_000, encoding="utf-8")

        store = SessionStore(CookieStorage(jar_path), SessionStorage())

        assert store.is_authenticated is False

    def test_persisted_is_authenticated_is_recomputed(self, durable, session_scoped):
        durable.set_item(
            KEY,
            json.dumps(
                {"state": {"user": None, "token": "t", "isAuthenticated": True}, "version": 0}
            ),
        )

        store = SessionStore(durable, session_scoped)

        assert store.is_authenticated is False


# ---------------------------------------------------------------------------
# Failures and listeners
# ---------------------------------------------------------------------------


class TestStorageFailures:
    def test_write_failure_keeps_in_memory_session(self, session_scoped, sample_user):
        store = SessionStore(_BrokenStorage(), session_scoped)

        store.login(sample_user, "tok-1", remember_me=True)

        assert store.is_authenticated is True
        assert store.get_token() == "tok-1"

    def test_logout_with_broken_medium_does_not_raise(self, session_scoped, sample_user):
        store = SessionStore(_BrokenStorage(), session_scoped)
        store.login(sample_user, "tok-1")

        store.logout()

        assert store.is_authenticated is False


class TestListeners:
    def test_listener_receives_each_mutation(self, store, sample_user):
        seen: list[Session] = []
        store.subscribe(seen.append)

        store.login(sample_user, "tok-1")
        store.update_user({"nome": "B"})
        store.logout()

        assert [s.is_authenticated for s in seen] == [True, True, False]
        assert seen[1].user.nome == "B"

    def test_unsubscribe_stops_notifications(self, store, sample_user):
        seen: list[Session] = []
        unsubscribe = store.subscribe(seen.append)
        unsubscribe()
        unsubscribe()

        store.login(sample_user, "tok-1")

        assert seen == []

    def test_failing_listener_does_not_break_mutation(self, store, sample_user):
        def boom(_session):
            raise RuntimeError("listener roto")

        store.subscribe(boom)

        store.login(sample_user, "tok-1")

        assert store.is_authenticated is True


class TestSession:
    def test_user_without_token_is_not_authenticated(self):
        assert Session(user=User(nome="A"), token="").is_authenticated is False

    def test_token_without_user_is_not_authenticated(self):
        assert Session(token="t").is_authenticated is False

    def test_login_accepts_user_model(self, store):
        store.login(User(id=3, nome="C"), "tok")

        assert store.user.id == 3
