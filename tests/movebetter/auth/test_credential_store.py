import pytest
from fastapi import Response

from movebetter.auth.credential_store import CookieCredentialStore, CredentialStore, MemoryCredentialStore


def test_memory_store_round_trip_and_remove() -> None:
    store = MemoryCredentialStore()

    store.set('auth_token', 'tok-1')
    assert store.get('auth_token') == 'tok-1'

    store.remove('auth_token')
    store.remove('auth_token')
    assert store.get('auth_token') is None


def test_cookie_store_reads_percent_encoded_cookies() -> None:
    store = CookieCredentialStore({'auth_user': '%7B%22id%22%3A%20%221%22%7D'})

    assert store.get('auth_user') == '{"id": "1"}'
    assert store.get('auth_token') is None


def test_cookie_store_writes_are_visible_before_apply() -> None:
    store = CookieCredentialStore({'auth_token': 'old'})

    store.set('auth_token', 'new')
    assert store.get('auth_token') == 'new'

    store.remove('auth_token')
    assert store.get('auth_token') is None


def test_cookie_store_apply_sets_encoded_http_only_cookie() -> None:
    store = CookieCredentialStore({}, secure=True, max_age=3600)
    store.set('auth_user', '{"id": "1", "name": "Ana Souza"}')
    response = Response()

    store.apply(response)

    header = response.headers['set-cookie']
    assert header.startswith('auth_user=%7B%22id%22%3A%20%221%22')
    assert 'HttpOnly' in header
    assert 'Secure' in header
    assert 'Max-Age=3600' in header
    assert 'SameSite=lax' in header
    assert store.has_pending_changes is False


def test_cookie_store_apply_expires_removed_cookies() -> None:
    store = CookieCredentialStore({'auth_token': 'tok-1'})
    store.remove('auth_token')
    response = Response()

    store.apply(response)

    header = response.headers['set-cookie']
    assert header.startswith('auth_token=""')
    assert 'Max-Age=0' in header


def test_cookie_store_remove_of_absent_key_writes_nothing() -> None:
    store = CookieCredentialStore({})
    store.remove('auth_token')
    response = Response()

    store.apply(response)

    assert 'set-cookie' not in response.headers


def test_credential_store_interface_cannot_be_instantiated() -> None:
    with pytest.raises(TypeError):
        CredentialStore()


def test_store_missing_remove_cannot_be_instantiated() -> None:
    class ReadWriteOnly(CredentialStore):
        def get(self, key: str) -> str | None:
            return None

        def set(self, key: str, value: str) -> None:
            pass

    with pytest.raises(TypeError):
        ReadWriteOnly()
