import importlib

import pytest

from movebetter.core import config


@pytest.fixture
def reload_config(monkeypatch):
    def _reload(**env: str):
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return importlib.reload(config)

    yield _reload

    monkeypatch.undo()
    importlib.reload(config)


def test_production_rejects_insecure_cookies(reload_config) -> None:
    settings = reload_config(
        APP_ENV='production',
        SESSION_COOKIE_SECURE='false',
        AUTH_API_BASE_URL='https://auth.movebetter.test/api',
    )

    with pytest.raises(RuntimeError, match='SESSION_COOKIE_SECURE'):
        settings.validate_runtime_config()


def test_production_rejects_plain_http_auth_api(reload_config) -> None:
    settings = reload_config(
        APP_ENV='production',
        SESSION_COOKIE_SECURE='true',
        AUTH_API_BASE_URL='http://auth.movebetter.test/api',
    )

    with pytest.raises(RuntimeError, match='https'):
        settings.validate_runtime_config()


def test_production_accepts_secure_cookies_and_https_api(reload_config) -> None:
    settings = reload_config(
        APP_ENV='Production',
        SESSION_COOKIE_SECURE='yes',
        AUTH_API_BASE_URL='https://auth.movebetter.test/api',
    )

    settings.validate_runtime_config()

    assert settings.SESSION_COOKIE_SECURE is True


@pytest.mark.parametrize('secure', ['false', '0', ''])
def test_development_allows_insecure_cookies(reload_config, secure: str) -> None:
    settings = reload_config(
        APP_ENV='development',
        SESSION_COOKIE_SECURE=secure,
        AUTH_API_BASE_URL='http://localhost:5000/api',
    )

    settings.validate_runtime_config()

    assert settings.SESSION_COOKIE_SECURE is False
