import uvicorn

from movebetter import main
from movebetter.core import config


def test_run_serves_app_with_configured_host_and_port(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(uvicorn, 'run', lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(config, 'HOST', '0.0.0.0')
    monkeypatch.setattr(config, 'PORT', 9100)
    monkeypatch.setattr(config, 'LOG_LEVEL', 'WARNING')

    main.run()

    assert calls == [('movebetter.main:app', {'host': '0.0.0.0', 'port': 9100, 'log_level': 'warning'})]
