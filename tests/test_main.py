"""Entry Point — the todo-api console script hands the app to uvicorn."""

import uvicorn

from todo_api import main


def test_run_serves_app_with_settings(monkeypatch):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))
    main.run()
    args, kwargs = calls[0]
    assert args == ("todo_api.main:app",)
    assert kwargs["host"] == main.settings.host
    assert kwargs["port"] == main.settings.port
    assert kwargs["log_config"] is None
