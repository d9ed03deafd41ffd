"""Tests for the uvicorn runner."""

from unittest.mock import MagicMock

from sessionvault.config import Config
from sessionvault.web import runner


def test_run_server_uses_config(monkeypatch):
    run = MagicMock()
    monkeypatch.setattr(runner.uvicorn, "run", run)
    config = Config(database_url="mongodb://localhost:27017/test", host="0.0.0.0", port=8000, forwarded_allow_ips="*")

    runner.run_server(MagicMock(), config)

    kwargs = run.call_args.kwargs
    assert (kwargs["host"], kwargs["port"]) == ("0.0.0.0", 8000)
    assert kwargs["log_config"] is None
    assert kwargs["access_log"] is False
    assert kwargs["forwarded_allow_ips"] == "*"
