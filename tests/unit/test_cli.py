from pathlib import Path

import pytest

from src.api.deps import get_settings
from src.app_shell import cli

RULES_PATH = Path(__file__).resolve().parents[2] / "rules.yaml"


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    monkeypatch.delenv("SUPABASE_SERVICE_KEY", raising=False)
    monkeypatch.setenv("CMS_RULES_PATH", str(RULES_PATH))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_command_is_required():
    with pytest.raises(SystemExit):
        cli.main([])


def test_bad_rules_path(monkeypatch, tmp_path):
    monkeypatch.setenv("CMS_RULES_PATH", str(tmp_path / "missing.yaml"))

    assert cli.main(["publish_due"]) == 1


def test_publish_due_needs_service_key(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://proj.supabase.co")

    assert cli.main(["publish_due"]) == 1


def test_serve_passes_options(monkeypatch):
    calls = []
    monkeypatch.setattr(cli, "handle_serve", lambda settings, args: calls.append(args))

    assert cli.main(["serve", "--port", "9000"]) == 0
    assert calls[0].port == 9000
    assert calls[0].host == "127.0.0.1"
