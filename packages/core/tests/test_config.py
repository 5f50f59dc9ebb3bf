"""Tests for configuration loading."""

from prnotify_core.config import load_config


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["store"] == "noop"
    assert config["chat"] == "console"
    assert config["store_path"] == ".prnotify.db"
    assert config["gist_id"] is None
    assert config["webhook_url"] is None


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".prnotify.yml"
    cfg.write_text("store: sqlite\nstore_path: /tmp/settings.db\nchat: webhook\n")
    config = load_config(config_path=str(cfg))
    assert config["store"] == "sqlite"
    assert config["store_path"] == "/tmp/settings.db"
    assert config["chat"] == "webhook"


def test_empty_config_file_keeps_defaults(tmp_path):
    cfg = tmp_path / ".prnotify.yml"
    cfg.write_text("")
    config = load_config(config_path=str(cfg))
    assert config["store"] == "noop"


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".prnotify.yml"
    cfg.write_text("chat: webhook\n")
    config = load_config(config_path=str(cfg), cli_overrides={"chat": "console"})
    assert config["chat"] == "console"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".prnotify.yml"
    cfg.write_text("chat: webhook\n")
    config = load_config(config_path=str(cfg), cli_overrides={"chat": None})
    assert config["chat"] == "webhook"


def test_github_token_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "tok")
    config = load_config(config_path=str(tmp_path / "none.yml"))
    assert config["github_token"] == "tok"


def test_webhook_url_env_overrides_file(tmp_path, monkeypatch):
    cfg = tmp_path / ".prnotify.yml"
    cfg.write_text("webhook_url: https://file.example.com\n")
    monkeypatch.setenv("PRNOTIFY_WEBHOOK_URL", "https://env.example.com")
    config = load_config(config_path=str(cfg))
    assert config["webhook_url"] == "https://env.example.com"


def test_defaults_not_mutated_between_loads(tmp_path):
    cfg = tmp_path / ".prnotify.yml"
    cfg.write_text("store: gist\n")
    load_config(config_path=str(cfg))
    config = load_config(config_path=str(tmp_path / "none.yml"))
    assert config["store"] == "noop"
