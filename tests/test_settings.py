"""Tests for settings resolution (defaults, TOML file, environment)."""
import pytest

from config.settings import Settings


def _write(tmp_path, text):
    path = tmp_path / "config.toml"
    path.write_text(text)
    return str(path)


def test_defaults_when_file_missing(tmp_path):
    cfg = Settings.load(config_file=str(tmp_path / "missing.toml"), environ={})
    assert cfg.SERVER_PORT == 8081
    assert cfg.MONGODB_DB_NAME == "arbitrage_bot"
    assert cfg.API_KEY is None
    assert not cfg.api_key_configured


def test_file_values(tmp_path):
    path = _write(
        tmp_path,
        """
[server]
port = 9090
log_level = "debug"
api_key = "from-file"

[database]
uri = "mongodb://db:27017"
database = "bots"

[cors]
allowed_origins = ["https://admin.example"]
""",
    )
    cfg = Settings.load(config_file=path, environ={})
    assert cfg.SERVER_PORT == 9090
    assert cfg.LOG_LEVEL == "DEBUG"
    assert cfg.API_KEY == "from-file"
    assert cfg.MONGODB_URL == "mongodb://db:27017"
    assert cfg.MONGODB_DB_NAME == "bots"
    assert cfg.CORS_ORIGINS == ["https://admin.example"]


def test_environment_overrides_file(tmp_path):
    path = _write(tmp_path, '[server]\napi_key = "from-file"\nport = 9090\n')
    cfg = Settings.load(
        config_file=path,
        environ={"API_KEY": "from-env", "SERVER_PORT": "7000", "CORS_ORIGINS": "http://a, http://b"},
    )
    assert cfg.API_KEY == "from-env"
    assert cfg.SERVER_PORT == 7000
    assert cfg.CORS_ORIGINS == ["http://a", "http://b"]


def test_blank_api_key_means_open_access(tmp_path):
    cfg = Settings.load(config_file=str(tmp_path / "missing.toml"), environ={"API_KEY": "   "})
    assert cfg.API_KEY is None


def test_malformed_file_is_an_error(tmp_path):
    path = _write(tmp_path, "[server\nport = ")
    with pytest.raises(ValueError, match="invalid config file"):
        Settings.load(config_file=path, environ={})


def test_unknown_setting_rejected():
    with pytest.raises(ValueError, match="unknown setting"):
        Settings(NOT_A_SETTING=1)


def test_empty_env_value_does_not_override_file(tmp_path, caplog):
    path = _write(tmp_path, '[server]\napi_key = "from-file"\n')
    with caplog.at_level("WARNING", logger="config.settings"):
        cfg = Settings.load(config_file=path, environ={"API_KEY": ""})
    assert cfg.API_KEY == "from-file"
    assert cfg.api_key_configured
    assert "API_KEY" in caplog.text
