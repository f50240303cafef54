"""Tests for environment-derived connection configuration."""

import pytest

from n8n_mcp.config import DEFAULT_TIMEOUT, ConfigError, ConnectionConfig


def test_from_env_reads_all_fields():
    config = ConnectionConfig.from_env(
        {
            "N8N_BASE_URL": "https://n8n.example.com/",
            "N8N_API_KEY": "secret",
            "N8N_USER": "alice",
            "N8N_PASSWORD": "pw",
            "N8N_TIMEOUT": "12.5",
        }
    )

    assert config.base_url == "https://n8n.example.com"
    assert config.api_key == "secret"
    assert config.basic_auth == ("alice", "pw")
    assert config.timeout == 12.5


def test_missing_required_variables_fail_fast():
    with pytest.raises(ConfigError) as exc_info:
        ConnectionConfig.from_env({})

    message = str(exc_info.value)
    assert "N8N_BASE_URL" in message
    assert "N8N_API_KEY" in message


def test_blank_api_key_is_rejected():
    with pytest.raises(ConfigError, match="N8N_API_KEY"):
        ConnectionConfig.from_env({"N8N_BASE_URL": "http://localhost:5678", "N8N_API_KEY": "  "})


def test_from_env_defaults_to_process_environment(monkeypatch):
    monkeypatch.setenv("N8N_BASE_URL", "http://localhost:5678")
    monkeypatch.setenv("N8N_API_KEY", "from-env")
    monkeypatch.delenv("N8N_USER", raising=False)
    monkeypatch.delenv("N8N_PASSWORD", raising=False)
    monkeypatch.delenv("N8N_TIMEOUT", raising=False)

    config = ConnectionConfig.from_env()

    assert config.api_key == "from-env"
    assert config.basic_auth is None
    assert config.timeout == DEFAULT_TIMEOUT


@pytest.mark.parametrize("value", ["abc", "0", "-5"])
def test_invalid_timeout_falls_back_to_default(value):
    config = ConnectionConfig.from_env(
        {"N8N_BASE_URL": "http://localhost:5678", "N8N_API_KEY": "k", "N8N_TIMEOUT": value}
    )
    assert config.timeout == DEFAULT_TIMEOUT


def test_basic_auth_needs_both_halves():
    config = ConnectionConfig(base_url="http://localhost:5678", api_key="k", username="alice")
    assert config.basic_auth is None


def test_repr_hides_secrets():
    config = ConnectionConfig(
        base_url="http://localhost:5678", api_key="super-secret", username="u", password="hunter2"
    )
    assert "super-secret" not in repr(config)
    assert "hunter2" not in repr(config)


def test_config_is_immutable():
    config = ConnectionConfig(base_url="http://localhost:5678", api_key="k")
    with pytest.raises(AttributeError):
        config.api_key = "other"  # type: ignore[misc]
