import pytest

from cargorelay.config import RelayConfig, is_webhook_configured


def test_from_env_defaults(monkeypatch):
    for name in (
        "CARGO_WEBHOOK_URL",
        "CARGO_WEBHOOK_TIMEOUT_SEC",
        "CARGO_WEBHOOK_USER_AGENT",
        "CARGO_DEBUG_LOG_PATH",
        "CARGO_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    cfg = RelayConfig.from_env()

    assert cfg.webhook_url == ""
    assert cfg.webhook_configured is False
    assert cfg.timeout_sec == 30
    assert cfg.user_agent == "Cargo-Relay-Webhook/1.0"
    assert cfg.debug_log_path is None
    assert cfg.log_level == "INFO"


def test_from_env_reads_overrides(monkeypatch):
    monkeypatch.setenv("CARGO_WEBHOOK_URL", " https://hooks.example.com/cargo ")
    monkeypatch.setenv("CARGO_WEBHOOK_TIMEOUT_SEC", "5")
    monkeypatch.setenv("CARGO_LOG_LEVEL", "debug")

    cfg = RelayConfig.from_env()

    assert cfg.webhook_url == "https://hooks.example.com/cargo"
    assert cfg.webhook_configured is True
    assert cfg.timeout_sec == 5
    assert cfg.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["abc", "0", "-3"])
def test_invalid_timeout_falls_back_to_default(monkeypatch, raw):
    monkeypatch.setenv("CARGO_WEBHOOK_TIMEOUT_SEC", raw)

    assert RelayConfig.from_env().timeout_sec == 30


@pytest.mark.parametrize(
    "url, configured",
    [
        (None, False),
        ("", False),
        ("   ", False),
        ("https://your-n8n-domain.com/webhook/cargo", False),
        ("https://aistudio.example.com/webhook/form/cargo_selection", True),
    ],
)
def test_is_webhook_configured(url, configured):
    assert is_webhook_configured(url) is configured
