from __future__ import annotations

import logging

from gateway_decoder.config import DecoderConfig, configure_logging, load_config

ENV_VARS = ("GATEWAY_DISCRIMINATOR_MODE", "GATEWAY_CHAIN_ID_WIDTH", "GATEWAY_LOG_LEVEL")


def clear_env(monkeypatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch) -> None:
    clear_env(monkeypatch)
    assert load_config() == DecoderConfig()
    assert load_config().discriminator_mode == "static"


def test_env_overrides(monkeypatch) -> None:
    clear_env(monkeypatch)
    monkeypatch.setenv("GATEWAY_DISCRIMINATOR_MODE", "Anchor")
    monkeypatch.setenv("GATEWAY_CHAIN_ID_WIDTH", "16")
    monkeypatch.setenv("GATEWAY_LOG_LEVEL", "debug")

    config = load_config()
    assert config.discriminator_mode == "anchor"
    assert config.chain_id_width == 16
    assert config.log_level == "DEBUG"


def test_unknown_mode_falls_back_to_static(monkeypatch, caplog) -> None:
    clear_env(monkeypatch)
    monkeypatch.setenv("GATEWAY_DISCRIMINATOR_MODE", "borsh")
    with caplog.at_level(logging.WARNING):
        config = load_config()
    assert config.discriminator_mode == "static"
    assert "[CONFIG]" in caplog.text


def test_bad_width_falls_back(monkeypatch) -> None:
    clear_env(monkeypatch)
    monkeypatch.setenv("GATEWAY_CHAIN_ID_WIDTH", "wide")
    assert load_config().chain_id_width == 32


def test_configure_logging_sets_package_level() -> None:
    logger = logging.getLogger("gateway_decoder")
    previous = logger.level
    try:
        configure_logging(DecoderConfig(log_level="DEBUG"))
        assert logger.level == logging.DEBUG
        configure_logging(DecoderConfig(log_level="NOPE"))
        assert logger.level == logging.WARNING
    finally:
        logger.setLevel(previous)
