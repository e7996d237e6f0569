from __future__ import annotations

import pytest

from stellarix.config import RuntimeConfig


def test_defaults() -> None:
    config = RuntimeConfig()
    assert config.debug is False
    assert config.max_chain_depth == 1
    assert config.payload_key == "event"
    assert config.default_version == "0.0.1"


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STELLARIX_DEBUG", "yes")
    monkeypatch.setenv("STELLARIX_MAX_CHAIN_DEPTH", "3")
    monkeypatch.setenv("STELLARIX_PAYLOAD_KEY", "detail")
    monkeypatch.setenv("STELLARIX_DEFAULT_VERSION", "2.0.0")

    config = RuntimeConfig.from_env()

    assert config.debug is True
    assert config.max_chain_depth == 3
    assert config.payload_key == "detail"
    assert config.default_version == "2.0.0"


def test_overrides_take_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STELLARIX_DEBUG", "1")
    monkeypatch.setenv("STELLARIX_MAX_CHAIN_DEPTH", "4")

    config = RuntimeConfig.from_env(debug=False, max_chain_depth=0)

    assert config.debug is False
    assert config.max_chain_depth == 0


def test_unrecognized_bool_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STELLARIX_DEBUG", "maybe")
    assert RuntimeConfig.from_env().debug is False


def test_invalid_values_rejected() -> None:
    with pytest.raises(ValueError):
        RuntimeConfig(max_chain_depth=-1)
    with pytest.raises(ValueError):
        RuntimeConfig(payload_key="")
