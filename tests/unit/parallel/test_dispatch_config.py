"""Tests for process-wide dispatch configuration."""

from __future__ import annotations

import pytest

import yttria.parallel.config as dispatch_config
from yttria.parallel import (
    DEFAULT_PARALLEL_THRESHOLD,
    DispatchConfig,
    configure_parallelism,
    get_dispatch_config,
)


def test_dispatch_config_validates_fields() -> None:
    with pytest.raises(ValueError, match="threshold must be >= 0"):
        DispatchConfig(threshold=-1)
    with pytest.raises(ValueError, match="max_workers must be > 0"):
        DispatchConfig(threshold=10, max_workers=0)


def test_get_dispatch_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dispatch_config.os, "cpu_count", lambda: 6)
    config = get_dispatch_config()

    assert config.threshold == DEFAULT_PARALLEL_THRESHOLD
    assert config.max_workers == 6
    assert get_dispatch_config() is config


def test_get_dispatch_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("YTTRIA_PARALLEL_THRESHOLD", "1024")
    monkeypatch.setenv("YTTRIA_MAX_WORKERS", " 3 ")
    config = get_dispatch_config()

    assert config == DispatchConfig(threshold=1024, max_workers=3)


def test_get_dispatch_config_rejects_invalid_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("YTTRIA_PARALLEL_THRESHOLD", "lots")
    with pytest.raises(ValueError, match="YTTRIA_PARALLEL_THRESHOLD must be an integer"):
        get_dispatch_config()


def test_configure_parallelism_sets_once() -> None:
    config = configure_parallelism(threshold=0, max_workers=2)

    assert get_dispatch_config() is config
    with pytest.raises(RuntimeError, match="already initialized"):
        configure_parallelism(threshold=10)


def test_configure_parallelism_after_resolution_is_rejected() -> None:
    get_dispatch_config()
    with pytest.raises(RuntimeError, match="already initialized"):
        configure_parallelism(threshold=10)
