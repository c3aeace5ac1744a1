"""Shared fixtures for dispatch configuration in unit tests."""

from __future__ import annotations

from typing import Iterator

import pytest

import yttria.parallel.config as dispatch_config
from yttria.parallel import DispatchConfig


@pytest.fixture(autouse=True)
def unresolved_dispatch_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Every test starts before the process-wide configuration is resolved."""
    monkeypatch.delenv(dispatch_config.THRESHOLD_ENV_VAR, raising=False)
    monkeypatch.delenv(dispatch_config.MAX_WORKERS_ENV_VAR, raising=False)
    monkeypatch.setattr(dispatch_config, "_config", None)
    yield


@pytest.fixture
def four_workers(monkeypatch: pytest.MonkeyPatch) -> DispatchConfig:
    """Resolve a four-worker pool so parallel paths run even on one CPU."""
    config = DispatchConfig(threshold=dispatch_config.DEFAULT_PARALLEL_THRESHOLD, max_workers=4)
    monkeypatch.setattr(dispatch_config, "_config", config)
    return config
