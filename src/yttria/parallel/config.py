"""Process-wide configuration for sequential/parallel dispatch."""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import Mapping


logger = logging.getLogger(__name__)

DEFAULT_PARALLEL_THRESHOLD = 65_536
THRESHOLD_ENV_VAR = "YTTRIA_PARALLEL_THRESHOLD"
MAX_WORKERS_ENV_VAR = "YTTRIA_MAX_WORKERS"


@dataclass(frozen=True, slots=True)
class DispatchConfig:
    """Length threshold and worker bound for data-parallel execution.

    Sequences shorter than ``threshold`` run sequentially. ``max_workers`` bounds
    both the shared pool size and the number of chunks a sequence is split into.
    """

    threshold: int = DEFAULT_PARALLEL_THRESHOLD
    max_workers: int = 1

    def __post_init__(self) -> None:
        if self.threshold < 0:
            raise ValueError("threshold must be >= 0")
        if self.max_workers <= 0:
            raise ValueError("max_workers must be > 0")


_config: DispatchConfig | None = None
_config_lock = threading.Lock()


def configure_parallelism(
    *,
    threshold: int | None = None,
    max_workers: int | None = None,
) -> DispatchConfig:
    """Set the process-wide dispatch configuration exactly once.

    Must run before the first dispatched operation; afterwards the configuration
    is read-only and per-call ``threshold=`` arguments are the way to override it.
    """
    global _config
    with _config_lock:
        if _config is not None:
            raise RuntimeError("parallel dispatch configuration is already initialized")
        _config = DispatchConfig(
            threshold=DEFAULT_PARALLEL_THRESHOLD if threshold is None else threshold,
            max_workers=_default_max_workers() if max_workers is None else max_workers,
        )
        logger.info(
            "Parallel dispatch configured: threshold=%d max_workers=%d",
            _config.threshold,
            _config.max_workers,
        )
        return _config


def get_dispatch_config() -> DispatchConfig:
    """Return the process-wide configuration, resolving it from the environment on first use."""
    global _config
    with _config_lock:
        if _config is None:
            _config = _config_from_environment(os.environ)
            logger.debug(
                "Parallel dispatch resolved from environment: threshold=%d max_workers=%d",
                _config.threshold,
                _config.max_workers,
            )
        return _config


def _config_from_environment(environ: Mapping[str, str]) -> DispatchConfig:
    threshold = _read_int(environ, THRESHOLD_ENV_VAR, DEFAULT_PARALLEL_THRESHOLD)
    max_workers = _read_int(environ, MAX_WORKERS_ENV_VAR, _default_max_workers())
    return DispatchConfig(threshold=threshold, max_workers=max_workers)


def _read_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _default_max_workers() -> int:
    return max(1, os.cpu_count() or 1)
