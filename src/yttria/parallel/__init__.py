"""Sequential/parallel dispatch strategy and its process-wide configuration."""

from yttria.parallel.config import (
    DEFAULT_PARALLEL_THRESHOLD,
    MAX_WORKERS_ENV_VAR,
    THRESHOLD_ENV_VAR,
    DispatchConfig,
    configure_parallelism,
    get_dispatch_config,
)
from yttria.parallel.dispatch import (
    BinaryOperation,
    ParallelDispatch,
    UnaryOperation,
    apply,
    check_output,
    tree_combine,
)

__all__ = [
    "DEFAULT_PARALLEL_THRESHOLD",
    "MAX_WORKERS_ENV_VAR",
    "THRESHOLD_ENV_VAR",
    "BinaryOperation",
    "DispatchConfig",
    "ParallelDispatch",
    "UnaryOperation",
    "apply",
    "check_output",
    "configure_parallelism",
    "get_dispatch_config",
    "tree_combine",
]
