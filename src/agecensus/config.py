import os
from dataclasses import dataclass, field
from typing import Literal


BACKEND = Literal["thread", "process"]

DEFAULT_TOP_TIERS = 3


def default_parallelism() -> int:
    return os.cpu_count() or 1


@dataclass(frozen=True)
class CensusConfig:
    """
    Tunables for a `Census`.

    Args:
        parallelism: how many regions to scan simultaneously in multi-region queries (default: number of cores)
        top_tiers: how many distinct count tiers to include in the ranking. Ties can make the result longer.
        backend: "thread" runs region scans on a thread pool, "process" on a multiprocess pool.
            Sources created by the factory live in the worker that scans them.
        start_method: method used to spawn the process pool (process backend only)
        progress: show a progress bar over completed regions
    """

    parallelism: int = field(default_factory=default_parallelism)
    top_tiers: int = DEFAULT_TOP_TIERS
    backend: BACKEND = "thread"
    start_method: str = "forkserver"
    progress: bool = False

    def __post_init__(self):
        if self.parallelism < 1:
            raise ValueError(f"parallelism must be at least 1 (got {self.parallelism})")
        if self.top_tiers < 1:
            raise ValueError(f"top_tiers must be at least 1 (got {self.top_tiers})")
        if self.backend not in ("thread", "process"):
            raise ValueError(f'Unknown backend "{self.backend}", expected "thread" or "process"')


DEFAULT_CENSUS_CONFIG = CensusConfig()
