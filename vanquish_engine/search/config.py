"""
Search configuration.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class SearchConfig:
    """Configuration for the search engine.

    Fixed when the engine is constructed; every search call made by that
    engine uses the same limits.
    """

    # Depth limits
    max_depth: int = 3
    """Deepest iteration of iterative deepening"""

    quiescence_depth: int = 3
    """Capture plies searched past the horizon of the main search"""

    # Time management
    time_limit_ms: int = 1000
    """Wall-clock budget, checked between completed depths only"""

    # Hashing
    zobrist_seed: Optional[int] = None
    """Seed of the engine's Zobrist key table (None for random)"""

    max_table_size: int = 1_000_000
    """Maximum number of transposition table entries"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")

        if self.quiescence_depth < 0:
            raise ValueError(
                f"quiescence_depth must be non-negative, got {self.quiescence_depth}"
            )

        if self.time_limit_ms < 0:
            raise ValueError(f"time_limit_ms must be non-negative, got {self.time_limit_ms}")

        if self.max_table_size <= 0:
            raise ValueError(f"max_table_size must be positive, got {self.max_table_size}")

    def __repr__(self) -> str:
        """String representation of config."""
        return (
            f"SearchConfig(\n"
            f"  Depth: max={self.max_depth}, quiescence={self.quiescence_depth}\n"
            f"  Time limit: {self.time_limit_ms} ms\n"
            f"  Zobrist seed: {self.zobrist_seed}\n"
            f"  Table size: {self.max_table_size}\n"
            f")"
        )
