"""
Transposition Table

This module implements a transposition table (TT) - a hash table that caches
search results keyed by the Zobrist hash of a position, so that a position
reached again through a different move order is not searched twice.

Lifetime:
    The table is a working set for ONE top-level search call. Entries are
    stored fresh while the search runs and are shared between the depths of
    iterative deepening. When the search finishes, sweep() deletes every
    entry that is already stale and marks all remaining entries stale.
    Stale entries are never used for cutoffs or move ordering, and the next
    call's sweep removes them.

References:
    - Transposition Table: https://www.chessprogramming.org/Transposition_Table
"""

from enum import Enum
from typing import Dict, Optional

from vanquish_engine.board.representation import Move


class NodeType(Enum):
    """
    Type of node in search tree.

    This determines how we can use the cached value:
        - EXACT: The exact evaluation (all moves searched)
        - LOWER_BOUND: Beta cutoff occurred (eval >= beta)
        - UPPER_BOUND: No move raised alpha (eval <= alpha)
    """
    EXACT = 0
    LOWER_BOUND = 1  # Value is at least this good
    UPPER_BOUND = 2  # Value is at most this good


class TTEntry:
    """
    Entry in the transposition table.

    Attributes:
        zobrist_hash: 64-bit hash of position
        depth: Remaining search depth of this entry
        value: Score from the friendly side's perspective
        node_type: EXACT, LOWER_BOUND, or UPPER_BOUND
        best_move: Best move found in this position
        stale: True once the search that produced the entry has finished
    """

    __slots__ = ("zobrist_hash", "depth", "value", "node_type", "best_move", "stale")

    def __init__(
        self,
        zobrist_hash: int,
        depth: int,
        value: float,
        node_type: NodeType,
        best_move: Optional[Move] = None,
    ):
        self.zobrist_hash = zobrist_hash
        self.depth = depth
        self.value = value
        self.node_type = node_type
        self.best_move = best_move
        self.stale = False

    def __repr__(self) -> str:
        return (
            f"TTEntry(hash={self.zobrist_hash}, depth={self.depth}, "
            f"value={self.value:.2f}, type={self.node_type}, move={self.best_move}, "
            f"stale={self.stale})"
        )


class TranspositionTable:
    """
    Transposition table for caching search results.

    Attributes:
        max_size: Maximum number of entries (memory limit)
        table: Dictionary mapping hash → TTEntry
    """

    def __init__(self, max_size: int = 1_000_000):
        """
        Initialize transposition table.

        Args:
            max_size: Maximum number of entries; the oldest entry is evicted
                when the table grows past it
        """
        self.max_size = max_size
        self.table: Dict[int, TTEntry] = {}
        self.hits = 0
        self.misses = 0
        self.swept = 0

    def store(
        self,
        zobrist_hash: int,
        depth: int,
        value: float,
        node_type: NodeType,
        best_move: Optional[Move] = None,
    ):
        """
        Store (or overwrite) the result of a finished node.

        Args:
            zobrist_hash: Zobrist hash of the position
            depth: Remaining depth the node was searched to
            value: Score from the friendly side's perspective
            node_type: EXACT, LOWER_BOUND, or UPPER_BOUND
            best_move: Best move found (optional)
        """
        # Re-inserting moves the key to the end of the eviction order
        self.table.pop(zobrist_hash, None)
        self.table[zobrist_hash] = TTEntry(zobrist_hash, depth, value, node_type, best_move)

        if len(self.table) > self.max_size:
            del self.table[next(iter(self.table))]

    def lookup(self, zobrist_hash: int, depth: int = 0) -> Optional[TTEntry]:
        """
        Look up a position in the transposition table.

        Args:
            zobrist_hash: Zobrist hash of the position
            depth: Current remaining depth (only use if cached depth >= this)

        Returns:
            TTEntry if found, fresh and deep enough, None otherwise
        """
        entry = self.table.get(zobrist_hash)
        if entry is not None and not entry.stale and entry.depth >= depth:
            self.hits += 1
            return entry

        self.misses += 1
        return None

    def best_move(self, zobrist_hash: int) -> Optional[Move]:
        """Best move stored for a position, for move ordering (fresh entries only)."""
        entry = self.table.get(zobrist_hash)
        if entry is None or entry.stale:
            return None
        return entry.best_move

    def sweep(self) -> int:
        """
        End-of-search mark-and-sweep.

        Deletes the entries that were already stale and marks the survivors
        stale.

        Returns:
            Number of entries deleted
        """
        stale_keys = [key for key, entry in self.table.items() if entry.stale]
        for key in stale_keys:
            del self.table[key]
        for entry in self.table.values():
            entry.stale = True
        self.swept += len(stale_keys)
        return len(stale_keys)

    def clear(self):
        """Clear all entries from the transposition table."""

        self.table.clear()
        self.hits = 0
        self.misses = 0
        self.swept = 0

    def get_stats(self) -> Dict[str, float]:
        """Get statistics about transposition table usage."""

        total_lookups = self.hits + self.misses
        hit_rate = (self.hits / total_lookups * 100) if total_lookups > 0 else 0

        return {
            'entries': len(self.table),
            'hits': self.hits,
            'misses': self.misses,
            'swept': self.swept,
            'hit_rate': hit_rate,
        }

    def __len__(self) -> int:
        return len(self.table)

    def __contains__(self, zobrist_hash: int) -> bool:
        return zobrist_hash in self.table

    def __repr__(self) -> str:
        stats = self.get_stats()
        return (
            f"TranspositionTable(entries={stats['entries']}, "
            f"hit_rate={stats['hit_rate']:.1f}%)"
        )
