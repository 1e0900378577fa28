"""
Search Module

This module implements the engine's search: iterative-deepening negamax with
alpha-beta pruning, quiescence search, a transposition table keyed by Zobrist
hashes, and killer/history move ordering.

Key Components:
    - SearchEngine: Iterative deepening driver and tree search
    - GameState: In-place make/undo with a rolling hash
    - ZobristHasher: Engine-owned random key table
    - TranspositionTable: Per-search cache of node results
    - MoveOrdering: TT move, captures, killer moves, history
"""

from vanquish_engine.search.config import SearchConfig
from vanquish_engine.search.game_state import GameState, UndoEntry
from vanquish_engine.search.negamax import SearchEngine, SearchResult, find_best_move
from vanquish_engine.search.ordering import MoveOrdering
from vanquish_engine.search.transposition import NodeType, TranspositionTable, TTEntry
from vanquish_engine.search.zobrist import ZobristHasher

__all__ = [
    'SearchConfig',
    'GameState',
    'UndoEntry',
    'SearchEngine',
    'SearchResult',
    'find_best_move',
    'MoveOrdering',
    'NodeType',
    'TranspositionTable',
    'TTEntry',
    'ZobristHasher',
]
