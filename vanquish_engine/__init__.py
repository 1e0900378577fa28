"""
Vanquish Engine

Decision engine for a two-player strategy game on an 8x8 board: move
generation for seven kinds of units, in-place make/undo with Zobrist hashing,
and an iterative-deepening negamax search.

## Architecture

The engine is organized into several key modules:

1. **board**: Board representation and army layouts
   - Perspective-relative board (friendly / enemy units)
   - Classic and random "modern" armies

2. **rules**: Rules of the game
   - One move pattern per unit kind
   - Captures, Archer strikes, promotions
   - Pure state transition with events

3. **evaluation**: Position evaluation functions
   - Abstract Evaluator interface (swappable design)
   - MaterialEvaluator: unit values weighted by a position table

4. **search**: Search algorithms
   - Negamax with alpha-beta pruning and iterative deepening
   - Quiescence search over captures
   - Transposition table with Zobrist hashing
   - Killer and history move ordering

5. **game**: Headless game session
   - Turn alternation, move application, victory, conceding

6. **utils**: Testing and benchmarking utilities
   - Tactical test suite
   - Logger setup

## Quick Start

```python
from vanquish_engine.board import CLASSIC_ARMY, initial_board
from vanquish_engine.search import SearchConfig, SearchEngine

engine = SearchEngine(SearchConfig(max_depth=3, time_limit_ms=1000))
board = initial_board(CLASSIC_ARMY)

result = engine.search(board, side=True)
print(f"Best move: {result.move} (score: {result.score})")
```

## Version

0.1.0
"""

__version__ = "0.1.0"

from vanquish_engine.board import Board, Coordinate, Move, UnitKind
from vanquish_engine.evaluation import Evaluator, MaterialEvaluator
from vanquish_engine.game import GameSession
from vanquish_engine.search import SearchConfig, SearchEngine, find_best_move

__all__ = [
    'Board',
    'Coordinate',
    'Move',
    'UnitKind',
    'Evaluator',
    'MaterialEvaluator',
    'GameSession',
    'SearchConfig',
    'SearchEngine',
    'find_best_move',
]
