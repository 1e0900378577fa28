#!/usr/bin/env python3
"""
CLI tool for engine-vs-engine games.

Both sides of a GameSession are played by the session's engine: the local
player follows suggest_move() and the computer plays opponent_move().

Usage:
    python tools/self_play.py --games 10 --mode modern --depth 2 \\
        --time-limit 500 --max-turns 200 --seed 7
"""

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path

from tqdm import tqdm

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from vanquish_engine.game.session import GAME_MODES, GameSession
from vanquish_engine.search.config import SearchConfig
from vanquish_engine.utils.log import setup_logger

logger = logging.getLogger(__name__)


def play_game(mode: str, config: SearchConfig, max_turns: int, seed=None) -> str:
    """
    Play one game to the end or to the turn limit.

    Returns:
        "player", "computer" or "unfinished"
    """
    session = GameSession.new_game(mode, config, seed=seed)

    while not session.is_over and session.turn < max_turns:
        if not session.legal_moves():
            break
        if session.player_to_move:
            move = session.suggest_move()
        else:
            move = session.opponent_move()
        session.play(move)

    if session.winner is None:
        return "unfinished"
    return "player" if session.winner else "computer"


def main():
    parser = argparse.ArgumentParser(
        description="Play engine-vs-engine games",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--games", type=int, default=10, help="Number of games")
    parser.add_argument("--mode", choices=GAME_MODES, default="classic", help="Army set-up")
    parser.add_argument("--depth", type=int, default=2, help="Maximum search depth")
    parser.add_argument("--quiescence-depth", type=int, default=3, help="Quiescence depth")
    parser.add_argument("--time-limit", type=int, default=1000, help="Time budget per move (ms)")
    parser.add_argument("--max-turns", type=int, default=200, help="Turns before a game is abandoned")
    parser.add_argument("--seed", type=int, default=None, help="Seed for modern armies")
    parser.add_argument("--log-file", type=str, default=None, help="Write engine logs to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")

    args = parser.parse_args()

    if args.log_file:
        setup_logger(debug=args.verbose, log_file=args.log_file)
    else:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    try:
        config = SearchConfig(
            max_depth=args.depth,
            quiescence_depth=args.quiescence_depth,
            time_limit_ms=args.time_limit,
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    results = Counter()
    try:
        for game in tqdm(range(args.games), desc="Self-play", unit="game"):
            seed = None if args.seed is None else args.seed + game
            outcome = play_game(args.mode, config, args.max_turns, seed)
            results[outcome] += 1
            logger.info(f"Game {game + 1}: {outcome}")
    except KeyboardInterrupt:
        print("\n\nSelf-play interrupted by user")
        sys.exit(1)

    print("\n" + "=" * 60)
    print("SELF-PLAY RESULTS")
    print("=" * 60)
    print(f"Mode: {args.mode}, depth {args.depth}, {args.time_limit} ms per move")
    print(f"Player wins:   {results['player']}")
    print(f"Computer wins: {results['computer']}")
    print(f"Unfinished:    {results['unfinished']}")
    print("=" * 60)


if __name__ == "__main__":
    main()
