"""
Headless Game Session

GameSession owns the authoritative board of one game and everything the
engine deliberately leaves to its caller: setting up the armies, whose turn
it is, applying moves, detecting the end of the game and conceding.

The board is kept in the local player's orientation: the player's units are
friendly, the computer's units are enemy. The engine is only ever handed
snapshots, never the session's own board.
"""

import logging
from typing import List, Optional

import numpy as np

from vanquish_engine.board.armies import CLASSIC_ARMY, initial_board, modern_army
from vanquish_engine.board.representation import Board, Coordinate, Move
from vanquish_engine.rules.movement import legal_destinations
from vanquish_engine.rules.transition import EventKind, GameEvent, apply_move, winner
from vanquish_engine.search.config import SearchConfig
from vanquish_engine.search.negamax import SearchEngine

logger = logging.getLogger(__name__)

GAME_MODES = ("classic", "modern")


class GameSession:
    """
    One game between the local player and the computer.

    Attributes:
        board: Authoritative board, player's perspective
        turn: Number of turns completed
        player_to_move: True while it is the local player's turn
        engine: Search engine used for suggestions and the computer's moves
        moves: Every move played so far
    """

    def __init__(
        self,
        board: Board,
        config: Optional[SearchConfig] = None,
        player_to_move: bool = True,
    ):
        """
        Start a session from an existing position.

        Args:
            board: Starting position, player's perspective (copied)
            config: Search limits of the session's engine
            player_to_move: True if the local player moves first
        """
        self.board = board.copy()
        self.turn = 0
        self.player_to_move = player_to_move
        self.engine = SearchEngine(config)
        self.moves: List[Move] = []
        self.conceded = False

    @classmethod
    def new_game(
        cls,
        mode: str = "classic",
        config: Optional[SearchConfig] = None,
        seed: Optional[int] = None,
    ) -> "GameSession":
        """
        Set up a fresh game.

        Args:
            mode: "classic" (fixed armies) or "modern" (random armies)
            config: Search limits of the session's engine
            seed: Seed for the modern army draw

        Raises:
            ValueError: On an unknown mode
        """
        if mode == "classic":
            board = initial_board(CLASSIC_ARMY)
        elif mode == "modern":
            # One draw for both sides: the opponent gets the mirrored army
            board = initial_board(modern_army(np.random.default_rng(seed)))
        else:
            raise ValueError(f"Unknown game mode: {mode!r}. Expected one of {GAME_MODES}")

        logger.info(f"New {mode} game")
        return cls(board, config)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def snapshot(self, for_player: bool = True) -> Board:
        """
        Independent copy of the board from one side's point of view.

        Args:
            for_player: True for the local player's view, False for the
                computer's (side flags inverted)
        """
        return self.board.copy() if for_player else self.board.flipped()

    @property
    def winner(self) -> Optional[bool]:
        """True if the player won, False if the computer won, None while playing."""
        if self.conceded:
            return False
        return winner(self.board)

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    def legal_moves(self) -> List[Move]:
        """Every legal move of the side to move."""
        moves = []
        for origin in self.board.units(self.player_to_move):
            for dest in sorted(legal_destinations(self.board, origin)):
                moves.append(Move(origin, dest))
        return moves

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def play(self, move) -> List[GameEvent]:
        """
        Play a move for the side to move.

        The turn passes to the other side unless the move ends the game.

        Args:
            move: Move (or pair of coordinates)

        Returns:
            Events caused by the move

        Raises:
            RuntimeError: If the game is already over
            ValueError: If the move is not a legal move of the side to move
        """
        if self.is_over:
            raise RuntimeError("The game is over")

        origin, destination = move
        move = Move(Coordinate(*origin), Coordinate(*destination))
        if not self.board[move.origin].is_friendly_to(self.player_to_move):
            raise ValueError(f"No unit of the side to move on {tuple(move.origin)}")

        transition = apply_move(self.board, move)
        self.board = transition.board
        self.moves.append(move)
        logger.debug(
            f"Turn {self.turn}: {'player' if self.player_to_move else 'computer'} plays {move}"
        )

        if transition.game_over:
            logger.info(
                f"Game over after {len(self.moves)} moves: "
                f"{'player' if self.winner else 'computer'} wins"
            )
        else:
            self.turn += 1
            self.player_to_move = not self.player_to_move

        return transition.events

    def suggest_move(self) -> Move:
        """Engine suggestion for the local player."""
        return self.engine.find_best_move(self.snapshot(for_player=True), side=True)

    def opponent_move(self) -> Move:
        """The computer's choice, searched from the computer's point of view."""
        return self.engine.find_best_move(self.snapshot(for_player=False), side=True)

    def concede(self) -> GameEvent:
        """The local player gives up."""
        if self.is_over:
            raise RuntimeError("The game is over")
        self.conceded = True
        logger.info(f"Player conceded after {len(self.moves)} moves")
        return GameEvent(EventKind.GAME_OVER, friendly=False)

    def __repr__(self) -> str:
        return (
            f"GameSession(turn={self.turn}, "
            f"to_move={'player' if self.player_to_move else 'computer'}, over={self.is_over})"
        )
