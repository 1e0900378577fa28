"""
Unit Tests for Utilities

Tests for the tactical suite and the logging setup.
"""

import logging

import pytest

from vanquish_engine.rules import legal_destinations
from vanquish_engine.search import SearchConfig, SearchEngine
from vanquish_engine.utils import (
    TACTICAL_POSITIONS,
    TacticalPosition,
    evaluate_position,
    run_tactics,
    setup_logger,
)


class TestTacticalPositions:
    """Sanity checks on the suite itself."""

    @pytest.mark.parametrize("position", TACTICAL_POSITIONS, ids=lambda p: p.id)
    def test_best_moves_are_legal(self, position):
        board = position.board

        for move in position.best_moves:
            assert board[move.origin].is_friendly_to(position.side)
            assert move.destination in legal_destinations(board, move.origin)

    def test_ids_are_unique(self):
        ids = [position.id for position in TACTICAL_POSITIONS]

        assert len(ids) == len(set(ids))


class TestRunTactics:
    """Tests for evaluate_position() and run_tactics()."""

    def test_depth_one_solves_everything(self):
        results = run_tactics(depth=1, verbose=False)

        assert results['score'] == results['total'] == len(TACTICAL_POSITIONS)
        assert results['percentage'] == 100.0
        assert all(result.depth == 1 for result in results['results'])

    def test_evaluate_position(self):
        position = TACTICAL_POSITIONS[0]
        result = evaluate_position(position, SearchEngine(SearchConfig(max_depth=2)))

        assert result.correct
        assert result.found_move == position.best_moves[0]
        assert result.nodes_searched > 0

    def test_position_without_moves_is_wrong(self, caplog):
        """A position the engine cannot move in is reported, not raised."""
        position = TacticalPosition(
            id="EMPTY",
            diagram="\n".join(["g......."] + ["........"] * 7),
            best_moves=[],
        )

        with caplog.at_level(logging.ERROR):
            result = evaluate_position(position, SearchEngine())

        assert not result.correct
        assert result.found_move is None
        assert "EMPTY" in caplog.text

    def test_wrong_move_is_counted(self):
        """An expected move the engine does not play lowers the score."""
        position = TACTICAL_POSITIONS[0]
        decoy = TacticalPosition(
            id="DECOY",
            diagram=position.diagram,
            best_moves=[TACTICAL_POSITIONS[1].best_moves[0]],
        )

        results = run_tactics(depth=1, positions=[position, decoy], verbose=False)

        assert results['score'] == 1
        assert results['percentage'] == 50.0

    def test_verbose_output(self, capsys):
        run_tactics(depth=1, positions=TACTICAL_POSITIONS[:1], verbose=True)

        out = capsys.readouterr().out
        assert "TACTICAL TEST SUITE" in out
        assert "Score: 1/1" in out


class TestSetupLogger:
    """Tests for setup_logger()."""

    def test_writes_to_file(self, tmp_path):
        log_file = tmp_path / "engine.log"
        logger = setup_logger(debug=True, log_file=log_file)

        try:
            assert logger.level == logging.DEBUG
            logging.getLogger("vanquish_engine.search").debug("search trace line")
            for handler in logger.handlers:
                handler.flush()

            assert "search trace line" in log_file.read_text()
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()

    def test_info_level(self, tmp_path):
        logger = setup_logger(debug=False, log_file=tmp_path / "engine.log")

        try:
            assert logger.level == logging.INFO
            assert len(logger.handlers) == 1
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()
