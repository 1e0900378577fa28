"""
Game Module

Headless game session: armies, turn alternation, move application and
victory detection around the engine.
"""

from vanquish_engine.game.session import GAME_MODES, GameSession

__all__ = ['GAME_MODES', 'GameSession']
