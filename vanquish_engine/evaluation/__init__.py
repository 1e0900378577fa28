"""
Evaluation Module

This module provides position evaluation functions for the engine.
The key design principle is that evaluators are SWAPPABLE - the search
algorithm should work with any evaluator that implements the base interface.

Key Components:
    - Evaluator (ABC): Abstract base class defining the evaluation interface
    - MaterialEvaluator: unit values weighted by a position table

Data Flow:
    Board → evaluator.evaluate() → float
                                    Positive = friendly advantage
                                    Negative = enemy advantage
                                    ±inf     = decided game
"""

from vanquish_engine.evaluation.base import Evaluator, INFINITY
from vanquish_engine.evaluation.material import MaterialEvaluator

__all__ = ['Evaluator', 'MaterialEvaluator', 'INFINITY']
