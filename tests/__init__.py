"""
Unit Tests for Vanquish Engine

This package contains unit tests for all engine components.

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_rules.py

    # Run with coverage
    pytest tests/ --cov=vanquish_engine --cov-report=html

    # Run specific test
    pytest tests/test_search.py::TestSearchEngine::test_iterative_deepening_reaches_max_depth

Dependencies:
    - pytest: Test framework
    - pytest-cov: Coverage reporting
"""
