"""
Test Suite for People Directory.

Test organization:
    - unit/: Unit tests for individual components
    - integration/: Directory sessions wired end to end
    - fixtures/: Shared builders and sample configuration

Running Tests:
    pytest tests/                           # All tests
    pytest tests/unit/                      # Unit tests only
    pytest tests/integration/               # Integration tests only
    pytest -m "not slow"                    # Skip worker-process tests
"""
