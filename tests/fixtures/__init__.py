"""
Test Fixtures - Shared Test Data and Configurations.

This package contains reusable test fixtures:
    - sample_config.yaml: Sample configuration for testing
    - people.py: Person and raw record builders
    - helpers.py: Waiting on asynchronous state in tests

Usage:
    Import fixtures in test files via pytest fixtures or direct import.
"""
