"""
Unit Tests - Testing Individual Components in Isolation.

Each component is tested in isolation with fakes for its collaborators.
Unit tests should be fast, deterministic, and focused.

Test Files:
    - test_grouping_engine.py: Partition algorithm and ordering
    - test_grouping_coordinator.py: Request/result/loading contract
    - test_search_orchestrator.py: Debounced search driving regrouping
    - test_pagination_controller.py: Paged loading and error handling
    - test_config_loader.py: Configuration loading/validation
"""
