"""
Interfaces Layer - Abstract Protocols for Dependencies.

This package defines the abstract interfaces (using typing.Protocol) for the
pluggable parts of the system. High-level controllers depend on these
abstractions, not on concrete implementations.

Protocols:
    - RecordSource: Paged access to raw person records
    - GroupingBackend: Asynchronous partition computation

Design Principles:
    - Use typing.Protocol (not ABC) for Pythonic interfaces
    - Interface Segregation: Small, focused interfaces
    - All methods have clear contracts in docstrings
"""

from people_directory.interfaces.grouping_backend import GroupingBackend
from people_directory.interfaces.record_source import RecordSource

__all__ = ["GroupingBackend", "RecordSource"]
