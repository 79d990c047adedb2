"""
Reactive Package - Observable State with a Single Writer.

The controllers own writable cells and streams; consumers receive read-only
views and detach through the Subscription handle.
"""

from people_directory.reactive.cells import (
    EventStream,
    ReadOnlyCell,
    ReadOnlyStream,
    StateCell,
    StreamClosedError,
    Subscription,
)

__all__ = [
    "EventStream",
    "ReadOnlyCell",
    "ReadOnlyStream",
    "StateCell",
    "StreamClosedError",
    "Subscription",
]
