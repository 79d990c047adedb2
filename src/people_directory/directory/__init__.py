"""
Directory Package - Session Composition Root.

    - DirectoryController: Wires pagination, search and grouping for one session
"""

from people_directory.directory.controller import DirectoryController

__all__ = ["DirectoryController"]
