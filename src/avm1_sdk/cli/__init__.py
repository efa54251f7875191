"""
AVM1 SDK Command-Line Interface
===============================

This package provides command-line tools for the AVM1 SDK:

- **avm1c**: AVM1 block translator

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["avm1c"]
