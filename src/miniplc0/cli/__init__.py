"""
miniplc0 Command-Line Interface
===============================

- **plc0**: compile a miniplc0 program to a stack machine listing

The tool is a Click-based CLI application.
"""

__all__ = ["plc0"]
