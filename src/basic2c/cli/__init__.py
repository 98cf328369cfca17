"""
basic2c Command-Line Interface
==============================

- **b2c**: BASIC to C translator

Implemented as a Click-based CLI application with help and error
reporting.
"""

__all__ = ["b2c"]
