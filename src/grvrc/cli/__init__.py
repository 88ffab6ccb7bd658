"""
grvrc Command-Line Interface
============================

This package provides the command-line tool for the rc parser:

- **grvrc**: rc file checker

The tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["grvrc_check"]
