"""
streamlex Command-Line Interface
================================

- **streamlex**: dump the token stream of a source file

The tool is a Click-based CLI application with help text and the
shared exit codes from ``streamlex.cli.errors``.

Copyright (c) 2026 streamlex Contributors
"""

from streamlex.cli.dump import main

__all__ = ["main"]
