"""
Command line interface for rolerelay.
"""

from rolerelay.cli.app import main

__all__ = ["main"]
