"""
CLI MODULE
==========

Command-line interface for conversation management.

Usage:
    python -m convo_core.cli manage <file> --message <text>
    python -m convo_core.cli assess <file>
    python -m convo_core.cli summarize <file>
"""

from .main import main, load_messages

__all__ = [
    'main',
    'load_messages',
]
