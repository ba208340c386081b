"""Command-line interface for managing a Confluence page.

This package provides the `confluence-page` CLI tool, a thin caller of the
content lifecycle client with progress indication and exit codes.
"""

from .models import ExitCode
from .output import OutputHandler

__all__ = [
    'ExitCode',
    'OutputHandler',
]
