"""Test helper modules for lifecycle testing.

This package provides:
- fake_content_store: in-memory stand-in for the Confluence content API
"""

from .fake_content_store import FakeContentStore

__all__ = [
    'FakeContentStore',
]
