"""Test fixtures for page lifecycle tests.

This module provides:
- Sample storage-format bodies, valid and refused
- A builder for REST v2 page documents
"""

from .sample_pages import (
    VALID_PAGE_SIMPLE,
    VALID_PAGE_WITH_MACROS,
    VALID_PAGE_LENIENT,
    page_document,
)

__all__ = [
    'VALID_PAGE_SIMPLE',
    'VALID_PAGE_WITH_MACROS',
    'VALID_PAGE_LENIENT',
    'page_document',
]
