"""Data models for Confluence pages."""

from src.models.content_record import ContentRecord, parse_timestamp

__all__ = ['ContentRecord', 'parse_timestamp']
