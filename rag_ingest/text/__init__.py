"""Text repair helpers applied before chunking and indexing."""

from .sanitizer import sanitize_text, truncate_utf16, utf16_length

__all__ = ['sanitize_text', 'truncate_utf16', 'utf16_length']
