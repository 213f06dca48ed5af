"""
Single-level chunking into overlapping fixed-size windows.
"""

import logging
from typing import List, Dict, Any

from rag_ingest.text import sanitize_text
from .windows import iter_windows, validate_window

logger = logging.getLogger(__name__)


def split_text_into_chunks(text: str, chunk_size: int = 1000, overlap: int = 200) -> List[str]:
    """
    Split text into overlapping, whitespace-trimmed chunks.

    Args:
        text: Text to split. Sanitized before windowing.
        chunk_size: Window size in characters.
        overlap: Characters shared by consecutive windows.

    Returns:
        Non-empty chunks in document order.
    """
    validate_window(chunk_size, overlap)
    text = sanitize_text(text)

    chunks = []
    for start in iter_windows(len(text), chunk_size, overlap):
        chunk = text[start:start + chunk_size].strip()
        if chunk:
            chunks.append(chunk)

    logger.debug("Split %d characters into %d flat chunks", len(text), len(chunks))
    return chunks


class TextChunker:
    """Chunks text into overlapping segments for embedding."""

    def __init__(self, chunk_size: int = 1000, overlap: int = 200):
        """
        Initialize chunker.

        Args:
            chunk_size: Target chunk size in characters.
            overlap: Overlap between consecutive chunks.
        """
        validate_window(chunk_size, overlap)
        self.chunk_size = chunk_size
        self.overlap = overlap

    def chunk_text(self, text: str, source: str = "unknown") -> List[Dict[str, Any]]:
        """
        Chunk text into overlapping segments.

        Args:
            text: Text to chunk.
            source: Source reference for chunks.

        Returns:
            List of chunk dictionaries with content, source and chunk_index.
        """
        return [
            {
                'content': content,
                'source': source,
                'chunk_index': index,
            }
            for index, content in enumerate(
                split_text_into_chunks(text, self.chunk_size, self.overlap)
            )
        ]
