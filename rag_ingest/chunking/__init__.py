"""Text chunking strategies

Splits sanitized document text into windows for embedding generation.
"""

from .flat import split_text_into_chunks, TextChunker
from .hierarchical import (
    Chunk,
    SmallToBigChunker,
    create_small_to_big_chunks,
    new_parent_id,
)
from .windows import iter_windows, window_step

__all__ = [
    'Chunk',
    'SmallToBigChunker',
    'TextChunker',
    'create_small_to_big_chunks',
    'iter_windows',
    'new_parent_id',
    'split_text_into_chunks',
    'window_step',
]
