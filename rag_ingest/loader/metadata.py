"""
Per-chunk metadata records stored alongside vectors.

Every record carries:
- document_id: owning document
- file_name: original upload name
- owner_id: user that owns the document
- chunk_index / total_chunks: position within the document
- text: sanitized text, capped at MAX_METADATA_TEXT_LENGTH UTF-16 units
- parent_id: parent window id (only when supplied)
- created_at: ISO 8601 UTC timestamp, millisecond precision
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from rag_ingest.text import sanitize_text, truncate_utf16

# Vector index metadata is capped at 40KB per record; 10k UTF-16 units stays
# under it even for 3-byte UTF-8 scripts.
MAX_METADATA_TEXT_LENGTH = 10000


def utc_timestamp() -> str:
    """Current UTC time as e.g. 2024-05-01T12:00:00.123Z."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def create_document_metadata(document_id: str, file_name: str, owner_id: str,
                             chunk_index: int, total_chunks: int, text: str,
                             parent_id: Optional[str] = None,
                             max_text_length: int = MAX_METADATA_TEXT_LENGTH) -> Dict[str, Any]:
    """
    Build the metadata record for one chunk.

    Text is sanitized first and then truncated, so the length cap applies to
    the cleaned text.

    Args:
        document_id: Document identifier
        file_name: Original file name
        owner_id: Owning user id
        chunk_index: Index of the chunk within the document
        total_chunks: Number of chunks in the document
        text: Chunk (or parent window) text
        parent_id: Parent window id; the key is omitted when None
        max_text_length: Cap for text, in UTF-16 code units

    Returns:
        Metadata dict
    """
    metadata = {
        'document_id': document_id,
        'file_name': file_name,
        'owner_id': owner_id,
        'chunk_index': chunk_index,
        'total_chunks': total_chunks,
        'text': truncate_utf16(sanitize_text(text), max_text_length),
        'created_at': utc_timestamp(),
    }

    if parent_id is not None:
        metadata['parent_id'] = parent_id

    return metadata


def generate_vector_id(document_id: str, chunk_index: int) -> str:
    """Stable vector id for a chunk: '<document_id>#<chunk_index>'."""
    return f"{document_id}#{chunk_index}"
