"""
RAG ingestion core - Unicode repair and small-to-big chunking.

Turns already-decoded document text into ordered chunk records for a
vector index: child windows are embedded, parent windows are returned as
context.
"""

__version__ = "1.0.0"

from rag_ingest.text import sanitize_text
from rag_ingest.chunking import Chunk, create_small_to_big_chunks, split_text_into_chunks
from rag_ingest.loader import create_document_metadata
from rag_ingest.cursor import encode_cursor, decode_cursor
from rag_ingest.config import IngestConfig, load_config
from rag_ingest.pipeline import IngestionPipeline

__all__ = [
    'Chunk',
    'IngestConfig',
    'IngestionPipeline',
    'create_document_metadata',
    'create_small_to_big_chunks',
    'decode_cursor',
    'encode_cursor',
    'load_config',
    'sanitize_text',
    'split_text_into_chunks',
]
