"""
Ingestion pipeline: sanitize, chunk, and build vector records.

Sits between extraction (which supplies decoded text) and indexing (which
embeds each record's text and upserts it with its metadata). No I/O happens
here apart from audit logging and optional file loading.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from rag_ingest.audit.logger import AuditLogger, get_audit_logger
from rag_ingest.chunking import SmallToBigChunker, split_text_into_chunks
from rag_ingest.config import IngestConfig
from rag_ingest.loader import (
    DocumentLoader,
    DocumentLoadError,
    MAX_METADATA_TEXT_LENGTH,
    create_document_metadata,
    generate_vector_id,
    load_documents,
)
from rag_ingest.text import sanitize_text, utf16_length

logger = logging.getLogger(__name__)

# (text to embed, text to store, parent id or None)
ChunkTriple = Tuple[str, str, Optional[str]]


class IngestionPipeline:
    """Turns document text into ordered vector records."""

    def __init__(self, config_dict: Dict[str, Any], audit_logger: Optional[AuditLogger] = None):
        """
        Initialize pipeline.

        Args:
            config_dict: Configuration dictionary (validated as IngestConfig)
            audit_logger: Audit logger; built from 'audit_log' when omitted
                and auditing is enabled

        Raises:
            ConfigError: If the chunking configuration is invalid
        """
        self.config = IngestConfig.from_dict(config_dict)
        self.chunking_cfg = self.config.get_chunking_config()
        self.strategy = self.chunking_cfg['strategy']
        self.max_text_length = self.config.get_metadata_config().get('max_text_length', MAX_METADATA_TEXT_LENGTH)
        self.document_dirs = self.config.get_document_dirs()

        audit_cfg = self.config.get_audit_config()
        if audit_logger is None and audit_cfg.get('enabled', True):
            audit_logger = get_audit_logger(audit_cfg)
        self.audit = audit_logger

        self.small_to_big = SmallToBigChunker.from_config(self.chunking_cfg)
        self.loader = DocumentLoader()

    def chunk(self, text: str) -> List[ChunkTriple]:
        """
        Chunk text with the configured strategy.

        Returns:
            (embed_text, stored_text, parent_id) per chunk, in order. The
            flat strategy has no parent windows, so parent_id is None.
        """
        if self.strategy == 'flat':
            return [
                (chunk, chunk, None)
                for chunk in split_text_into_chunks(
                    text, self.chunking_cfg['chunk_size'], self.chunking_cfg['overlap']
                )
            ]

        return [
            (chunk.child_text, chunk.parent_text, chunk.parent_id)
            for chunk in self.small_to_big.chunk(text)
        ]

    def prepare_document(self, document_id: str, file_name: str, owner_id: str,
                         text: str) -> List[Dict[str, Any]]:
        """
        Build vector records for one document.

        Args:
            document_id: Document identifier
            file_name: Original file name
            owner_id: Owning user id
            text: Decoded document text (sanitized here)

        Returns:
            [{'id': str, 'text': str, 'metadata': dict}, ...] ordered by
            chunk_index. 'text' is what gets embedded; metadata['text'] is
            the wider context returned at query time.

        Raises:
            DocumentLoadError: If the text is empty after sanitization
        """
        sanitized = sanitize_text(text)
        original_units = utf16_length(text)
        sanitized_units = utf16_length(sanitized)

        if sanitized_units != original_units and self.audit:
            self.audit.log_text_sanitized(
                document_id=document_id,
                original_length=original_units,
                sanitized_length=sanitized_units,
            )

        if not sanitized.strip():
            if self.audit:
                self.audit.log_error(
                    error_type="empty_document",
                    message="Extracted text is empty",
                    context={'document_id': document_id, 'file_name': file_name},
                )
            raise DocumentLoadError("Extracted text is empty")

        chunks = self.chunk(sanitized)
        total = len(chunks)

        records = []
        for index, (embed_text, stored_text, parent_id) in enumerate(chunks):
            records.append({
                'id': generate_vector_id(document_id, index),
                'text': embed_text,
                'metadata': create_document_metadata(
                    document_id=document_id,
                    file_name=file_name,
                    owner_id=owner_id,
                    chunk_index=index,
                    total_chunks=total,
                    text=stored_text,
                    parent_id=parent_id,
                    max_text_length=self.max_text_length,
                ),
            })

        num_parents = len({parent_id for _, _, parent_id in chunks if parent_id is not None})
        logger.debug("Prepared %d records for document %s", total, document_id)

        if self.audit:
            self.audit.log_document_ingestion(
                document_id=document_id,
                file_name=file_name,
                strategy=self.strategy,
                num_chunks=total,
                num_parents=num_parents,
            )

        return records

    def prepare_file(self, path: str, owner_id: str,
                     document_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Load a text/markdown file and build its vector records.

        Args:
            path: Path to file
            owner_id: Owning user id
            document_id: Document identifier; defaults to the first 16 hex
                characters of the file's SHA256

        Returns:
            Vector records (see prepare_document)
        """
        document = self.loader.load(path)
        if document_id is None:
            document_id = document['hash'][:16]

        return self.prepare_document(
            document_id=document_id,
            file_name=document['file_name'],
            owner_id=owner_id,
            text=document['text'],
        )

    def load_documents(self) -> List[Dict[str, Any]]:
        """Load every supported document under the configured document_dirs."""
        return load_documents(self.document_dirs)
