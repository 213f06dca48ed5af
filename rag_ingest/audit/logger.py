"""
Audit logging for document ingestion.

Each event is one JSON line in an append-only file.
Document text is never logged, only counts and identifiers.
"""

import logging
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional


class AuditLogger:
    """
    Structured audit logger for ingestion runs.

    Features:
    - JSON event logging
    - Chunk and parent window counts per document
    - Sanitization statistics
    - Never logs document text
    """

    def __init__(self, log_file: str = "./audit.log", level: str = "INFO"):
        """
        Initialize audit logger.

        Args:
            log_file: Path to audit log
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
        """
        self.log_file = Path(log_file)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

        self.logger = logging.getLogger("rag_ingest_audit")
        self.logger.setLevel(getattr(logging, level))
        self.logger.propagate = False

        fh = logging.FileHandler(self.log_file, mode='a', encoding='utf-8')
        fh.setLevel(getattr(logging, level))

        # Plain formatter (each line is a JSON event)
        fh.setFormatter(logging.Formatter('%(message)s'))

        # Remove existing handlers to avoid duplicates
        for handler in self.logger.handlers:
            handler.close()
        self.logger.handlers = []
        self.logger.addHandler(fh)

    def _log_event(self, event_dict: Dict[str, Any]):
        """
        Log a structured event as JSON.

        Args:
            event_dict: Event data to log
        """
        event_dict['timestamp'] = datetime.now(timezone.utc).isoformat()
        self.logger.info(json.dumps(event_dict))

    def log_document_ingestion(self, document_id: str, file_name: str, strategy: str,
                               num_chunks: int, num_parents: int, **kwargs):
        """
        Log document ingestion event.

        Args:
            document_id: Document identifier
            file_name: Original file name
            strategy: Chunking strategy (flat, small_to_big)
            num_chunks: Number of chunks created
            num_parents: Number of distinct parent windows
            **kwargs: Additional metadata
        """
        event = {
            "event": "document_ingestion",
            "document_id": document_id,
            "file_name": file_name,
            "strategy": strategy,
            "num_chunks": num_chunks,
            "num_parents": num_parents,
            **kwargs
        }
        self._log_event(event)

    def log_text_sanitized(self, document_id: str, original_length: int,
                           sanitized_length: int, **kwargs):
        """
        Log characters removed by sanitization.

        Only emitted when something was actually removed.
        """
        event = {
            "event": "text_sanitized",
            "document_id": document_id,
            "original_length": original_length,
            "sanitized_length": sanitized_length,
            "removed": original_length - sanitized_length,
            **kwargs
        }
        self._log_event(event)

    def log_error(self, error_type: str, message: str, context: Optional[Dict] = None):
        """
        Log system error.

        Args:
            error_type: Type of error
            message: Error message
            context: Optional context dictionary
        """
        event = {
            "event": "error",
            "error_type": error_type,
            "message": message,
            **(context or {})
        }
        self._log_event(event)


def get_audit_logger(config: Optional[Dict[str, Any]] = None) -> AuditLogger:
    """
    Get configured audit logger instance.

    Args:
        config: Audit config dict with 'file' and 'level' keys

    Returns:
        AuditLogger instance
    """
    if config is None:
        config = {'file': './audit.log', 'level': 'INFO'}

    return AuditLogger(
        log_file=config.get('file', './audit.log'),
        level=config.get('level', 'INFO')
    )
