"""Document loading and per-chunk metadata."""

import logging
from pathlib import Path
from typing import List, Dict, Any

from .base import BaseDocLoader, DocumentLoadError
from .metadata import (
    MAX_METADATA_TEXT_LENGTH,
    create_document_metadata,
    generate_vector_id,
)
from .text import TextDocLoader, decode_document, EXTENSION_CONTENT_TYPES

logger = logging.getLogger(__name__)


LOADER_MAP = {
    ext: TextDocLoader for ext in EXTENSION_CONTENT_TYPES
}


class DocumentLoader:
    """Unified document loader with auto-detection."""

    def __init__(self):
        """Initialize loaders."""
        self.loaders = {
            ext: loader_class() for ext, loader_class in LOADER_MAP.items()
        }

    def load(self, path: str) -> Dict[str, Any]:
        """
        Load document by auto-detecting format.

        Args:
            path: Path to document file

        Returns:
            Document dict with sanitized text

        Raises:
            DocumentLoadError: If file not found or format not supported
        """
        file_path = Path(path)

        if not file_path.exists():
            raise DocumentLoadError(f"File not found: {path}")

        ext = file_path.suffix.lower()

        if ext not in self.loaders:
            raise DocumentLoadError(f"Unsupported format: {ext}")

        return self.loaders[ext].load(path)

    def load_directory(self, dir_path: str) -> List[Dict[str, Any]]:
        """
        Load all supported documents from directory recursively.

        Files that fail to load are logged and skipped.

        Args:
            dir_path: Directory path

        Returns:
            Loaded documents, sorted by path
        """
        dir_path = Path(dir_path)
        documents = []

        files = sorted(
            file for file in dir_path.rglob('*')
            if file.is_file() and file.suffix.lower() in self.loaders
        )
        for file in files:
            try:
                documents.append(self.load(str(file)))
            except (DocumentLoadError, OSError) as e:
                logger.warning("Failed to load %s: %s", file, e)

        return documents


def load_documents(document_dirs: List[str]) -> List[Dict[str, Any]]:
    """
    Load all documents from the given directories.

    Args:
        document_dirs: Directories to walk, usually IngestConfig.get_document_dirs()

    Returns:
        Loaded documents
    """
    loader = DocumentLoader()
    documents = []

    for doc_dir in document_dirs:
        if not Path(doc_dir).is_dir():
            logger.warning("Document directory not found: %s", doc_dir)
            continue
        documents.extend(loader.load_directory(doc_dir))

    return documents


__all__ = [
    'BaseDocLoader',
    'DocumentLoadError',
    'DocumentLoader',
    'MAX_METADATA_TEXT_LENGTH',
    'TextDocLoader',
    'create_document_metadata',
    'decode_document',
    'generate_vector_id',
    'load_documents',
]
