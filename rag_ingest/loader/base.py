"""
Base document loader interface.

Loaders turn a file into already-decoded, sanitized text. Every loaded
document is described by:
- source_path: original file path
- file_name: base name of the file
- content_type: MIME type used to decode it
- hash: SHA256 of the raw bytes
- text: sanitized text
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Any
import hashlib


class DocumentLoadError(ValueError):
    """Raised when a document cannot be turned into text."""
    pass


class BaseDocLoader(ABC):
    """Abstract base for document loaders."""

    @staticmethod
    def compute_hash(content: bytes) -> str:
        """
        Compute SHA256 hash of raw document bytes.

        Args:
            content: Document bytes

        Returns:
            Hex-encoded SHA256 hash
        """
        return hashlib.sha256(content).hexdigest()

    @abstractmethod
    def load(self, path: str) -> Dict[str, Any]:
        """
        Load document and return its text with descriptive fields.

        Args:
            path: Path to document

        Returns:
            {
                'text': str,
                'source_path': str,
                'file_name': str,
                'content_type': str,
                'hash': str,
            }
        """
        pass

    def _create_document(self, text: str, source_path: str, content_type: str,
                         raw: bytes) -> Dict[str, Any]:
        return {
            'text': text,
            'source_path': source_path,
            'file_name': Path(source_path).name,
            'content_type': content_type,
            'hash': self.compute_hash(raw),
        }
