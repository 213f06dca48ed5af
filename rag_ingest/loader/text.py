"""Plain text and markdown document loader."""

from pathlib import Path
from typing import Dict, Any, Optional

from rag_ingest.text import sanitize_text
from .base import BaseDocLoader, DocumentLoadError

TEXT_TYPES = ('text/plain', 'text/markdown', 'text/x-markdown')

EXTENSION_CONTENT_TYPES = {
    '.txt': 'text/plain',
    '.md': 'text/markdown',
    '.markdown': 'text/markdown',
}


def decode_document(payload: Optional[bytes], content_type: str) -> str:
    """
    Decode raw document bytes into sanitized text.

    Args:
        payload: Raw bytes as fetched from storage
        content_type: MIME type recorded at upload

    Returns:
        Sanitized text

    Raises:
        DocumentLoadError: "Empty document object" when the stored object has
            no body, "Unsupported content type: <type>" for non-text types
    """
    if payload is None:
        raise DocumentLoadError("Empty document object")

    if content_type not in TEXT_TYPES:
        raise DocumentLoadError(f"Unsupported content type: {content_type}")

    # Lone surrogates in the byte stream come through as U+FFFD; anything
    # that survives as a surrogate code point is removed by sanitize_text.
    return sanitize_text(payload.decode('utf-8', errors='replace'))


class TextDocLoader(BaseDocLoader):
    """Load plain text and markdown files."""

    def load(self, path: str, content_type: Optional[str] = None) -> Dict[str, Any]:
        """
        Load a text or markdown file.

        Args:
            path: Path to file
            content_type: MIME type; inferred from the extension when omitted

        Returns:
            Document dict (see BaseDocLoader.load)

        Raises:
            DocumentLoadError: If file missing or type unsupported
        """
        file_path = Path(path)

        if not file_path.exists():
            raise DocumentLoadError(f"File not found: {path}")

        if content_type is None:
            ext = file_path.suffix.lower()
            if ext not in EXTENSION_CONTENT_TYPES:
                raise DocumentLoadError(f"Unsupported format: {ext}")
            content_type = EXTENSION_CONTENT_TYPES[ext]

        raw = file_path.read_bytes()
        text = decode_document(raw, content_type)

        return self._create_document(
            text=text,
            source_path=str(file_path),
            content_type=content_type,
            raw=raw,
        )
