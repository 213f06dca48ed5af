"""
Small-to-big (parent/child) chunking.

Similarity search runs against small child windows, while the wider parent
window that contains the child is what gets returned as context. Every child
carries the id of its parent window so the index can expand a hit back to
the parent.
"""

import logging
import uuid
from dataclasses import dataclass, asdict
from typing import Callable, Dict, Any, List, Optional

from rag_ingest.text import sanitize_text
from .windows import iter_windows, validate_window

logger = logging.getLogger(__name__)

DEFAULT_PARENT_SIZE = 800
DEFAULT_CHILD_SIZE = 200


def new_parent_id() -> str:
    """Random parent window identifier."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Chunk:
    """A child window together with the parent window it was cut from."""

    parent_id: str
    parent_text: str
    child_text: str
    chunk_index: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def create_small_to_big_chunks(
    text: str,
    parent_size: int = DEFAULT_PARENT_SIZE,
    child_size: int = DEFAULT_CHILD_SIZE,
    parent_overlap: int = 0,
    child_overlap: int = 0,
    id_factory: Optional[Callable[[], str]] = None,
) -> List[Chunk]:
    """
    Split text into parent windows, then each parent into child windows.

    A parent window is never narrower than a child window: if parent_size is
    smaller than child_size it is widened to child_size. Steps between
    windows are clamped to at least one character, so overlaps as large as
    the window itself still make progress.

    Windows are exact slices of the sanitized text. Parent or child windows
    that contain only whitespace are skipped and do not consume a
    chunk_index.

    Args:
        text: Text to chunk. Sanitized before windowing.
        parent_size: Parent (context) window size in characters.
        child_size: Child (search) window size in characters.
        parent_overlap: Characters shared by consecutive parent windows.
        child_overlap: Characters shared by consecutive child windows.
        id_factory: Callable returning a fresh parent id per parent window.
            Defaults to random UUIDs.

    Returns:
        Chunks in document order with chunk_index running 0, 1, 2, ...
        across all parents.
    """
    validate_window(parent_size, parent_overlap, name="parent")
    validate_window(child_size, child_overlap, name="child")
    make_id = id_factory or new_parent_id

    text = sanitize_text(text)
    effective_parent_size = max(parent_size, child_size)

    chunks: List[Chunk] = []
    parent_count = 0

    for parent_start in iter_windows(len(text), effective_parent_size, parent_overlap):
        parent_text = text[parent_start:parent_start + effective_parent_size]
        if not parent_text.strip():
            continue
        parent_id = make_id()
        parent_count += 1

        for child_start in iter_windows(len(parent_text), child_size, child_overlap):
            child_text = parent_text[child_start:child_start + child_size]
            if not child_text.strip():
                continue
            chunks.append(Chunk(
                parent_id=parent_id,
                parent_text=parent_text,
                child_text=child_text,
                chunk_index=len(chunks),
            ))

    logger.debug(
        "Created %d child chunks across %d parent windows (parent=%d, child=%d)",
        len(chunks), parent_count, effective_parent_size, child_size
    )
    return chunks


class SmallToBigChunker:
    """Small-to-big chunker bound to a fixed window configuration."""

    def __init__(self, parent_size: int = DEFAULT_PARENT_SIZE,
                 child_size: int = DEFAULT_CHILD_SIZE,
                 parent_overlap: int = 0, child_overlap: int = 0,
                 id_factory: Optional[Callable[[], str]] = None):
        validate_window(parent_size, parent_overlap, name="parent")
        validate_window(child_size, child_overlap, name="child")
        self.parent_size = parent_size
        self.child_size = child_size
        self.parent_overlap = parent_overlap
        self.child_overlap = child_overlap
        self.id_factory = id_factory

    @classmethod
    def from_config(cls, chunking_cfg: Dict[str, Any]) -> "SmallToBigChunker":
        """Build from the 'chunking' configuration section."""
        return cls(
            parent_size=chunking_cfg.get('parent_size', DEFAULT_PARENT_SIZE),
            child_size=chunking_cfg.get('child_size', DEFAULT_CHILD_SIZE),
            parent_overlap=chunking_cfg.get('parent_overlap', 0),
            child_overlap=chunking_cfg.get('child_overlap', 0),
        )

    def chunk(self, text: str) -> List[Chunk]:
        return create_small_to_big_chunks(
            text,
            parent_size=self.parent_size,
            child_size=self.child_size,
            parent_overlap=self.parent_overlap,
            child_overlap=self.child_overlap,
            id_factory=self.id_factory,
        )
