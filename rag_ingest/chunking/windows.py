"""
Sliding-window stepping shared by the flat and small-to-big chunkers.
"""

from typing import Iterator


def validate_window(size: int, overlap: int, name: str = "chunk") -> None:
    """
    Reject window parameters outside the supported domain.

    Raises:
        ValueError: If size < 1 or overlap < 0.
    """
    if size < 1:
        raise ValueError(f"{name}_size must be >= 1, got {size}")
    if overlap < 0:
        raise ValueError(f"{name}_overlap must be >= 0, got {overlap}")


def window_step(size: int, overlap: int) -> int:
    """Distance between consecutive window starts, never less than 1."""
    return max(1, size - overlap)


def iter_windows(length: int, size: int, overlap: int) -> Iterator[int]:
    """
    Yield window start offsets over a sequence of the given length.

    A sequence that fits in one window yields exactly one window. Longer
    sequences yield windows while the start offset is inside the sequence,
    so the last window may be shorter than size.
    """
    if length <= 0:
        return
    if length <= size:
        yield 0
        return

    step = window_step(size, overlap)
    start = 0
    while start < length:
        yield start
        start += step
