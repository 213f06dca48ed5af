"""
Unicode repair for extracted document text.

PDF, text and markdown extraction regularly leaves broken UTF-16 surrogate
fragments and stray control characters in the decoded string. Vector indexes
reject both, so every piece of text is passed through sanitize_text() before
it is chunked or stored.
"""

from typing import List

HIGH_SURROGATE_START = 0xD800
HIGH_SURROGATE_END = 0xDBFF
LOW_SURROGATE_START = 0xDC00
LOW_SURROGATE_END = 0xDFFF

# TAB, LF and CR are the only C0 controls kept
ALLOWED_CONTROLS = frozenset((0x09, 0x0A, 0x0D))


def _is_high_surrogate(code: int) -> bool:
    return HIGH_SURROGATE_START <= code <= HIGH_SURROGATE_END


def _is_low_surrogate(code: int) -> bool:
    return LOW_SURROGATE_START <= code <= LOW_SURROGATE_END


def _is_disallowed_control(code: int) -> bool:
    return (code <= 0x1F and code not in ALLOWED_CONTROLS) or code == 0x7F


def _join_surrogates(high: int, low: int) -> str:
    return chr(0x10000 + ((high - HIGH_SURROGATE_START) << 10) + (low - LOW_SURROGATE_START))


def sanitize_text(text: str) -> str:
    """
    Remove invalid Unicode and disallowed control characters.

    A high surrogate immediately followed by a low surrogate is a valid pair
    and is kept, joined into the code point it encodes. Any other surrogate
    is dropped. C0 controls and DEL are dropped except tab, line feed and
    carriage return.

    Args:
        text: Raw decoded text.

    Returns:
        Sanitized text, never longer than the input.
    """
    if not text:
        return ""

    result: List[str] = []
    i = 0
    length = len(text)

    while i < length:
        char = text[i]
        code = ord(char)

        if _is_high_surrogate(code):
            if i + 1 < length and _is_low_surrogate(ord(text[i + 1])):
                result.append(_join_surrogates(code, ord(text[i + 1])))
                i += 2
                continue
            # Lone high surrogate
            i += 1
            continue

        if _is_low_surrogate(code) or _is_disallowed_control(code):
            i += 1
            continue

        result.append(char)
        i += 1

    return "".join(result)


def utf16_length(text: str) -> int:
    """Length of text in UTF-16 code units (astral characters count twice)."""
    return sum(2 if ord(char) > 0xFFFF else 1 for char in text)


def truncate_utf16(text: str, max_units: int) -> str:
    """
    Cut text to at most max_units UTF-16 code units.

    An astral character that would straddle the limit is dropped whole
    rather than split into a lone surrogate.
    """
    if max_units <= 0:
        return ""
    if len(text) <= max_units // 2:
        return text

    units = 0
    for index, char in enumerate(text):
        width = 2 if ord(char) > 0xFFFF else 1
        if units + width > max_units:
            return text[:index]
        units += width

    return text
