"""
Opaque pagination cursors.

A cursor is the data store's last-evaluated key serialized as JSON and
base64 encoded, so clients can hand it back verbatim to resume a range query.
"""

import base64
import binascii
import json
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def encode_cursor(key_map: Dict[str, Any]) -> str:
    """
    Encode a last-evaluated key as an opaque cursor.

    Args:
        key_map: Flat JSON-serializable key/value mapping

    Returns:
        Base64 cursor string
    """
    payload = json.dumps(key_map, ensure_ascii=False, separators=(',', ':'))
    return base64.b64encode(payload.encode('utf-8')).decode('ascii')


def decode_cursor(cursor: str) -> Optional[Dict[str, Any]]:
    """
    Decode a cursor produced by encode_cursor().

    Malformed cursors are not an error: callers treat None as "start from
    the beginning".

    Returns:
        The key mapping, or None if the cursor cannot be decoded
    """
    try:
        raw = base64.b64decode(cursor, validate=True)
        key_map = json.loads(raw.decode('utf-8'))
    except (binascii.Error, ValueError, TypeError) as e:
        logger.debug("Rejected pagination cursor: %s", e)
        return None

    if not isinstance(key_map, dict):
        logger.debug("Rejected pagination cursor: not a JSON object")
        return None

    return key_map
