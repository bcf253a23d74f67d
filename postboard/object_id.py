"""
Postboard: Post Identifiers
===========================

Post ids are 24 lowercase hex characters, laid out like a MongoDB ObjectId:
a 4-byte big-endian creation timestamp (seconds) followed by 8 random bytes.
Ids therefore sort roughly by creation time and never need a database round
trip to allocate.
"""

import re
import secrets
import time

OBJECT_ID_LENGTH = 24

_OBJECT_ID_RE = re.compile(r"[0-9a-fA-F]{24}")


def new_object_id() -> str:
    """Generate a fresh 24-character hex identifier."""
    timestamp = int(time.time()) & 0xFFFFFFFF
    return timestamp.to_bytes(4, "big").hex() + secrets.token_hex(8)


def is_valid_object_id(value: str) -> bool:
    """
    Check that `value` is a well-formed identifier.

    Format check only (exactly 24 hex digits, either case); it says nothing
    about whether a post with this id exists.
    """
    return bool(_OBJECT_ID_RE.fullmatch(value))
