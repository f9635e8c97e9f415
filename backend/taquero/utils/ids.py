"""Record ids: ``<prefix>-<epoch millis>-<9 random base36 chars>``.

Ids are generated locally so a record has a stable key before the
spreadsheet ever sees it.
"""

import secrets
import time

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def generate_record_id(prefix: str) -> str:
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(9))
    return f"{prefix}-{millis}-{suffix}"
