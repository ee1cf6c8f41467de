"""
Tag Codec.

Converts between a card's list of tags and the JSON text stored in the
`cards.tags` column.

The stored blob is a JSON array of strings. Writes keep at most MAX_TAGS
entries; extra tags are dropped without error. Reads never fail: a blob
that does not parse to a list of strings decodes to an empty list, so one
corrupted row cannot break listing or filtering of the others.

Usage:
    from cardbox.backend.core.tag_codec import decode_tags, encode_tags

    blob = encode_tags(["work", "q3"])   # '["work", "q3"]'
    decode_tags(blob)                    # ['work', 'q3']
    decode_tags("not json")              # []
"""

import json
from collections.abc import Sequence

from cardbox.backend.core.logging import get_logger

logger = get_logger(__name__)

MAX_TAGS = 12
MAX_TAG_LENGTH = 24


def encode_tags(tags: Sequence[str]) -> str:
    """
    Encode tags for storage, keeping only the first MAX_TAGS entries.

    Args:
        tags: Tags in display order

    Returns:
        JSON array text
    """
    return json.dumps(list(tags[:MAX_TAGS]))


def decode_tags(blob: str | None) -> list[str]:
    """
    Decode a stored tag blob.

    Args:
        blob: JSON array text as stored in the database

    Returns:
        Tags in stored order, or an empty list if the blob is malformed
    """
    if blob is None:
        return []

    try:
        value = json.loads(blob)
    except (TypeError, ValueError):
        logger.warning("Undecodable tag blob", extra={"blob": str(blob)[:64]})
        return []

    if not isinstance(value, list) or not all(isinstance(tag, str) for tag in value):
        logger.warning("Tag blob is not a list of strings", extra={"blob": blob[:64]})
        return []

    return value
