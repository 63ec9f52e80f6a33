"""
Composite key encoding for the key-value backend.

A key is an ordered sequence of segments such as ``["cookies", id]`` or
``["logs", timestamp, id]``. Every segment is written followed by
KEY_DELIMITER, so the encoded form of a key is a string prefix of another
encoded key only when it is a segment-wise prefix of it:
``["cookies", "1"]`` encodes to ``cookies:1:`` and never matches
``cookies:10:...``.

Integer segments are zero-padded to a fixed width so that lexicographic key
order equals numeric order, which keeps timestamp-keyed collections sorted by
time in the backend.

Segments must not contain KEY_DELIMITER.
"""

from typing import List, Sequence, Union

KEY_DELIMITER = ":"
INT_SEGMENT_WIDTH = 16

KeySegment = Union[str, int]


def _encode_segment(segment: KeySegment, position: int) -> str:
    """Render a single key segment.

    Raises:
        ValueError: If the segment is not a string or a non-negative integer,
            or if it contains KEY_DELIMITER.
    """
    # bool is a subclass of int and would silently encode as 0/1
    if isinstance(segment, bool):
        raise ValueError(f"Key segment {position} must be str or int, got bool")

    if isinstance(segment, int):
        if segment < 0:
            raise ValueError(f"Integer key segment {position} must be non-negative, got {segment}")
        text = str(segment)
        if len(text) > INT_SEGMENT_WIDTH:
            raise ValueError(
                f"Integer key segment {position} exceeds {INT_SEGMENT_WIDTH} digits"
            )
        return text.zfill(INT_SEGMENT_WIDTH)

    if isinstance(segment, str):
        if KEY_DELIMITER in segment:
            raise ValueError(
                f"Key segment {position} ({segment!r}) must not contain separator {KEY_DELIMITER!r}"
            )
        return segment

    raise ValueError(
        f"Key segment {position} must be str or int, got {type(segment).__name__}"
    )


def encode_key(segments: Sequence[KeySegment]) -> str:
    """Encode a key sequence into a single backend key.

    Args:
        segments: Ordered key segments

    Returns:
        The encoded key; an empty sequence encodes to ``""``, which as a scan
        prefix matches every key.
    """
    return "".join(
        _encode_segment(segment, position) + KEY_DELIMITER
        for position, segment in enumerate(segments)
    )


def decode_key(key: str) -> List[str]:
    """Split an encoded key back into its segments.

    Integer segments come back as their zero-padded string form.
    """
    if not key:
        return []
    if not key.endswith(KEY_DELIMITER):
        raise ValueError(f"Malformed key {key!r}: missing trailing {KEY_DELIMITER!r}")
    return key[:-1].split(KEY_DELIMITER)


def is_descendant(key: str, prefix: Sequence[KeySegment]) -> bool:
    """Return True if ``key`` lives under the ``prefix`` key sequence."""
    return key.startswith(encode_key(prefix))
