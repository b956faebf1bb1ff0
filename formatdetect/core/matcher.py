#!/usr/bin/env python3
"""
Signature matching against a detection window
"""

from collections.abc import Sequence

from ..domain.formats import DetectionPolicy, FormatDefinition, Signature
from ..exceptions import InternalConsistencyError
from ..utils.logger import get_logger
from .window import DetectionWindow

logger = get_logger(__name__)

BytesLike = bytes | bytearray | memoryview


def signature_matches(window_bytes: BytesLike, signature: Signature, min_offset: int) -> bool:
    """Check one signature against a window that starts at absolute min_offset"""
    local_offset = signature.offset - min_offset
    if local_offset < 0:
        raise InternalConsistencyError(
            f"Signature offset {signature.offset} lies before window start {min_offset}; "
            "wrong window calculation or wrong formats data"
        )

    end = local_offset + len(signature.pattern)
    # Truncated windows are a miss, never an error
    if len(window_bytes) < end:
        return False

    return window_bytes[local_offset:end] == signature.pattern


def format_matches(window_bytes: BytesLike, fmt: FormatDefinition, min_offset: int) -> bool:
    """A format matches only when every one of its signatures matches"""
    return all(signature_matches(window_bytes, sig, min_offset) for sig in fmt.signatures)


def match_formats(
    window_bytes: BytesLike,
    formats: Sequence[FormatDefinition],
    window: DetectionWindow,
    policy: DetectionPolicy,
) -> list[FormatDefinition]:
    """
    Evaluate a window against the catalog in declared order

    Args:
        window_bytes: Bytes read starting at absolute offset window.min_offset
        formats: Ordered catalog
        window: Detection window of the catalog
        policy: FIRST_MATCH stops at the first catalog entry that matches

    Returns:
        Matching formats in catalog order; empty when nothing matches
    """
    detected: list[FormatDefinition] = []

    for fmt in formats:
        if not format_matches(window_bytes, fmt, window.min_offset):
            continue

        detected.append(fmt)
        if policy is DetectionPolicy.FIRST_MATCH:
            break

    logger.debug(f"Matched {[fmt.name for fmt in detected]} in {len(window_bytes)} bytes")
    return detected


__all__ = ["match_formats", "format_matches", "signature_matches"]
