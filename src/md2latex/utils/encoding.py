#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/md2latex/utils/encoding.py
"""Character encoding handling for Markdown sources.

Sources are decoded with the configured encoding first. When that fails
chardet guesses the encoding, and latin-1 is the last resort since it
accepts any byte sequence.
"""

from __future__ import annotations

import logging
from typing import IO

import chardet

logger = logging.getLogger(__name__)


def detect_encoding(data: bytes, sample_size: int = 8192, confidence_threshold: float = 0.7) -> str | None:
    """Detect the character encoding of ``data`` using chardet.

    Returns
    -------
    str | None
        Detected encoding name, or None when detection fails or the
        confidence is below ``confidence_threshold``

    """
    result = chardet.detect(data[:sample_size])
    encoding = result.get("encoding") if result else None
    if not encoding:
        logger.debug("chardet: No encoding detected")
        return None

    confidence = result.get("confidence") or 0.0
    logger.debug("chardet detected encoding: %s (confidence: %.2f)", encoding, confidence)
    if confidence < confidence_threshold:
        return None
    return encoding


def decode_text(data: bytes, encoding: str = "utf-8") -> str:
    """Decode ``data``, trying ``encoding``, then chardet, then latin-1.

    Examples
    --------
    >>> decode_text("café".encode("utf-8"))
    'café'

    """
    try:
        return data.decode(encoding)
    except (UnicodeDecodeError, LookupError) as exc:
        logger.debug("Failed to decode with %s: %s", encoding, exc)

    detected = detect_encoding(data)
    if detected:
        try:
            return data.decode(detected)
        except (UnicodeDecodeError, LookupError) as exc:
            logger.debug("Failed to decode with chardet-detected encoding %s: %s", detected, exc)

    logger.warning("Could not decode input as %s, falling back to latin-1", encoding)
    return data.decode("latin-1")


def read_stream_text(stream: IO[bytes] | IO[str], encoding: str = "utf-8") -> str:
    """Read a binary or text stream to the end and return text.

    Raises
    ------
    TypeError
        If ``stream.read()`` returns neither bytes nor str

    """
    content = stream.read()
    if isinstance(content, bytes):
        return decode_text(content, encoding)
    if isinstance(content, str):
        return content
    raise TypeError(f"Stream read() returned unexpected type {type(content).__name__}. Expected bytes or str.")
